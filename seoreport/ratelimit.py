from slowapi import Limiter
from slowapi.util import get_remote_address

from seoreport.config import get_settings

# One limiter shared by every router so the app has a single counter store.
limiter = Limiter(key_func=get_remote_address, enabled=get_settings().rate_limit_enabled)
