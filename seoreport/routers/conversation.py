import logging
from typing import List

from fastapi import APIRouter, Depends, Request

from seoreport.dependencies import get_providers
from seoreport.models.request import ConversationRequest
from seoreport.models.response import ConversationResponse
from seoreport.ratelimit import limiter
from seoreport.services.assistant import Provider, converse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/ai-seo-conversation",
    response_model=ConversationResponse,
    summary="Open a conversation about a report",
)
@limiter.limit("20/minute")
def ai_seo_conversation(
    request: Request,
    body: ConversationRequest,
    providers: List[Provider] = Depends(get_providers),
) -> ConversationResponse:
    """Return an opening message about the report from the first provider that answers.

    Always succeeds: when no provider is configured or all of them fail, a
    templated message built from the report is returned with
    ``provider="fallback"``.
    """
    result = converse(body.analysis, providers, body.user_name)
    logger.info("Conversation for %s answered by %s", body.analysis.url, result.provider)
    return ConversationResponse(response=result.text, provider=result.provider)
