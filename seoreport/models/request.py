from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from seoreport.models.report import Report


class AnalyzeRequest(BaseModel):
    # Plain string: malformed URLs are rejected by the fetcher with a 400,
    # not by request validation.
    url: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def coerce_url(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class ExportRequest(BaseModel):
    analysis: Report


class ConversationRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    analysis: Report
    user_name: Optional[str] = Field(
        default=None,
        description="Name used to greet the site owner.",
        examples=["Dana"],
    )
