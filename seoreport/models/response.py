from typing import List, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from seoreport.models.report import Report


class AnalyzeResponse(BaseModel):
    success: Literal[True] = True
    analysis: Report


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str


class ConversationResponse(BaseModel):
    response: str
    provider: str
    """Name of the provider that produced ``response``, or ``"fallback"``."""


class StoredReportSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    url: str
    overall_score: int
    created_at: str


class StoredReportList(BaseModel):
    reports: List[StoredReportSummary]
