from datetime import datetime
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SectionName = Literal[
    "meta",
    "pageQuality",
    "linkStructure",
    "performance",
    "crawlability",
    "externalFactors",
]

SECTION_NAMES: tuple = (
    "meta",
    "pageQuality",
    "linkStructure",
    "performance",
    "crawlability",
    "externalFactors",
)

REPORT_SCHEMA_VERSION = 1

_FROZEN_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SectionScore(BaseModel):
    model_config = _FROZEN_CAMEL

    name: SectionName
    score: int = Field(ge=0, le=100)
    sub_metrics: Dict[str, int] = Field(default_factory=dict)
    issues: List[str] = Field(default_factory=list)


class Report(BaseModel):
    """The fully assembled, immutable result of one analysis pass.

    This is the single JSON contract shared by the API response, the report
    store, the PDF renderer and the conversation prompt builder.
    """

    model_config = _FROZEN_CAMEL

    schema_version: int = REPORT_SCHEMA_VERSION
    url: str
    timestamp: str
    overall_score: int = Field(ge=0, le=100)
    sections: Dict[SectionName, SectionScore]
    issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    load_time: int = 0

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @field_validator("timestamp")
    @classmethod
    def check_timestamp(cls, value: str) -> str:
        """Accept ISO-8601 timestamps only; the text is kept exactly as given."""
        datetime.fromisoformat(value.replace("Z", "+00:00"))
        return value
