from typing import Any, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

LinkType = Literal["internal", "external"]

_FROZEN_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class OpenGraph(BaseModel):
    model_config = _FROZEN_CAMEL

    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    type: Optional[str] = None


class TwitterCard(BaseModel):
    model_config = _FROZEN_CAMEL

    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class ImageSignal(BaseModel):
    model_config = _FROZEN_CAMEL

    src: str
    alt: str = ""  # "" when the attribute is missing


class LinkSignal(BaseModel):
    model_config = _FROZEN_CAMEL

    href: str
    text: str
    type: LinkType


class ExtractedSignals(BaseModel):
    """Every on-page fact the rules and scorer look at, for one fetch of one URL.

    Optional text fields are ``None`` when the tag or attribute is absent or
    blank. Sequences keep document order.
    """

    model_config = _FROZEN_CAMEL

    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    meta_keywords: Optional[str] = None
    canonical_url: Optional[str] = None
    robots: Optional[str] = None
    open_graph: OpenGraph = OpenGraph()
    twitter_card: TwitterCard = TwitterCard()
    h1_tags: Tuple[str, ...] = ()
    h2_tags: Tuple[str, ...] = ()
    h3_tags: Tuple[str, ...] = ()
    images: Tuple[ImageSignal, ...] = ()
    links: Tuple[LinkSignal, ...] = ()
    structured_data: Tuple[Any, ...] = ()
    word_count: int = 0
    load_time: int = 0

    @property
    def images_missing_alt(self) -> int:
        return sum(1 for image in self.images if image.alt == "")

    @property
    def internal_links(self) -> int:
        return sum(1 for link in self.links if link.type == "internal")

    @property
    def external_links(self) -> int:
        return sum(1 for link in self.links if link.type == "external")
