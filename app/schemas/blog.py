import logging
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.config import ConfigDict

from app.utils import parse_prismic_date

logger = logging.getLogger(__name__)

HEADING_TYPES = ("heading1", "heading2", "heading3", "heading4", "heading5", "heading6")
TEXT_TYPES = ("paragraph", "preformatted", "list-item", "o-list-item")


class Span(BaseModel):
    start: int
    end: int
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def _data_or_empty(cls, value):
        return value if isinstance(value, dict) else {}


def _is_offset(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class _TextFields(BaseModel):
    text: str = ""
    spans: List[Span] = Field(default_factory=list)

    @field_validator("text", mode="before")
    @classmethod
    def _text_or_empty(cls, value):
        return value if isinstance(value, str) else ""

    @field_validator("spans", mode="before")
    @classmethod
    def _drop_malformed_spans(cls, value):
        if not isinstance(value, list):
            return []
        return [
            span
            for span in value
            if isinstance(span, dict)
            and _is_offset(span.get("start"))
            and _is_offset(span.get("end"))
            and isinstance(span.get("type"), str)
        ]


class HeadingBlock(_TextFields):
    type: Literal["heading1", "heading2", "heading3", "heading4", "heading5", "heading6"]

    @property
    def level(self) -> int:
        return int(self.type[-1])


class TextBlock(_TextFields):
    type: Literal["paragraph", "preformatted", "list-item", "o-list-item"]


class ImageBlock(BaseModel):
    type: Literal["image"]
    url: str = ""
    alt: Optional[str] = None
    dimensions: Dict[str, int] = Field(default_factory=dict)


class EmbedBlock(BaseModel):
    type: Literal["embed"]
    oembed: Dict[str, Any] = Field(default_factory=dict)


class UnknownBlock(BaseModel):
    """Any block kind we do not know how to render. Renders as empty text."""

    model_config = ConfigDict(extra="allow")

    type: str = "unknown"


def _block_kind(value: Any) -> str:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if kind in HEADING_TYPES:
        return "heading"
    if kind in TEXT_TYPES:
        return "text"
    if kind in ("image", "embed"):
        return kind
    return "unknown"


RichTextBlock = Annotated[
    Union[
        Annotated[HeadingBlock, Tag("heading")],
        Annotated[TextBlock, Tag("text")],
        Annotated[ImageBlock, Tag("image")],
        Annotated[EmbedBlock, Tag("embed")],
        Annotated[UnknownBlock, Tag("unknown")],
    ],
    Discriminator(_block_kind),
]

_block_adapter = TypeAdapter(RichTextBlock)


def _block_or_unknown(block: Any):
    """Validate one block; anything malformed renders as empty text."""
    if not isinstance(block, dict):
        return UnknownBlock()
    try:
        return _block_adapter.validate_python(block)
    except ValidationError as e:
        logger.warning(f"Malformed {block.get('type')} block, rendering as empty: {e}")
        return UnknownBlock(original_type=block.get("type"))


class ContentGroup(BaseModel):
    heading: str = ""
    body: List[RichTextBlock] = Field(default_factory=list)

    @field_validator("heading", mode="before")
    @classmethod
    def _heading_or_empty(cls, value):
        return value if isinstance(value, str) else ""

    @field_validator("body", mode="before")
    @classmethod
    def _blocks_or_unknown(cls, value):
        if not isinstance(value, list):
            return []
        return [_block_or_unknown(block) for block in value]


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str
    first_publication_date: Optional[datetime] = None
    title: str = ""
    subtitle: str = ""
    author: str = ""

    @field_validator("first_publication_date", mode="before")
    @classmethod
    def _parse_first_publication(cls, value):
        return parse_prismic_date(value)


class PostDetail(PostSummary):
    last_publication_date: Optional[datetime] = None
    banner_url: Optional[str] = None
    content: List[ContentGroup] = Field(default_factory=list)

    @field_validator("last_publication_date", mode="before")
    @classmethod
    def _parse_last_publication(cls, value):
        return parse_prismic_date(value)


class Page(BaseModel):
    results: List[PostSummary] = Field(default_factory=list)
    next_cursor: Optional[str] = None


class AdjacentPost(BaseModel):
    uid: str
    title: str = ""


class AdjacentPair(BaseModel):
    previous: Optional[AdjacentPost] = None
    next: Optional[AdjacentPost] = None


class ResolvedPost(BaseModel):
    post: PostDetail
    formatted_date: Optional[str] = None
    formatted_last_edit: Optional[str] = None
    html: str = ""
    text: str = ""
    reading_time: int = 0
    adjacent: AdjacentPair = Field(default_factory=AdjacentPair)
    preview: bool = False
