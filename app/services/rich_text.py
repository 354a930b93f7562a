import html
import logging
from typing import List, Sequence

from app.schemas.blog import (
    ContentGroup,
    EmbedBlock,
    HeadingBlock,
    ImageBlock,
    RichTextBlock,
    Span,
    TextBlock,
)

logger = logging.getLogger(__name__)

LIST_TAGS = {"list-item": "ul", "o-list-item": "ol"}
BLOCK_TAGS = {"paragraph": "p", "preformatted": "pre"}


def as_html(blocks: Sequence[RichTextBlock]) -> str:
    """
    Render rich text blocks to HTML. Consecutive list items are grouped into
    a single <ul>/<ol>; unknown blocks render as nothing.
    """
    parts: List[str] = []
    open_list = None

    for block in blocks:
        list_tag = LIST_TAGS.get(block.type) if isinstance(block, TextBlock) else None
        if open_list and open_list != list_tag:
            parts.append(f"</{open_list}>")
            open_list = None
        if list_tag and not open_list:
            parts.append(f"<{list_tag}>")
            open_list = list_tag

        parts.append(_block_html(block))

    if open_list:
        parts.append(f"</{open_list}>")
    return "".join(parts)


def as_text(blocks: Sequence[RichTextBlock], separator: str = " ") -> str:
    return separator.join(
        block.text for block in blocks if isinstance(block, (HeadingBlock, TextBlock))
    )


def content_html(content: Sequence[ContentGroup]) -> str:
    return "".join(
        f"<h2>{_escape(group.heading)}</h2>{as_html(group.body)}" for group in content
    )


def content_text(content: Sequence[ContentGroup]) -> str:
    parts: List[str] = []
    for group in content:
        parts.append(group.heading)
        parts.append(as_text(group.body))
    return " ".join(part for part in parts if part)


def _block_html(block: RichTextBlock) -> str:
    if isinstance(block, HeadingBlock):
        tag = f"h{block.level}"
        return f"<{tag}>{render_spans(block.text, block.spans)}</{tag}>"
    if isinstance(block, TextBlock):
        tag = "li" if block.type in LIST_TAGS else BLOCK_TAGS[block.type]
        return f"<{tag}>{render_spans(block.text, block.spans)}</{tag}>"
    if isinstance(block, ImageBlock):
        if not block.url:
            return ""
        return (
            f'<p class="block-img"><img src="{_attr(block.url)}" '
            f'alt="{_attr(block.alt or "")}" /></p>'
        )
    if isinstance(block, EmbedBlock):
        return _embed_html(block)

    logger.debug(f"Skipping unsupported rich text block: {block.type}")
    return ""


def _embed_html(block: EmbedBlock) -> str:
    oembed = block.oembed
    embed_url = oembed.get("embed_url") or ""
    if not embed_url:
        return ""
    return (
        f'<div data-oembed="{_attr(embed_url)}" '
        f'data-oembed-type="{_attr(oembed.get("type") or "")}" '
        f'data-oembed-provider="{_attr(oembed.get("provider_name") or "")}">'
        f'{oembed.get("html") or ""}</div>'
    )


def render_spans(text: str, spans: Sequence[Span]) -> str:
    valid = sorted(
        (s for s in spans if 0 <= s.start < s.end <= len(text)),
        key=lambda s: (s.start, -s.end),
    )
    return _render_range(text, 0, len(text), valid)


def _render_range(text: str, start: int, end: int, spans: List[Span]) -> str:
    parts: List[str] = []
    cursor = start
    index = 0

    while index < len(spans):
        span = spans[index]
        index += 1
        span_start = max(span.start, cursor)
        span_end = min(span.end, end)
        if span_end <= span_start:
            continue

        # overlapping spans are clipped to their parent
        children = []
        while index < len(spans) and spans[index].start < span_end:
            children.append(spans[index])
            index += 1

        parts.append(_escape(text[cursor:span_start]))
        inner = _render_range(text, span_start, span_end, children)
        parts.append(_wrap(span, inner))
        cursor = span_end

    parts.append(_escape(text[cursor:end]))
    return "".join(parts)


def _wrap(span: Span, inner: str) -> str:
    if span.type == "strong":
        return f"<strong>{inner}</strong>"
    if span.type == "em":
        return f"<em>{inner}</em>"
    if span.type == "label":
        label = span.data.get("label") or ""
        return f'<span class="{_attr(label)}">{inner}</span>'
    if span.type == "hyperlink":
        href = resolve_link(span.data)
        if not href:
            return inner
        if span.data.get("target"):
            return (
                f'<a href="{_attr(href)}" target="{_attr(span.data["target"])}" '
                f'rel="noopener noreferrer">{inner}</a>'
            )
        return f'<a href="{_attr(href)}">{inner}</a>'
    return inner


def resolve_link(data: dict) -> str:
    """Map a Prismic link to a URL; documents resolve to our own routes."""
    if data.get("link_type") == "Document":
        uid = data.get("uid")
        if data.get("type") == "post" and uid:
            return f"/post/{uid}"
        return "/"
    return data.get("url") or ""


def _escape(text: str) -> str:
    return html.escape(text, quote=False).replace("\n", "<br />")


def _attr(value: str) -> str:
    return html.escape(str(value), quote=True)
