import re

import bleach

# Markup the rich text renderer can emit: headings, lists, links, images, embeds.
POST_ALLOWED_TAGS = [
    "p", "br",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "strong", "em", "span",
    "pre", "ul", "ol", "li",
    "a", "img", "div", "iframe",
]

# strict: youtube and vimeo player embeds only
EMBED_SRC_RE = re.compile(
    r"^https://(www\.youtube\.com/embed/[\w-]+|player\.vimeo\.com/video/\d+)(\?.*)?$",
    re.I,
)

IFRAME_ATTRS = {"src", "width", "height", "title", "frameborder", "allow", "allowfullscreen"}


def _allow_iframe_attr(tag: str, name: str, value: str) -> bool:
    if name == "src":
        return bool(EMBED_SRC_RE.match(value or ""))
    return name in IFRAME_ATTRS


POST_ALLOWED_ATTRS = {
    "a": ["href", "target", "rel"],
    "img": ["src", "alt", "width", "height"],
    "p": ["class"],
    "span": ["class"],
    "div": ["class", "data-oembed", "data-oembed-type", "data-oembed-provider"],
    "iframe": _allow_iframe_attr,
}


def sanitize_post_html(html: str) -> str:
    html = (html or "").strip()
    if not html:
        return ""

    return bleach.clean(
        html,
        tags=POST_ALLOWED_TAGS,
        attributes=POST_ALLOWED_ATTRS,
        protocols=["http", "https", "mailto"],
        strip=True,
    )
