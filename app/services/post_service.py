import logging
from typing import List, Optional

from app.schemas.blog import AdjacentPair, AdjacentPost, PostDetail, ResolvedPost
from app.services.listing_service import field_text
from app.services.rich_text import content_html, content_text
from app.services.sanitize import sanitize_post_html
from app.utils import calculate_reading_time, format_date, format_datetime

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, repo):
        self.repo = repo

    def get_post(self, slug: str, ref: Optional[str] = None) -> ResolvedPost:
        """
        Fetch a post by slug and compute its display fields.
        Raises NotFoundError when the slug is unknown, FetchError on remote failure.
        """
        query_ref = ref or self.repo.current_ref()
        doc = self.repo.get_post_doc(slug, ref=query_ref)
        post = to_detail(doc)

        text = content_text(post.content)
        edited = (
            post.last_publication_date is not None
            and post.last_publication_date != post.first_publication_date
        )

        return ResolvedPost(
            post=post,
            formatted_date=format_date(post.first_publication_date),
            formatted_last_edit=format_datetime(post.last_publication_date) if edited else None,
            html=sanitize_post_html(content_html(post.content)),
            text=text,
            reading_time=calculate_reading_time(text),
            adjacent=self.get_adjacent(doc["id"], ref=query_ref),
            preview=ref is not None,
        )

    def get_adjacent(self, document_id: str, ref: Optional[str] = None) -> AdjacentPair:
        previous = self.repo.adjacent_post_doc(document_id, ascending=True, ref=ref)
        following = self.repo.adjacent_post_doc(document_id, ascending=False, ref=ref)
        return AdjacentPair(previous=_adjacent(previous), next=_adjacent(following))

    def list_static_slugs(self, limit: int) -> List[str]:
        """Newest post uids to generate ahead of time; others render on demand."""
        response = self.repo.list_post_docs(page_size=limit)
        return [doc["uid"] for doc in response.get("results") or [] if doc.get("uid")]


def to_detail(doc: dict) -> PostDetail:
    data = doc.get("data") or {}
    banner = data.get("banner") or {}
    return PostDetail(
        uid=doc.get("uid") or "",
        first_publication_date=doc.get("first_publication_date"),
        last_publication_date=doc.get("last_publication_date"),
        title=field_text(data.get("title")),
        subtitle=field_text(data.get("subtitle")),
        author=field_text(data.get("author")),
        banner_url=banner.get("url") if isinstance(banner, dict) else None,
        content=[group for group in data.get("content") or [] if isinstance(group, dict)],
    )


def _adjacent(doc: Optional[dict]) -> Optional[AdjacentPost]:
    if not doc or not doc.get("uid"):
        return None
    data = doc.get("data") or {}
    return AdjacentPost(uid=doc["uid"], title=field_text(data.get("title")))
