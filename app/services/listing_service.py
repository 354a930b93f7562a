import logging
from typing import List, Optional

from pydantic import ValidationError

from app.schemas.blog import Page, PostSummary

logger = logging.getLogger(__name__)


class ListingService:
    def __init__(self, repo, page_size: int = 20):
        self.repo = repo
        self.page_size = page_size

    def get_page(self, cursor: Optional[str] = None, ref: Optional[str] = None) -> Page:
        """
        First page of posts (newest first) or, given a cursor, the page it points at.
        The cursor already carries the ref it was issued for.
        """
        if cursor:
            response = self.repo.next_post_docs(cursor)
        else:
            response = self.repo.list_post_docs(ref=ref, page_size=self.page_size)

        results: List[PostSummary] = []
        for doc in response.get("results") or []:
            summary = to_summary(doc)
            if summary:
                results.append(summary)

        return Page(results=results, next_cursor=response.get("next_page") or None)


def to_summary(doc: dict) -> Optional[PostSummary]:
    if not doc.get("uid"):
        logger.warning(f"Skipping post without uid: {doc.get('id')}")
        return None

    data = doc.get("data") or {}
    try:
        return PostSummary(
            uid=doc["uid"],
            first_publication_date=doc.get("first_publication_date"),
            title=field_text(data.get("title")),
            subtitle=field_text(data.get("subtitle")),
            author=field_text(data.get("author")),
        )
    except ValidationError as e:
        logger.warning(f"Failed to map post {doc['uid']}: {e}")
        return None


def field_text(value) -> str:
    """Key text fields arrive as strings, title fields as rich text blocks."""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return " ".join(
            block.get("text") or "" for block in value if isinstance(block, dict)
        )
    return ""
