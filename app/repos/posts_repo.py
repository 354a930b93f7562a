from typing import Any, Dict, Optional

from app.db.prismic import NotFoundError, PrismicClient, at

POST_TYPE = "post"
SUMMARY_FIELDS = ("post.title", "post.subtitle", "post.author")
NEWEST_FIRST = "[document.first_publication_date desc]"
OLDEST_FIRST = "[document.first_publication_date]"


class PrismicPostsRepo:
    def __init__(self, client: PrismicClient):
        self.client = client

    def list_post_docs(
        self, *, ref: Optional[str] = None, page_size: int = 20
    ) -> Dict[str, Any]:
        return self.client.query(
            [at("document.type", POST_TYPE)],
            ref=ref,
            page_size=page_size,
            fetch=SUMMARY_FIELDS,
            orderings=NEWEST_FIRST,
        )

    def next_post_docs(self, cursor: str) -> Dict[str, Any]:
        return self.client.fetch_page(cursor)

    def get_post_doc(self, uid: str, *, ref: Optional[str] = None) -> Dict[str, Any]:
        return self.client.get_by_uid(POST_TYPE, uid, ref=ref)

    def get_doc(self, document_id: str, *, ref: Optional[str] = None) -> Optional[dict]:
        try:
            return self.client.get_by_id(document_id, ref=ref)
        except NotFoundError:
            return None

    def adjacent_post_doc(
        self, document_id: str, *, ascending: bool, ref: Optional[str] = None
    ) -> Optional[dict]:
        """The post right after ``document_id`` in publication order."""
        response = self.client.query(
            [at("document.type", POST_TYPE)],
            ref=ref,
            page_size=1,
            fetch=("post.title",),
            orderings=OLDEST_FIRST if ascending else NEWEST_FIRST,
            after=document_id,
        )
        results = response.get("results") or []
        return results[0] if results else None

    def current_ref(self) -> str:
        return self.client.master_ref()
