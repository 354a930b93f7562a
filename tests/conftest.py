from datetime import datetime, timezone

from app.db.prismic import FetchError, NotFoundError
from app.schemas.blog import Page, PostDetail, PostSummary, ResolvedPost


def make_post_doc(
    uid: str,
    *,
    doc_id: str | None = None,
    title: str = "",
    subtitle: str = "",
    author: str = "",
    first: str | None = "2021-03-15T19:25:28+0000",
    last: str | None = None,
    banner: str | None = None,
    content=None,
) -> dict:
    """A Prismic ``post`` document as the REST API returns it."""
    data = {"title": title or uid.title(), "subtitle": subtitle, "author": author}
    if banner is not None:
        data["banner"] = {"url": banner}
    if content is not None:
        data["content"] = content
    return {
        "id": doc_id or f"id-{uid}",
        "uid": uid,
        "type": "post",
        "first_publication_date": first,
        "last_publication_date": last or first,
        "data": data,
    }


def paragraph(text: str, spans=None) -> dict:
    return {"type": "paragraph", "text": text, "spans": spans or []}


class FakeRepo:
    """
    In-memory posts repository. Records the ref passed to every call.
    Documents are kept newest first, like the API orders them.
    """

    def __init__(self, docs=None, *, pages=None, master_ref="master-ref"):
        self.docs = list(docs or [])
        self.pages = pages or {}
        self.master_ref = master_ref
        self.calls = []

    def current_ref(self):
        self.calls.append(("current_ref",))
        return self.master_ref

    def list_post_docs(self, *, ref=None, page_size=20):
        self.calls.append(("list", ref, page_size))
        if None in self.pages:
            return self.pages[None]
        return {"results": self.docs[:page_size], "next_page": None}

    def next_post_docs(self, cursor):
        self.calls.append(("next", cursor))
        return self.pages[cursor]

    def get_post_doc(self, uid, *, ref=None):
        self.calls.append(("get", uid, ref))
        for doc in self.docs:
            if doc["uid"] == uid:
                return doc
        raise NotFoundError(uid)

    def get_doc(self, document_id, *, ref=None):
        self.calls.append(("get_doc", document_id, ref))
        return next((d for d in self.docs if d["id"] == document_id), None)

    def adjacent_post_doc(self, document_id, *, ascending, ref=None):
        self.calls.append(("adjacent", document_id, ascending, ref))
        ids = [d["id"] for d in self.docs]
        index = ids.index(document_id)
        # docs are newest first, so ascending order walks backwards
        neighbour = index - 1 if ascending else index + 1
        if 0 <= neighbour < len(self.docs):
            return self.docs[neighbour]
        return None


class FailingRepo(FakeRepo):
    def list_post_docs(self, *, ref=None, page_size=20):
        raise FetchError("boom")

    def next_post_docs(self, cursor):
        raise FetchError("boom")

    def get_post_doc(self, uid, *, ref=None):
        raise FetchError("boom")


class FakeListingService:
    """
    Serves pre-built pages: ``None`` is the first page, other keys are cursors.
    """

    def __init__(self, pages: dict):
        self.pages = pages
        self.calls = []

    def get_page(self, cursor=None, ref=None):
        self.calls.append((cursor, ref))
        page = self.pages[cursor]
        if isinstance(page, Exception):
            raise page
        return page


class FakePostService:
    def __init__(self, resolved=None, error: Exception | None = None, slugs=None):
        self.resolved = resolved
        self.error = error
        self.slugs = slugs or []
        self.calls = []

    def get_post(self, slug, ref=None):
        self.calls.append((slug, ref))
        if self.error:
            raise self.error
        return self.resolved

    def list_static_slugs(self, limit):
        return self.slugs[:limit]


def summary(uid: str, **kwargs) -> PostSummary:
    return PostSummary(uid=uid, title=kwargs.pop("title", uid.title()), **kwargs)


def page(*uids: str, next_cursor: str | None = None) -> Page:
    return Page(results=[summary(uid) for uid in uids], next_cursor=next_cursor)


def make_resolved(**kwargs) -> ResolvedPost:
    post = PostDetail(
        uid="hello",
        title="Hello <World>",
        author="Ana",
        banner_url=kwargs.pop("banner_url", None),
        first_publication_date=datetime(2021, 3, 15, tzinfo=timezone.utc),
    )
    return ResolvedPost(
        post=post,
        formatted_date="15 mar 2021",
        html="<h2>Intro</h2><p>body</p>",
        reading_time=4,
        **kwargs,
    )
