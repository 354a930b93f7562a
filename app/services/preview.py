from dataclasses import dataclass
from typing import Optional

PREVIEW_COOKIE = "io.prismic.preview"


@dataclass(frozen=True)
class PreviewContext:
    active: bool = False
    ref: Optional[str] = None

    @classmethod
    def from_token(cls, token: Optional[str]) -> "PreviewContext":
        if not token:
            return cls()
        return cls(active=True, ref=token)

    def query_ref(self) -> Optional[str]:
        """The ref to pass to content queries; None means published content."""
        return self.ref if self.active else None


def resolve_preview_path(repo, token: str, document_id: Optional[str]) -> str:
    """Where to land after entering preview for ``document_id``."""
    if not document_id:
        return "/"
    doc = repo.get_doc(document_id, ref=token)
    if doc and doc.get("type") == "post" and doc.get("uid"):
        return f"/post/{doc['uid']}"
    return "/"
