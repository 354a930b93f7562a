import logging
from typing import Optional, Tuple

from pydantic import BaseModel
from pydantic.config import ConfigDict

from app.db.prismic import FetchError
from app.schemas.blog import Page, PostSummary

logger = logging.getLogger(__name__)


class PaginationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: Tuple[PostSummary, ...] = ()
    cursor: Optional[str] = None
    is_loading: bool = False


def initial_state(page: Page) -> PaginationState:
    return PaginationState(items=tuple(page.results), cursor=page.next_cursor)


def can_load_more(state: PaginationState) -> bool:
    return state.cursor is not None and not state.is_loading


def start_loading(state: PaginationState) -> PaginationState:
    return state.model_copy(update={"is_loading": True})


def apply_page(state: PaginationState, page: Page) -> PaginationState:
    """Append a fetched page. Items are not deduplicated; pages never overlap."""
    return PaginationState(
        items=state.items + tuple(page.results),
        cursor=page.next_cursor,
        is_loading=False,
    )


def fail_loading(state: PaginationState) -> PaginationState:
    return state.model_copy(update={"is_loading": False})


class PaginationController:
    def __init__(self, listing, page: Page, ref: Optional[str] = None):
        self.listing = listing
        self.ref = ref
        self.state = initial_state(page)

    @property
    def items(self) -> Tuple[PostSummary, ...]:
        return self.state.items

    @property
    def has_more(self) -> bool:
        return self.state.cursor is not None

    def load_more(self) -> PaginationState:
        if not can_load_more(self.state):
            return self.state

        self.state = start_loading(self.state)
        try:
            page = self.listing.get_page(cursor=self.state.cursor, ref=self.ref)
        except FetchError:
            self.state = fail_loading(self.state)
            raise

        self.state = apply_page(self.state, page)
        logger.debug(
            f"Loaded {len(page.results)} more posts, {len(self.state.items)} total"
        )
        return self.state

    def load_pages(self, count: int) -> PaginationState:
        """Load until ``count`` pages are held or the listing runs out."""
        for _ in range(max(count, 1) - 1):
            if not self.has_more:
                break
            self.load_more()
        return self.state
