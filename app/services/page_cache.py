import logging
import time
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class PageCache:
    """
    Rendered pages keyed by path, regenerated once older than ``ttl_seconds``.
    A stale entry is still served when regeneration fails.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._pages: Dict[str, Tuple[float, str]] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self._pages.get(key)
        if entry and self.clock() - entry[0] < self.ttl_seconds:
            return entry[1]
        return None

    def get_or_render(self, key: str, render: Callable[[], str]) -> str:
        cached = self.get(key)
        if cached is not None:
            return cached

        try:
            page = render()
        except Exception:
            stale = self._pages.get(key)
            if stale:
                logger.warning(f"Regeneration of {key} failed, serving stale page")
                return stale[1]
            raise

        self._pages[key] = (self.clock(), page)
        return page

    def clear(self) -> int:
        count = len(self._pages)
        self._pages.clear()
        return count
