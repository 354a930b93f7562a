import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import httpx

logger = logging.getLogger(__name__)

SEARCH_PATH = "/documents/search"


class FetchError(Exception):
    """Raised when the content API cannot be reached or answers with an error."""


class NotFoundError(Exception):
    """Raised when no document matches the requested identifier."""


class InvalidCursorError(FetchError):
    """Raised when a pagination cursor does not point at this repository's search endpoint."""


@dataclass(frozen=True)
class PrismicConfig:
    api_endpoint: str
    access_token: Optional[str] = None
    timeout_seconds: float = 10.0


def at(fragment: str, value: str) -> str:
    """Build an ``at`` predicate, e.g. ``[at(document.type, "post")]``."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'[at({fragment}, "{escaped}")]'


def build_query(predicates: Iterable[str]) -> str:
    return "[" + "".join(predicates) + "]"


class PrismicClient:
    """
    Thin synchronous wrapper around the Prismic REST API v2.
    The caller owns the client and must call close() when done.
    """

    def __init__(
        self, config: PrismicConfig, http_client: Optional[httpx.Client] = None
    ):
        self.config = config
        self.endpoint = config.api_endpoint.rstrip("/")
        self.http = http_client or httpx.Client(
            timeout=httpx.Timeout(config.timeout_seconds)
        )

    def close(self) -> None:
        self.http.close()

    def master_ref(self) -> str:
        api = self._get_json(self.endpoint, self._auth_params())
        refs: List[Dict[str, Any]] = api.get("refs") or []
        for ref in refs:
            if ref.get("isMasterRef"):
                return ref["ref"]
        raise FetchError("Content API did not advertise a master ref")

    def query(
        self,
        predicates: Iterable[str],
        *,
        ref: Optional[str] = None,
        page_size: int = 20,
        fetch: Optional[Iterable[str]] = None,
        orderings: Optional[str] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "ref": ref or self.master_ref(),
            "q": build_query(predicates),
            "pageSize": page_size,
        }
        if fetch:
            params["fetch"] = ",".join(fetch)
        if orderings:
            params["orderings"] = orderings
        if after:
            params["after"] = after
        params.update(self._auth_params())

        return self._get_json(f"{self.endpoint}{SEARCH_PATH}", params)

    def fetch_page(self, cursor: str) -> Dict[str, Any]:
        """Follow a ``next_page`` URL returned by a previous query."""
        self._check_cursor(cursor)
        return self._get_json(cursor)

    def _check_cursor(self, cursor: str) -> None:
        try:
            url = httpx.URL(cursor)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidCursorError("Malformed pagination cursor") from e
        endpoint = httpx.URL(self.endpoint)
        if (
            url.scheme != endpoint.scheme
            or url.host != endpoint.host
            or url.port != endpoint.port
            or url.path != f"{endpoint.path.rstrip('/')}{SEARCH_PATH}"
        ):
            logger.warning(f"Rejected pagination cursor outside {self.endpoint}: {cursor}")
            raise InvalidCursorError("Pagination cursor does not match the content API")

    def get_by_uid(
        self, doc_type: str, uid: str, *, ref: Optional[str] = None
    ) -> Dict[str, Any]:
        response = self.query(
            [at(f"my.{doc_type}.uid", uid)], ref=ref, page_size=1
        )
        results = response.get("results") or []
        if not results:
            raise NotFoundError(f"No {doc_type} document with uid {uid!r}")
        return results[0]

    def get_by_id(self, document_id: str, *, ref: Optional[str] = None) -> Dict[str, Any]:
        response = self.query([at("document.id", document_id)], ref=ref, page_size=1)
        results = response.get("results") or []
        if not results:
            raise NotFoundError(f"No document with id {document_id!r}")
        return results[0]

    def _auth_params(self) -> Dict[str, str]:
        if self.config.access_token:
            return {"access_token": self.config.access_token}
        return {}

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = self.http.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Timed out calling content API {url}: {e}")
            raise FetchError("Content API timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Content API request to {url} failed: {e}")
            raise FetchError("Content API request failed") from e
        except ValueError as e:
            logger.error(f"Content API returned invalid JSON from {url}: {e}")
            raise FetchError("Content API returned an invalid response") from e
