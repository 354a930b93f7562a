import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from app import dependencies as deps
from app.db.prismic import FetchError, NotFoundError
from app.security import get_api_key
from app.services.page_cache import PageCache
from app.services.page_renderer import (
    render_error,
    render_listing,
    render_placeholder,
    render_post,
)
from app.services.pagination import PaginationController
from app.services.preview import PreviewContext
from app.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter()
MAX_LISTING_PAGES = 50


@router.get("/", response_class=HTMLResponse)
def listing_page(
    pages: int = Query(1, ge=1, le=MAX_LISTING_PAGES),
    listing=Depends(deps.get_listing_service),
    preview: PreviewContext = Depends(deps.get_preview),
    cache: PageCache = Depends(deps.get_page_cache),
):
    """Listing of the newest posts; ``pages`` accumulates that many pages."""

    def render() -> str:
        ref = preview.query_ref()
        controller = PaginationController(listing, listing.get_page(ref=ref), ref=ref)
        controller.load_pages(pages)
        load_more_href = f"/?pages={pages + 1}" if controller.has_more else None
        return render_listing(
            controller.items,
            site_title=settings.SITE_TITLE,
            load_more_href=load_more_href,
            preview=preview.active,
        )

    try:
        if preview.active:
            return HTMLResponse(render())
        return HTMLResponse(cache.get_or_render(f"/?pages={pages}", render))
    except FetchError as e:
        logger.error(f"Failed to load listing: {e}")
        return HTMLResponse(render_error(settings.SITE_TITLE), status_code=502)
    except Exception as e:
        logger.error(f"Unexpected error rendering listing: {e}", exc_info=True)
        return HTMLResponse(render_error(settings.SITE_TITLE), status_code=500)


@router.get("/post/{slug}", response_class=HTMLResponse)
def post_page(
    slug: str,
    service=Depends(deps.get_post_service),
    preview: PreviewContext = Depends(deps.get_preview),
    cache: PageCache = Depends(deps.get_page_cache),
):
    def render() -> str:
        resolved = service.get_post(slug, ref=preview.query_ref())
        return render_post(resolved, site_title=settings.SITE_TITLE)

    try:
        if preview.active:
            return HTMLResponse(render())
        return HTMLResponse(cache.get_or_render(f"/post/{slug}", render))
    except NotFoundError:
        # content may not exist yet; render the fallback state
        logger.info(f"Post {slug} not found, rendering placeholder")
        return HTMLResponse(render_placeholder(settings.SITE_TITLE), status_code=404)
    except FetchError as e:
        logger.error(f"Failed to load post {slug}: {e}")
        return HTMLResponse(render_error(settings.SITE_TITLE), status_code=502)
    except Exception as e:
        logger.error(f"Unexpected error rendering post {slug}: {e}", exc_info=True)
        return HTMLResponse(render_error(settings.SITE_TITLE), status_code=500)


@router.post("/api/revalidate", dependencies=[Depends(get_api_key)])
def revalidate(cache: PageCache = Depends(deps.get_page_cache)):
    cleared = cache.clear()
    logger.info(f"Cleared {cleared} cached pages")
    return {"revalidated": True, "cleared": cleared}
