import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app import dependencies as deps
from app.db.prismic import FetchError, InvalidCursorError, NotFoundError
from app.schemas.blog import Page, ResolvedPost
from app.services.preview import PreviewContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/posts", response_model=Page)
def list_posts(
    cursor: Optional[str] = None,
    listing=Depends(deps.get_listing_service),
    preview: PreviewContext = Depends(deps.get_preview),
):
    """Get one page of post summaries, newest first."""
    try:
        return listing.get_page(cursor=cursor, ref=preview.query_ref())
    except HTTPException:
        raise
    except InvalidCursorError:
        raise HTTPException(status_code=400, detail="Invalid cursor")
    except FetchError as e:
        logger.error(f"Content API error listing posts: {e}")
        raise HTTPException(status_code=502, detail="Failed to load content")
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug}", response_model=ResolvedPost)
def get_post(
    slug: str,
    service=Depends(deps.get_post_service),
    preview: PreviewContext = Depends(deps.get_preview),
):
    """Get a single post by slug with its display fields."""
    try:
        return service.get_post(slug, ref=preview.query_ref())
    except HTTPException:
        raise
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except FetchError as e:
        logger.error(f"Content API error retrieving post {slug}: {e}")
        raise HTTPException(status_code=502, detail="Failed to load content")
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
