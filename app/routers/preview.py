import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from app import dependencies as deps
from app.db.prismic import FetchError
from app.services.preview import PREVIEW_COOKIE, resolve_preview_path

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
PREVIEW_COOKIE_MAX_AGE = 60 * 30


@router.get("/preview")
def enter_preview(
    token: str = Query(...),
    document_id: Optional[str] = Query(None, alias="documentId"),
    repo=Depends(deps.get_posts_repo),
):
    """Entry point for the CMS preview button: remember the token, open the draft."""
    try:
        path = resolve_preview_path(repo, token, document_id)
    except FetchError as e:
        logger.error(f"Could not resolve preview for {document_id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to load preview")

    response = RedirectResponse(url=path, status_code=307)
    response.set_cookie(
        PREVIEW_COOKIE, token, max_age=PREVIEW_COOKIE_MAX_AGE, httponly=True, samesite="lax"
    )
    return response


@router.get("/exit-preview")
def exit_preview():
    response = RedirectResponse(url="/", status_code=307)
    response.delete_cookie(PREVIEW_COOKIE)
    return response
