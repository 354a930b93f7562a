import logging
from pathlib import Path
from typing import List

from app.db.prismic import NotFoundError
from app.services.listing_service import ListingService
from app.services.page_renderer import render_listing, render_post
from app.services.pagination import PaginationController
from app.services.post_service import PostService

logger = logging.getLogger(__name__)


def build_site(
    listing: ListingService,
    posts: PostService,
    out_dir: Path,
    *,
    static_paths: int,
    site_title: str,
    load_more: bool = True,
) -> List[Path]:
    """
    Generate the listing page and the newest ``static_paths`` posts.
    Posts not generated here are rendered on demand by the app.

    The index links further pages as ``/?pages=N``, which only the running app
    serves; pass ``load_more=False`` when the output is hosted on its own.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []

    controller = PaginationController(listing, listing.get_page())
    load_more_href = "/?pages=2" if load_more and controller.has_more else None
    index = out_dir / "index.html"
    index.write_text(
        render_listing(controller.items, site_title=site_title, load_more_href=load_more_href),
        encoding="utf-8",
    )
    written.append(index)

    for slug in posts.list_static_slugs(static_paths):
        try:
            resolved = posts.get_post(slug)
        except NotFoundError:
            logger.warning(f"Post {slug} disappeared during build, skipping")
            continue

        target = out_dir / "post" / slug / "index.html"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_post(resolved, site_title=site_title), encoding="utf-8")
        written.append(target)
        logger.info(f"Generated {target}")

    return written
