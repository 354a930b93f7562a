import argparse
import logging
import sys
from pathlib import Path

from app.db.prismic import FetchError, PrismicClient
from app.repos.posts_repo import PrismicPostsRepo
from app.services.listing_service import ListingService
from app.services.post_service import PostService
from app.services.site_builder import build_site
from app.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate the blog as static HTML")
    parser.add_argument("--out", default="dist", help="output directory")
    parser.add_argument(
        "--paths",
        type=int,
        default=settings.STATIC_PATHS_COUNT,
        help="number of newest posts to pre-render",
    )
    parser.add_argument(
        "--static-only",
        action="store_true",
        help=(
            "omit the 'Carregar mais posts' link from the index; that link points at "
            "/?pages=N, which only works when the pages are served by the app"
        ),
    )
    args = parser.parse_args(argv)

    client = PrismicClient(settings.prismic_config)
    try:
        repo = PrismicPostsRepo(client)
        written = build_site(
            ListingService(repo, page_size=settings.POSTS_PAGE_SIZE),
            PostService(repo),
            Path(args.out),
            static_paths=args.paths,
            site_title=settings.SITE_TITLE,
            load_more=not args.static_only,
        )
        logger.info(f"Build completed successfully: {len(written)} pages.")
        return 0
    except FetchError as e:
        logger.error(f"Build failed: {e}", exc_info=True)
        return 1
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
