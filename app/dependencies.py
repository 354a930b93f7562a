from fastapi import Depends, Request

from app.db.prismic import PrismicClient
from app.repos.posts_repo import PrismicPostsRepo
from app.services.listing_service import ListingService
from app.services.page_cache import PageCache
from app.services.post_service import PostService
from app.services.preview import PREVIEW_COOKIE, PreviewContext
from app.settings import settings

page_cache = PageCache(ttl_seconds=settings.REVALIDATE_SECONDS)


def get_prismic_client(request: Request) -> PrismicClient:
    """The client is created and closed by the app lifespan."""
    return request.app.state.prismic_client


def get_posts_repo(client=Depends(get_prismic_client)):
    return PrismicPostsRepo(client)


def get_listing_service(repo=Depends(get_posts_repo)):
    return ListingService(repo, page_size=settings.POSTS_PAGE_SIZE)


def get_post_service(repo=Depends(get_posts_repo)):
    return PostService(repo)


def get_preview(request: Request) -> PreviewContext:
    return PreviewContext.from_token(request.cookies.get(PREVIEW_COOKIE))


def get_page_cache() -> PageCache:
    return page_cache
