import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.db.prismic import PrismicClient
from app.routers import pages, posts, preview
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.prismic_client = PrismicClient(settings.prismic_config)
    logger.info(f"Content API client ready for {settings.PRISMIC_API_ENDPOINT}")

    try:
        yield
    finally:
        app.state.prismic_client.close()
        logger.info("Content API client closed")


app = FastAPI(
    title=settings.SITE_TITLE,
    description="Blog front-end backed by the Prismic content API",
    lifespan=lifespan,
)

app.include_router(posts.router)
app.include_router(preview.router)
app.include_router(pages.router)


@app.get("/health")
async def health():
    return {"message": "spacetraveling is running"}
