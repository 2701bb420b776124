import logging
from fastapi import FastAPI

from instafeed.core.config import get_settings
from instafeed.api.routes import instagram as instagram_routes
from instafeed.services.instagram import build_feed_url

logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Embeddable HTML fragments for public Instagram profiles.",
)


@app.get("/health")
def health():
    # reports where feeds are fetched from, with a placeholder handle
    return {
        "status": "ok",
        "environment": settings.environment,
        "feed_url": build_feed_url("{profile}", settings),
    }


app.include_router(
    instagram_routes.router,
    prefix=f"{settings.api_v1_prefix}/instagram",
    tags=["instagram"],
)
logger.debug("Feed route mounted at %s/instagram/feed", settings.api_v1_prefix)
