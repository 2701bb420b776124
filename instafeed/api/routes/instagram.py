import logging
from typing import Iterator, Optional

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from instafeed.core.config import get_settings
from instafeed.feed import InstagramFeed

logger = logging.getLogger(__name__)
router = APIRouter()


def get_http_client() -> Iterator[httpx.Client]:
    with httpx.Client(timeout=get_settings().request_timeout) as client:
        yield client


@router.get("/feed", response_class=HTMLResponse)
def instagram_feed_html(
    profile: str = Query(..., description="Instagram username (without @)"),
    media_limit: Optional[int] = Query(None, description="Maximum number of media items"),
    show_profile_info: Optional[bool] = Query(None),
    show_likes: Optional[bool] = Query(None),
    likes_label: Optional[str] = Query(None),
    show_error: Optional[bool] = Query(None),
    client: httpx.Client = Depends(get_http_client),
):
    logger.info(f"Feed request for profile: {profile}")
    overrides = {
        "media_limit": media_limit,
        "show_profile_info": show_profile_info,
        "show_likes": show_likes,
        "likes_label": likes_label,
        "show_error": show_error,
    }
    feed = InstagramFeed(
        profile,
        {key: value for key, value in overrides.items() if value is not None},
        client=client,
    )
    return HTMLResponse(content=feed.generate_html_feed())
