import logging
from typing import Any, Dict, Optional

import httpx

from instafeed.core.config import Settings, get_settings
from instafeed.core.exceptions import FeedParseError
from instafeed.models.instagram import ProfileFeed

logger = logging.getLogger(__name__)


def build_feed_url(username: str, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    return f"{settings.instagram_base_url.rstrip('/')}/{username}{settings.instagram_query_string}"


def fetch_feed_payload(
    username: str,
    *,
    client: Optional[httpx.Client] = None,
    settings: Optional[Settings] = None,
) -> Optional[Dict[str, Any]]:
    """Fetch the raw ``?__a=1`` JSON document for an Instagram handle.

    Args:
        username: The Instagram handle to fetch, without the leading ``@``.
        client: Optional HTTP client to issue the request with. When omitted a
            client is created for this single request and closed afterwards.
        settings: Overrides the process settings (base URL, query string,
            timeout, user agent).

    Returns:
        The parsed JSON object, or ``None`` if the request failed, the
        response status was not 200, or the body was not a JSON object.
    """

    settings = settings or get_settings()
    url = build_feed_url(username, settings)
    headers = {
        "User-Agent": settings.instagram_user_agent,
        "Accept": "application/json",
    }

    logger.info("Fetching feed for username=%s from %s", username, url)

    try:
        if client is None:
            with httpx.Client(timeout=settings.request_timeout) as own_client:
                resp = own_client.get(url, headers=headers)
        else:
            resp = client.get(url, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        # InvalidURL covers handles with control characters or oversized URLs
        logger.warning("Feed request for %s failed: %s", username, exc)
        return None

    if resp.status_code != 200:
        logger.warning("Unexpected status code %s for %s", resp.status_code, url)
        logger.debug("Response preview: %s", resp.text[:500])
        return None

    try:
        data = resp.json()
    except ValueError as exc:
        logger.warning("Failed to parse JSON feed for %s: %s", username, exc)
        logger.debug("Response preview: %s", resp.text[:500])
        return None

    if not isinstance(data, dict):
        logger.warning("Feed for %s is not a JSON object: %s", username, type(data).__name__)
        return None

    return data


def fetch_profile_feed(
    username: str,
    *,
    client: Optional[httpx.Client] = None,
    settings: Optional[Settings] = None,
) -> Optional[ProfileFeed]:
    """Fetch and normalize a handle's feed, or ``None`` when it is unavailable."""

    payload = fetch_feed_payload(username, client=client, settings=settings)
    if payload is None:
        return None

    try:
        feed = ProfileFeed.from_payload(payload)
    except FeedParseError as exc:
        logger.warning("Could not read feed document for %s: %s", username, exc)
        return None

    logger.info(
        "Fetched feed for %s (%s media items, private=%s)",
        feed.username,
        len(feed.media),
        feed.is_private,
    )
    return feed
