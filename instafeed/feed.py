import logging
from typing import Any, Mapping, Optional

import httpx

from instafeed.core.config import Settings
from instafeed.models.instagram import FeedConfig
from instafeed.renderers.html import render_error, render_feed
from instafeed.services.instagram import fetch_profile_feed

logger = logging.getLogger(__name__)


class InstagramFeed:
    """Generates an HTML fragment for a public Instagram account.

    The handle and the config can be replaced between calls; the config
    itself is immutable, so a render always sees one consistent set of
    options.

    Example::

        feed = InstagramFeed("alice", media_limit=6, show_likes=False)
        html = feed.generate_html_feed()
    """

    def __init__(
        self,
        username: str,
        config: "FeedConfig | Mapping[str, Any] | None" = None,
        *,
        client: Optional[httpx.Client] = None,
        settings: Optional[Settings] = None,
        **overrides: Any,
    ):
        self.username = username
        config = FeedConfig.coerce(config)
        self.config = config.replace(**overrides) if overrides else config
        self._client = client
        self._settings = settings

    @property
    def username(self) -> str:
        return self._username

    @username.setter
    def username(self, username: str) -> None:
        self._username = username

    @property
    def config(self) -> FeedConfig:
        return self._config

    @config.setter
    def config(self, config: "FeedConfig | Mapping[str, Any] | None") -> None:
        self._config = FeedConfig.coerce(config)

    def update_config(self, **changes: Any) -> FeedConfig:
        self._config = self._config.replace(**changes)
        return self._config

    def generate_html_feed(self) -> str:
        config = self._config
        username = self._username

        feed = fetch_profile_feed(username, client=self._client, settings=self._settings)
        if feed is None:
            logger.info("No feed available for %s (show_error=%s)", username, config.show_error)
            return render_error(username) if config.show_error else ""

        return render_feed(feed, config)
