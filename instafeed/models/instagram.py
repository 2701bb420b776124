import logging
from typing import Any, List, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from instafeed.core.exceptions import FeedParseError

logger = logging.getLogger(__name__)


class HtmlWrap(BaseModel):
    """Start/end markup placed around a rendered fragment."""

    model_config = ConfigDict(frozen=True)

    start: str = "<div>"
    end: str = "</div>"

    def wrap(self, fragment: str) -> str:
        return self.start + fragment + self.end


class FeedConfig(BaseModel):
    """Rendering options for a feed.

    Every field has a default, so a partial override such as
    ``FeedConfig(media_limit=10)`` or ``FeedConfig.model_validate({"mediaLimit": 10})``
    falls back field by field. Instances are frozen; use :meth:`replace` to
    derive a changed copy.
    """

    # misspelled option names are rejected rather than silently ignored
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    media_limit: int = 3
    show_profile_info: bool = True
    wrap_html: HtmlWrap = HtmlWrap()
    wrap_html_items: HtmlWrap = HtmlWrap()
    show_likes: bool = True
    likes_label: str = "likes"
    show_error: bool = True

    @field_validator("wrap_html", "wrap_html_items", mode="before")
    @classmethod
    def _coerce_wrap(cls, value: Any) -> Any:
        # (start, end) pairs are accepted as well as {"start": ..., "end": ...}
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise ValueError("wrap must be a (start, end) pair")
            start, end = value
            return {"start": start, "end": end}
        return value

    @classmethod
    def coerce(cls, value: "FeedConfig | Mapping[str, Any] | None") -> "FeedConfig":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.model_validate(dict(value))

    def replace(self, **changes: Any) -> "FeedConfig":
        """Return a new config with ``changes`` applied; snake_case or camelCase keys."""
        data = self.model_dump(by_alias=True)
        fields = type(self).model_fields
        for key, value in changes.items():
            alias = fields[key].alias if key in fields else key
            data[alias] = value
        return type(self).model_validate(data)


class MediaItem(BaseModel):
    code: str
    thumbnail_src: str = ""
    likes: int = 0


class ProfileFeed(BaseModel):
    username: str
    profile_pic_url: str = ""
    full_name: str = ""
    biography: str = ""
    posts_count: int = 0
    followers_count: int = 0
    following_count: int = 0
    is_private: bool = False
    media: List[MediaItem] = []

    @classmethod
    def from_payload(cls, payload: Any) -> "ProfileFeed":
        """Build a feed from a ``?__a=1`` JSON document.

        Two shapes are understood: the legacy ``{"user": {...}}`` document with
        ``media.nodes`` and the newer ``{"graphql": {"user": {...}}}`` document
        with ``edge_*`` collections.

        Raises:
            FeedParseError: If neither user object is present or the fields
                found there have unusable types.
        """

        if not isinstance(payload, Mapping):
            raise FeedParseError(f"Feed document is not an object: {type(payload).__name__}")

        graphql = payload.get("graphql")
        if isinstance(graphql, Mapping) and isinstance(graphql.get("user"), Mapping):
            builder = cls._from_graphql_user
            user = graphql["user"]
        elif isinstance(payload.get("user"), Mapping):
            builder = cls._from_legacy_user
            user = payload["user"]
        else:
            raise FeedParseError(f"No user object in feed document. Keys: {list(payload.keys())}")

        try:
            return builder(user)
        except ValidationError as exc:
            raise FeedParseError(f"Invalid user object in feed document: {exc}") from exc

    @classmethod
    def _from_legacy_user(cls, user: Mapping[str, Any]) -> "ProfileFeed":
        media = user.get("media") if isinstance(user.get("media"), Mapping) else {}
        items = []
        for node in _list(media.get("nodes"), "media.nodes"):
            if not isinstance(node, Mapping) or not node.get("code"):
                logger.debug("Skipping media node without code: %s", node)
                continue
            items.append(
                MediaItem(
                    code=node["code"],
                    thumbnail_src=node.get("thumbnail_src") or "",
                    likes=_count(node, "likes"),
                )
            )

        return cls(
            username=user.get("username"),
            profile_pic_url=user.get("profile_pic_url_hd") or user.get("profile_pic_url") or "",
            full_name=user.get("full_name") or "",
            biography=user.get("biography") or "",
            posts_count=_count(user, "media"),
            followers_count=_count(user, "followed_by"),
            following_count=_count(user, "follows"),
            is_private=bool(user.get("is_private", False)),
            media=items,
        )

    @classmethod
    def _from_graphql_user(cls, user: Mapping[str, Any]) -> "ProfileFeed":
        timeline = user.get("edge_owner_to_timeline_media")
        edges = timeline.get("edges") if isinstance(timeline, Mapping) else None
        items = []
        for edge in _list(edges, "edge_owner_to_timeline_media.edges"):
            node = edge.get("node") if isinstance(edge, Mapping) else None
            if not isinstance(node, Mapping) or not node.get("shortcode"):
                logger.debug("Skipping media edge without shortcode: %s", edge)
                continue
            items.append(
                MediaItem(
                    code=node["shortcode"],
                    thumbnail_src=node.get("thumbnail_src") or node.get("display_url") or "",
                    likes=_count(node, "edge_liked_by") or _count(node, "edge_media_preview_like"),
                )
            )

        return cls(
            username=user.get("username"),
            profile_pic_url=user.get("profile_pic_url_hd") or user.get("profile_pic_url") or "",
            full_name=user.get("full_name") or "",
            biography=user.get("biography") or "",
            posts_count=_count(user, "edge_owner_to_timeline_media"),
            followers_count=_count(user, "edge_followed_by"),
            following_count=_count(user, "edge_follow"),
            is_private=bool(user.get("is_private", False)),
            media=items,
        )


def _list(value: Any, path: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise FeedParseError(f"Expected a list at {path}, got {type(value).__name__}")
    return value


def _count(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, Mapping):
        return value.get("count") or 0
    return 0
