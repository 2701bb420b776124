"""HTML rendering of a fetched profile feed.

Field values are inserted into the markup as-is; callers embedding untrusted
profiles are responsible for any escaping.
"""

from typing import List

from instafeed.models.instagram import FeedConfig, MediaItem, ProfileFeed

INSTAGRAM_URL = "https://www.instagram.com/"


def render_feed(feed: ProfileFeed, config: FeedConfig) -> str:
    """Render the profile block, then the private notice or the media items."""

    items: List[str] = []

    if config.show_profile_info:
        items.append(config.wrap_html_items.wrap(render_profile(feed)))

    if feed.is_private:
        items.append(config.wrap_html_items.wrap(render_private_notice()))
        return config.wrap_html.wrap("".join(items))

    rendered = 0
    for media in feed.media:
        if rendered >= config.media_limit:
            break
        items.append(config.wrap_html_items.wrap(render_media_item(media, config)))
        rendered += 1

    return config.wrap_html.wrap("".join(items))


def render_profile(feed: ProfileFeed) -> str:
    profile_link = f"{INSTAGRAM_URL}{feed.username}/"
    counts = (
        '<div class="profile-counts">'
        f'<p class="profile-post-count">{feed.posts_count}<span class="profile-post-count-label">posts</span></p>'
        f'<p class="profile-followers-count">{feed.followers_count}<span class="profile-followers-label">followers</span></p>'
        f'<p class="profile-following-count">{feed.following_count}<span class="profile-following-label">following</span></p>'
        "</div>"
    )
    parts = [
        f'<img class="profile-picture" src="{feed.profile_pic_url}">',
        f'<p class="profile-username"><a class="profile-username-link" href="{profile_link}">{feed.username}</a></p>',
        counts,
        f'<p class="profile-name">{feed.full_name}</p>',
        f'<p class="profile-biography">{feed.biography}</p>',
    ]
    return '<div class="profile-item">' + "".join(parts) + "</div>"


def render_private_notice() -> str:
    return '<p class="profile-private">This Account is Private</p>'


def render_media_item(media: MediaItem, config: FeedConfig) -> str:
    parts = [
        f'<a class="media-link" href="{INSTAGRAM_URL}p/{media.code}" target="_blank"></a>',
        f'<img class="media-image" src="{media.thumbnail_src}">',
    ]
    if config.show_likes:
        parts.append(f'<p class="media-likes"> {media.likes} {config.likes_label}</p>')
    return '<div class="media-item">' + "".join(parts) + "</div>"


def render_error(username: str) -> str:
    return f"<p class=\"instagram-feed-error\">Couldn't get a feed for username: {username} </p>"
