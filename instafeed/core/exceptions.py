class InstaFeedError(Exception):
    """Base exception for the feed generator."""


class FeedParseError(InstaFeedError):
    """Raised when a fetched document does not contain the expected profile paths."""
