"""Shared fixtures: canned ``?__a=1`` documents and a stubbed HTTP client."""

import httpx
import pytest


def make_legacy_payload(media_count=5, is_private=False, username="alice"):
    nodes = [
        {
            "code": f"CODE{i}",
            "thumbnail_src": f"https://cdn.example.com/thumb{i}.jpg",
            "likes": {"count": 10 + i},
        }
        for i in range(media_count)
    ]
    return {
        "user": {
            "username": username,
            "full_name": "Alice Example",
            "biography": "Photos of things",
            "profile_pic_url_hd": "https://cdn.example.com/alice.jpg",
            "is_private": is_private,
            "media": {"count": 42, "nodes": nodes},
            "followed_by": {"count": 1200},
            "follows": {"count": 300},
        }
    }


@pytest.fixture
def legacy_payload():
    return make_legacy_payload


@pytest.fixture
def stub_client():
    """Return a factory building an ``httpx.Client`` answered by ``handler``.

    Every request seen by the transport is appended to ``client.requests``.
    """

    clients = []

    def factory(handler):
        seen = []

        def transport_handler(request):
            seen.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(transport_handler))
        client.requests = seen
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
