"""Tests for fetching the ``?__a=1`` document."""

import httpx

from instafeed.core.config import Settings
from instafeed.services.instagram import build_feed_url, fetch_feed_payload, fetch_profile_feed


def test_build_feed_url():
    settings = Settings(instagram_base_url="https://www.instagram.com", instagram_query_string="/?__a=1")

    assert build_feed_url("alice", settings) == "https://www.instagram.com/alice/?__a=1"


def test_build_feed_url_strips_trailing_slash():
    settings = Settings(instagram_base_url="http://proxy.local/", instagram_query_string="/?__a=1")

    assert build_feed_url("alice", settings) == "http://proxy.local/alice/?__a=1"


def test_fetch_returns_payload_on_200(stub_client, legacy_payload):
    payload = legacy_payload(media_count=1)
    client = stub_client(lambda request: httpx.Response(200, json=payload))

    assert fetch_feed_payload("alice", client=client) == payload
    assert len(client.requests) == 1
    request = client.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/alice/"
    assert request.url.params["__a"] == "1"


def test_fetch_returns_none_on_non_200(stub_client):
    for status in (201, 301, 404, 429, 500):
        client = stub_client(lambda request, status=status: httpx.Response(status, json={"user": {}}))
        assert fetch_feed_payload("alice", client=client) is None


def test_fetch_returns_none_on_network_error(stub_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = stub_client(handler)

    assert fetch_feed_payload("alice", client=client) is None


def test_fetch_returns_none_on_invalid_json(stub_client):
    client = stub_client(lambda request: httpx.Response(200, text="<html>login</html>"))

    assert fetch_feed_payload("alice", client=client) is None


def test_fetch_returns_none_on_non_object_json(stub_client):
    client = stub_client(lambda request: httpx.Response(200, json=["not", "an", "object"]))

    assert fetch_feed_payload("alice", client=client) is None


def test_fetch_profile_feed(stub_client, legacy_payload):
    client = stub_client(lambda request: httpx.Response(200, json=legacy_payload(media_count=4)))

    feed = fetch_profile_feed("alice", client=client)

    assert feed is not None
    assert feed.username == "alice"
    assert len(feed.media) == 4


def test_fetch_profile_feed_returns_none_on_unexpected_document(stub_client):
    client = stub_client(lambda request: httpx.Response(200, json={"status": "fail"}))

    assert fetch_profile_feed("alice", client=client) is None


def test_fetch_returns_none_on_invalid_url(stub_client):
    client = stub_client(lambda request: httpx.Response(200, json={}))

    assert fetch_feed_payload("ali\nce", client=client) is None
    assert client.requests == []


def test_fetch_sends_headers(stub_client):
    settings = Settings(instagram_user_agent="feed-tests/1.0")
    client = stub_client(lambda request: httpx.Response(200, json={}))

    fetch_feed_payload("alice", client=client, settings=settings)

    request = client.requests[0]
    assert request.headers["User-Agent"] == "feed-tests/1.0"
    assert request.headers["Accept"] == "application/json"


def test_fetch_without_client_uses_own_client(monkeypatch, legacy_payload):
    real_client = httpx.Client
    created = []
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=legacy_payload(media_count=1))

    def client_factory(**kwargs):
        client = real_client(transport=httpx.MockTransport(handler), **kwargs)
        created.append((client, kwargs))
        return client

    monkeypatch.setattr(httpx, "Client", client_factory)
    settings = Settings(
        instagram_base_url="https://www.instagram.com",
        instagram_query_string="/?__a=1",
        request_timeout=2.5,
        instagram_user_agent="feed-tests/1.0",
    )

    payload = fetch_feed_payload("alice", settings=settings)

    assert payload["user"]["username"] == "alice"
    assert len(created) == 1
    client, kwargs = created[0]
    assert kwargs == {"timeout": 2.5}
    assert client.timeout == httpx.Timeout(2.5)
    assert client.is_closed
    assert str(seen[0].url) == "https://www.instagram.com/alice/?__a=1"
    assert seen[0].headers["User-Agent"] == "feed-tests/1.0"
