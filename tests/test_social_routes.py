"""Social helpers and text-to-image over HTTP."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import httpx
from fastapi.testclient import TestClient

from ladybug_api.adapters.image import ImageProviderClient
from ladybug_api.core.config import UpstreamSettings


def _images(status_code: int) -> ImageProviderClient:
    return ImageProviderClient(
        {"Up": "https://up.test/{prompt}?seed={seed}"},
        client=httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(status_code))),
    )


def test_twitter_screenshot_is_cached(make_app) -> None:
    client = TestClient(make_app())

    first = client.get("/social/twitter-screenshot", params={"username": "ladybug"})
    second = client.get("/social/twitter-screenshot", params={"username": "ladybug"})

    assert first.status_code == 200
    body = first.json()
    assert body["username"] == "ladybug"
    assert body["theme"] == "light"
    assert body["twitterUrl"] == "https://twitter.com/ladybug"
    assert first.headers["X-Cache"] == "MISS"
    assert second.headers["X-Cache"] == "HIT"
    assert second.json() == body


def test_screenshot_url_omits_token_when_unset(make_app) -> None:
    upstream = UpstreamSettings(screenshot_url="https://shots.test/api", screenshot_api_token=None)
    client = TestClient(make_app(upstream=upstream))

    url = client.get("/social/twitter-screenshot", params={"username": "ladybug"}).json()["screenshotUrl"]

    parts = urlsplit(url)
    query = parse_qs(parts.query)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://shots.test/api"
    assert "token" not in query
    assert query["url"] == ["https://twitter.com/ladybug"]
    assert query["format"] == ["png"]


def test_screenshot_url_carries_configured_token(make_app) -> None:
    upstream = UpstreamSettings(screenshot_url="https://shots.test/api", screenshot_api_token="secret-token")
    client = TestClient(make_app(upstream=upstream))

    url = client.get("/social/twitter-screenshot", params={"username": "ladybug"}).json()["screenshotUrl"]

    assert parse_qs(urlsplit(url).query)["token"] == ["secret-token"]


def test_instagram_downloader_returns_demo_payload(make_app) -> None:
    client = TestClient(make_app())

    resp = client.get("/social/instagram-downloader", params={"url": "https://instagram.com/p/abc"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["url"] == "https://instagram.com/p/abc"
    assert body["mediaType"] == "image"
    assert body["downloadUrl"] == "https://instagram.com/p/download/example"
    assert resp.headers["X-Cache"] == "MISS"


def test_missing_parameters_are_rejected(make_app) -> None:
    client = TestClient(make_app())

    for path in ("/social/twitter-screenshot", "/social/instagram-downloader", "/ai/texttoimg"):
        resp = client.get(path)
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "missing_parameter"


def test_texttoimg_is_never_cached(make_app) -> None:
    app = make_app(images=_images(200))
    client = TestClient(app)

    first = client.get("/ai/texttoimg", params={"prompt": "a ladybug"})
    second = client.get("/ai/texttoimg", params={"prompt": "a ladybug"})

    assert first.status_code == 200
    assert first.json()["metadata"]["api"] == "Up"
    assert "X-Cache" not in second.headers
    assert "Cache-Control" not in first.headers
    assert first.json()["imageUrl"] != second.json()["imageUrl"]
    assert len(app.state.response_cache) == 0


def test_texttoimg_fallback_is_marked_no_store(make_app) -> None:
    client = TestClient(make_app(images=_images(503)))

    resp = client.get("/ai/texttoimg", params={"prompt": "a ladybug"})

    assert resp.status_code == 200
    assert resp.json()["metadata"]["source"] == "Fallback"
    assert resp.headers["Cache-Control"] == "no-store"
