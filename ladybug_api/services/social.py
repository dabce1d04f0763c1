"""Social media helpers: screenshot links and a demo media downloader."""

from __future__ import annotations

from urllib.parse import quote, urlencode

from ladybug_api.schemas.social import InstagramDownloadResponse, TwitterScreenshotResponse
from ladybug_api.services.inputs import require_text

MAX_USERNAME_CHARS = 50
MAX_MEDIA_URL_CHARS = 500

SCREENSHOT_OPTIONS: dict[str, str] = {
    "width": "800",
    "height": "600",
    "format": "png",
    "download": "0",
    "device": "desktop",
    "waitForSelector": ".tweet",
    "fullPage": "false",
}


def build_screenshot_url(screenshot_url: str, target_url: str, api_token: str | None = None) -> str:
    """Screenshot service URL for ``target_url``; the token is only sent when configured."""
    params: dict[str, str] = {}
    if api_token:
        params["token"] = api_token
    params["url"] = target_url
    params.update(SCREENSHOT_OPTIONS)
    return f"{screenshot_url}?{urlencode(params)}"


def twitter_screenshot(
    username: str | None,
    theme: str = "light",
    *,
    screenshot_url: str,
    api_token: str | None = None,
) -> TwitterScreenshotResponse:
    username = require_text(username, "username", max_length=MAX_USERNAME_CHARS)
    twitter_url = f"https://twitter.com/{quote(username, safe='')}"
    return TwitterScreenshotResponse(
        username=username,
        screenshot_url=build_screenshot_url(screenshot_url, twitter_url, api_token),
        theme=theme,
        twitter_url=twitter_url,
        note="Screenshot will be generated automatically",
    )


def instagram_download(url: str | None) -> InstagramDownloadResponse:
    """Demo payload; no request is made to Instagram."""
    url = require_text(url, "url", max_length=MAX_MEDIA_URL_CHARS)
    return InstagramDownloadResponse(
        url=url,
        download_url="https://instagram.com/p/download/example",
        media_type="image",
        note="This is a demo. Real download would require Instagram API access",
    )
