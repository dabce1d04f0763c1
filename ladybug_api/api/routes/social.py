from fastapi import APIRouter, Query, Request

from ladybug_api.api.cached_route import CachedRoute
from ladybug_api.core.config import UpstreamSettings
from ladybug_api.schemas.social import InstagramDownloadResponse, TwitterScreenshotResponse
from ladybug_api.services import social

router = APIRouter(prefix="/social", tags=["Social"], route_class=CachedRoute)


@router.get("/twitter-screenshot", response_model=TwitterScreenshotResponse)
async def twitter_screenshot(
    request: Request,
    username: str | None = Query(None, description="Twitter handle without the @"),
    theme: str = Query("light", description="light or dark, echoed back"),
) -> TwitterScreenshotResponse:
    """Link to a screenshot of the profile page rendered by the configured screenshot service."""
    upstream: UpstreamSettings = request.app.state.settings.upstream
    return social.twitter_screenshot(
        username,
        theme,
        screenshot_url=upstream.screenshot_url,
        api_token=upstream.screenshot_api_token,
    )


@router.get("/instagram-downloader", response_model=InstagramDownloadResponse)
async def instagram_downloader(
    url: str | None = Query(None, description="Instagram post URL"),
) -> InstagramDownloadResponse:
    return social.instagram_download(url)
