"""Text-to-image adapters - availability checks against image providers."""

from ladybug_api.adapters.image.http_client import ImageProviderClient, build_image_urls

__all__ = ["ImageProviderClient", "build_image_urls"]
