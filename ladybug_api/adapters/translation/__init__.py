"""Translation adapters - proxies to third-party translation services."""

from ladybug_api.adapters.translation.http_client import HttpTranslationClient

__all__ = ["HttpTranslationClient"]
