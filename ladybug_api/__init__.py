"""Ladybug API: small REST utilities behind a per-client rate limiter and a response cache."""

__version__ = "2.2.0"
