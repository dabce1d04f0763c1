"""Client identity resolution for rate limiting.

The limiter keys requests by a client identifier. How that identifier is
derived depends on the deployment topology, so it is a pluggable strategy:

- ``direct``: the socket peer address. Correct when clients connect directly.
- ``trusted_proxy``: honours ``X-Forwarded-For`` only when the peer is one of
  the configured proxies. Without that boundary the header is client-controlled
  and any client could pick its own bucket.
"""

from __future__ import annotations

import ipaddress
from typing import Callable, Iterable

from starlette.requests import Request

from ladybug_api.core.errors import ValidationAppError

ClientIdResolver = Callable[[Request], str]

UNKNOWN_CLIENT = "unknown"

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


def direct_address(request: Request) -> str:
    """Return the socket peer address, or ``"unknown"`` when the server does not expose it."""

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def _parse_networks(entries: Iterable[str]) -> list[IPNetwork]:
    networks: list[IPNetwork] = []
    for entry in entries:
        entry = entry.strip()
        if not entry:
            continue
        try:
            networks.append(ipaddress.ip_network(entry, strict=False))
        except ValueError as exc:
            raise ValidationAppError(
                code="invalid_trusted_proxy",
                message=f"Invalid trusted proxy address or network: '{entry}'",
                details={"hint": "Use IP addresses or CIDR networks, e.g. 10.0.0.0/8"},
            ) from exc
    return networks


class TrustedProxyResolver:
    """Resolve the client address behind a chain of trusted reverse proxies.

    ``X-Forwarded-For`` is read right to left (the right-most hop was appended
    by the proxy closest to us). The first hop that is not itself a trusted
    proxy is the client. If the direct peer is not trusted the header is ignored.
    """

    header_name = "x-forwarded-for"

    def __init__(self, trusted_proxies: Iterable[str]) -> None:
        self._networks = _parse_networks(trusted_proxies)

    def is_trusted(self, address: str) -> bool:
        try:
            ip = ipaddress.ip_address(address)
        except ValueError:
            return False
        return any(ip in network for network in self._networks)

    def __call__(self, request: Request) -> str:
        peer = direct_address(request)
        if not self.is_trusted(peer):
            return peer

        header = request.headers.get(self.header_name)
        if not header:
            return peer

        hops = [hop.strip() for hop in header.split(",") if hop.strip()]
        for hop in reversed(hops):
            if not self.is_trusted(hop):
                return hop

        # Every hop is a trusted proxy: the left-most one originated the request.
        return hops[0] if hops else peer


def build_client_id_resolver(strategy: str, trusted_proxies: Iterable[str] = ()) -> ClientIdResolver:
    """Create the resolver selected by configuration.

    Args:
        strategy: ``"direct"`` or ``"trusted_proxy"``.
        trusted_proxies: Proxy addresses/CIDR networks (``trusted_proxy`` only).

    Returns:
        A callable mapping a request to its client identifier.

    Raises:
        ValidationAppError: If the strategy is unknown or a proxy entry is invalid.
    """

    normalized = strategy.strip().lower()
    if normalized == "direct":
        return direct_address
    if normalized == "trusted_proxy":
        return TrustedProxyResolver(trusted_proxies)

    raise ValidationAppError(
        code="unknown_client_id_strategy",
        message=f"Unknown client id strategy: '{strategy}'. Supported: direct, trusted_proxy",
        details={"allowed_values": ["direct", "trusted_proxy"]},
    )
