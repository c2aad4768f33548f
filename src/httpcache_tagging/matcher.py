"""Request matchers deciding who may issue purge requests."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

import httpx

# Request extension carrying the client address as (host, port), the same
# shape as the "client" entry of an ASGI scope.
CLIENT_EXTENSION = "client"


@runtime_checkable
class RequestMatcher(Protocol):
    """Predicate over inbound requests."""

    def matches(self, request: httpx.Request) -> bool:
        """Return True if the request is allowed."""
        ...


class IpRequestMatcher:
    """Matches requests whose client address is in one of the networks.

    Entries are single addresses or CIDR networks. Requests without client
    information never match.
    """

    def __init__(self, ips: Iterable[str]) -> None:
        self._networks = [ipaddress.ip_network(ip, strict=False) for ip in ips]

    def matches(self, request: httpx.Request) -> bool:
        client = request.extensions.get(CLIENT_EXTENSION)
        if not client:
            return False
        try:
            address = ipaddress.ip_address(client[0])
        except ValueError:
            return False
        return any(address in network for network in self._networks)


class AllowAllMatcher:
    """Matches every request."""

    def matches(self, request: httpx.Request) -> bool:
        return True
