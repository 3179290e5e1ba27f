"""
Address Resolver: pick the one address a hosts entry should point at.

Two sources:
1. Ingress load-balancer status: walk the entries in order, the last entry
   carrying an IP (or, failing that, a hostname) wins.
2. Gateway status: look the parent Gateway up by name and take its first
   published address. Lookups are memoized per run, failures included.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from models import LoadBalancerIngress

logger = logging.getLogger(__name__)

# (namespace, name) → first status address, "" when there is none
GatewayLookupFn = Callable[[str, str], str]


def resolve(status_entries: Iterable[LoadBalancerIngress], fallback: str) -> str:
    """Resolve an address from load-balancer status entries, starting at fallback."""
    address = fallback
    for lb in status_entries:
        if lb.ip:
            address = lb.ip
        elif lb.hostname:
            address = lb.hostname
    return address


class GatewayAddressResolver:
    """Memoizing front for a Gateway lookup function. One instance per run."""

    def __init__(self, lookup_fn: GatewayLookupFn):
        self.lookup_fn = lookup_fn
        self._cache: dict[str, str] = {}

    @staticmethod
    def cache_key(namespace: str, name: str) -> str:
        return f"{namespace}/{name}"

    def resolve_gateway(self, namespace: str, name: str) -> str:
        """Return the Gateway's first address, or "" if it has none or the lookup failed."""
        key = self.cache_key(namespace, name)
        if key in self._cache:
            return self._cache[key]

        try:
            address = self.lookup_fn(namespace, name) or ""
        except Exception as e:
            logger.warning("Gateway %s lookup failed: %s", key, e)
            address = ""

        if not address:
            logger.debug("Gateway %s has no address, caching miss", key)
        self._cache[key] = address
        return address

    def resolve(self, parents: Iterable[tuple[str, str]], fallback: str) -> str:
        """
        Resolve a route's address from its parent Gateways, in order.

        Each parent with an address overwrites the running result; parents
        without one leave it untouched.
        """
        address = fallback
        for namespace, name in parents:
            resolved = self.resolve_gateway(namespace, name)
            if resolved:
                address = resolved
        return address

    @property
    def cache(self) -> dict[str, str]:
        return dict(self._cache)
