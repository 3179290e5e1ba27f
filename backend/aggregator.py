"""Entry Aggregator: turn collected routes into HostEntry records."""

from __future__ import annotations

import logging
from typing import Iterable

from collectors import HostEntry
from models import HTTPRoute, IngressRoute
from resolver import GatewayAddressResolver, resolve

logger = logging.getLogger(__name__)


class EntryAggregator:
    """
    Build one HostEntry per declared hostname.

    Ingresses resolve from their own load-balancer status; HTTPRoutes resolve
    through their parent Gateways. Both start from the fallback hostname, so
    an entry's address is never empty.
    """

    def __init__(self, fallback: str, gateway_resolver: GatewayAddressResolver | None = None):
        if not fallback:
            raise ValueError("fallback hostname must not be empty")
        self.fallback = fallback
        self.gateway_resolver = gateway_resolver

    def from_ingresses(self, ingresses: Iterable[IngressRoute]) -> list[HostEntry]:
        entries: list[HostEntry] = []
        for ing in ingresses:
            address = resolve(ing.load_balancer, self.fallback)
            for host in ing.hostnames:
                if not host:
                    logger.debug("Ingress %s/%s: skipping rule without host", ing.namespace, ing.name)
                    continue
                entries.append(HostEntry(domain=host, address=address, service=ing.name))
        return entries

    def from_http_routes(self, routes: Iterable[HTTPRoute]) -> list[HostEntry]:
        if self.gateway_resolver is None:
            raise ValueError("HTTPRoute aggregation needs a gateway resolver")

        entries: list[HostEntry] = []
        for route in routes:
            parents = [(ref.namespace or route.namespace, ref.name) for ref in route.parent_refs]
            address = self.gateway_resolver.resolve(parents, self.fallback)
            for host in route.hostnames:
                if not host:
                    logger.debug("HTTPRoute %s: skipping empty hostname", route.service_label)
                    continue
                entries.append(HostEntry(domain=host, address=address, service=route.service_label))
        return entries

    def aggregate(self, ingresses: Iterable[IngressRoute],
                  routes: Iterable[HTTPRoute] | None = None) -> list[HostEntry]:
        """Ingress entries first, then HTTPRoute entries (if any were collected)."""
        entries = self.from_ingresses(ingresses)
        if routes is not None:
            entries.extend(self.from_http_routes(routes))
        logger.debug("Aggregated %d host entries", len(entries))
        return entries
