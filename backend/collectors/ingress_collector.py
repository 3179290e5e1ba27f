"""
Ingress Collector: list networking.k8s.io/v1 Ingresses across all namespaces.

Normalizes the typed client objects to IngressRoute models. A failed list is
fatal for the run.
"""

import logging

from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from collectors import CollectionError
from models import IngressRoute, LoadBalancerIngress

logger = logging.getLogger(__name__)


class IngressCollector:
    """Collect Ingress objects through the typed NetworkingV1 API."""

    def __init__(self, networking_api: client.NetworkingV1Api):
        self.networking_api = networking_api

    def list_ingresses(self) -> list[IngressRoute]:
        try:
            result = self.networking_api.list_ingress_for_all_namespaces()
        except ApiException as e:
            raise CollectionError(f"could not list Ingresses: {e.status} {e.reason}") from e
        except HTTPError as e:
            raise CollectionError(f"could not reach the API server: {e}") from e

        ingresses = [self._to_ingress_route(item) for item in (result.items or [])]
        logger.info("Found %d Ingress resources", len(ingresses))
        return ingresses

    @staticmethod
    def _to_ingress_route(item) -> IngressRoute:
        """Convert a V1Ingress; absent spec/status parts become empty lists."""
        meta = item.metadata
        spec = item.spec
        status = item.status

        hostnames = [rule.host or "" for rule in ((spec.rules if spec else None) or [])]

        lb_status = status.load_balancer if status else None
        load_balancer = [
            LoadBalancerIngress(ip=lb.ip or "", hostname=lb.hostname or "")
            for lb in ((lb_status.ingress if lb_status else None) or [])
        ]

        return IngressRoute(
            name=meta.name or "",
            namespace=meta.namespace or "",
            hostnames=hostnames,
            load_balancer=load_balancer,
        )
