"""
Gateway API Collector: HTTPRoutes and Gateways via the custom-objects API.

The Gateway API is optional in a cluster: if HTTPRoutes cannot be listed the
collector reports it and returns None so the run continues with Ingresses only.
"""

import logging
from typing import Optional

from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from models import HTTPRoute
from parsers import parse_gateway_status, parse_http_route

logger = logging.getLogger(__name__)

GATEWAY_API_GROUP = "gateway.networking.k8s.io"
GATEWAY_API_VERSION = "v1"


class GatewayCollector:
    """Collect HTTPRoutes and look up Gateway addresses."""

    def __init__(self, custom_api: client.CustomObjectsApi,
                 group: str = GATEWAY_API_GROUP, version: str = GATEWAY_API_VERSION):
        self.custom_api = custom_api
        self.group = group
        self.version = version

    def list_http_routes(self) -> Optional[list[HTTPRoute]]:
        """All HTTPRoutes in the cluster, or None when the API is unavailable."""
        try:
            payload = self.custom_api.list_cluster_custom_object(self.group, self.version, "httproutes")
        except ApiException as e:
            logger.warning("Could not list HTTPRoutes (%s %s), skipping Gateway API", e.status, e.reason)
            return None
        except HTTPError as e:
            logger.warning("Could not list HTTPRoutes (%s), skipping Gateway API", e)
            return None

        items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            logger.warning("HTTPRoute list response has no items list, skipping Gateway API")
            return None

        routes: list[HTTPRoute] = []
        for obj in items:
            route, issues = parse_http_route(obj)
            for issue in issues:
                logger.warning("HTTPRoute %s", issue)
            if route is not None:
                routes.append(route)

        logger.info("Found %d HTTPRoute resources", len(routes))
        return routes

    def gateway_address(self, namespace: str, name: str) -> str:
        """First status address of a Gateway, "" if it is missing or has none."""
        try:
            obj = self.custom_api.get_namespaced_custom_object(
                self.group, self.version, namespace, "gateways", name,
            )
        except ApiException as e:
            logger.warning("Could not get Gateway %s/%s: %s %s", namespace, name, e.status, e.reason)
            return ""
        except HTTPError as e:
            logger.warning("Could not get Gateway %s/%s: %s", namespace, name, e)
            return ""

        status, issues = parse_gateway_status(obj)
        for issue in issues:
            logger.warning("Gateway %s", issue)
        return status.first_address
