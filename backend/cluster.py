"""Cluster client bootstrap: API client plus the fallback hostname."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlparse

from kubernetes import client, config

from config import RunConfig

logger = logging.getLogger(__name__)


class ClusterConnectionError(RuntimeError):
    """No usable kubeconfig or in-cluster configuration."""


@dataclass
class ClusterConnection:
    api_client: client.ApiClient
    fallback_host: str      # API server hostname, used when a route has no address


def api_server_hostname(server_url: str) -> str:
    """Hostname part of the API server URL, e.g. https://10.0.0.1:6443 → 10.0.0.1."""
    try:
        hostname = urlparse(server_url).hostname
    except ValueError as e:
        raise ClusterConnectionError(f"invalid API server URL {server_url!r}: {e}") from e
    if not hostname:
        raise ClusterConnectionError(f"API server URL {server_url!r} has no hostname")
    return hostname


def connect(cfg: RunConfig) -> ClusterConnection:
    """
    Build an API client from the kubeconfig, falling back to in-cluster config
    when no kubeconfig was given and none is found at the default location.
    """
    try:
        api_client = config.new_client_from_config(config_file=cfg.kubeconfig, context=cfg.context)
    except config.ConfigException as e:
        if cfg.kubeconfig or cfg.context:
            raise ClusterConnectionError(f"cannot load kubeconfig: {e}") from e
        logger.info("No kubeconfig found (%s), trying in-cluster configuration", e)
        try:
            config.load_incluster_config()
        except config.ConfigException as e2:
            raise ClusterConnectionError(f"no kubeconfig and not running in a cluster: {e2}") from e2
        api_client = client.ApiClient()

    host = api_server_hostname(api_client.configuration.host)
    logger.debug("Using API server %s (fallback host %s)", api_client.configuration.host, host)
    return ClusterConnection(api_client=api_client, fallback_host=host)
