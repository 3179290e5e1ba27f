"""k8s-ingress-hosts: hosts-file entries from cluster Ingress and Gateway API routes."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from kubernetes import client

from aggregator import EntryAggregator
from cluster import ClusterConnection, ClusterConnectionError, connect
from collectors import CollectionError, HostEntry
from collectors.gateway_collector import GatewayCollector
from collectors.ingress_collector import IngressCollector
from config import ConfigError, RunConfig, build_config
from hosts_file import HostsFileError, apply_hosts_block
from hosts_formatter import render
from resolver import GatewayAddressResolver

logger = logging.getLogger(__name__)

PROJECT_NAME = "k8s-ingress-hosts"
PROJECT_URL = "https://github.com/YoleanAgents/k8s-ingress-hosts"
VERSION = "0.1.0"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROJECT_NAME,
        description="Generate /etc/hosts entries from Kubernetes Ingress and HTTPRoute resources.",
    )
    parser.add_argument("--host-file", dest="host_file", default=None,
                        help="host file location (default: /etc/hosts)")
    parser.add_argument("--write", action="store_true", default=None,
                        help="rewrite the host file instead of printing the entries")
    parser.add_argument("--kubeconfig", default=None,
                        help="path to the kubeconfig file")
    parser.add_argument("--context", default=None,
                        help="kubeconfig context to use")
    parser.add_argument("--config", dest="config_file", default=None,
                        help="YAML file with defaults for the options above")
    parser.add_argument("--log-level", dest="log_level", default=None,
                        help="DEBUG, INFO, WARNING, ERROR (default: INFO)")
    parser.add_argument("--version", action="store_true",
                        help="show version and exit")
    return parser


def build_collectors(conn: ClusterConnection) -> tuple[IngressCollector, GatewayCollector]:
    return (
        IngressCollector(client.NetworkingV1Api(conn.api_client)),
        GatewayCollector(client.CustomObjectsApi(conn.api_client)),
    )


def collect_entries(ingress_collector: IngressCollector, gateway_collector: GatewayCollector,
                    fallback_host: str) -> list[HostEntry]:
    """Ingresses first (fatal on failure), then HTTPRoutes (skipped if unavailable)."""
    ingresses = ingress_collector.list_ingresses()
    routes = gateway_collector.list_http_routes()

    resolver = GatewayAddressResolver(gateway_collector.gateway_address)
    aggregator = EntryAggregator(fallback_host, resolver)
    return aggregator.aggregate(ingresses, routes)


def execute(cfg: RunConfig) -> int:
    logger.info("Reading k8s ingress resources...")
    conn = connect(cfg)
    ingress_collector, gateway_collector = build_collectors(conn)
    entries = collect_entries(ingress_collector, gateway_collector, conn.fallback_host)

    body = render(entries)
    if cfg.write:
        apply_hosts_block(cfg.host_file, body)
    print(body, end="")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"{PROJECT_NAME}\n url: {PROJECT_URL}\n version: {VERSION}")
        return 0

    try:
        cfg = build_config(
            cli={
                "host_file": args.host_file,
                "write": args.write,
                "kubeconfig": args.kubeconfig,
                "context": args.context,
                "log_level": args.log_level,
            },
            config_file=args.config_file,
        )
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
        logger.error("Invalid configuration: %s", e)
        return 1

    logging.basicConfig(level=cfg.log_level_value, format=LOG_FORMAT)

    try:
        return execute(cfg)
    except (ClusterConnectionError, CollectionError, HostsFileError) as e:
        logger.error("%s", e)
        return 1


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
