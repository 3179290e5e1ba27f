"""Parsers for loosely-typed cluster payloads."""

from .gateway_api import parse_gateway_status, parse_http_route

__all__ = ["parse_gateway_status", "parse_http_route"]
