"""Decode Gateway API custom-object payloads (plain dicts) into internal models.

The dynamic client hands back untyped JSON. Everything that does not match the
expected shape is reported in the returned issue list and left out of the
model; a bad field never discards the rest of the object.
"""

from __future__ import annotations

from typing import Any, Optional

from models import GatewayStatus, HTTPRoute, ParentReference


def _as_dict(value: Any) -> Optional[dict]:
    return value if isinstance(value, dict) else None


def _as_list(value: Any) -> Optional[list]:
    return value if isinstance(value, list) else None


def _object_label(obj: dict) -> str:
    meta = _as_dict(obj.get("metadata")) or {}
    name = meta.get("name") if isinstance(meta.get("name"), str) else "?"
    namespace = meta.get("namespace") if isinstance(meta.get("namespace"), str) else ""
    return f"{namespace}/{name}"


def _parse_parent_ref(raw: Any, label: str, idx: int, issues: list[str]) -> Optional[ParentReference]:
    ref = _as_dict(raw)
    if ref is None:
        issues.append(f"{label}: spec.parentRefs[{idx}] is not an object")
        return None

    name = ref.get("name")
    if not isinstance(name, str) or not name:
        issues.append(f"{label}: spec.parentRefs[{idx}].name missing or not a string")
        return None

    namespace = ref.get("namespace")
    if namespace is not None and not isinstance(namespace, str):
        issues.append(f"{label}: spec.parentRefs[{idx}].namespace is not a string, using route namespace")
        namespace = None

    return ParentReference(name=name, namespace=namespace or None)


def parse_http_route(obj: Any) -> tuple[Optional[HTTPRoute], list[str]]:
    """
    Convert one HTTPRoute dict into an HTTPRoute model.

    Returns (route, issues). route is None only when the object has no usable
    metadata.name or no spec at all.
    """
    issues: list[str] = []

    raw = _as_dict(obj)
    if raw is None:
        return None, ["HTTPRoute item is not an object"]

    label = _object_label(raw)
    meta = _as_dict(raw.get("metadata")) or {}
    name = meta.get("name")
    if not isinstance(name, str) or not name:
        return None, [f"{label}: metadata.name missing"]
    namespace = meta.get("namespace") if isinstance(meta.get("namespace"), str) else ""

    spec = _as_dict(raw.get("spec"))
    if spec is None:
        return None, [f"{label}: spec missing or not an object"]

    hostnames: list[str] = []
    raw_hostnames = spec.get("hostnames")
    if raw_hostnames is not None:
        items = _as_list(raw_hostnames)
        if items is None:
            issues.append(f"{label}: spec.hostnames is not a list")
        else:
            for idx, h in enumerate(items):
                if isinstance(h, str):
                    hostnames.append(h)
                else:
                    issues.append(f"{label}: spec.hostnames[{idx}] is not a string")

    parent_refs: list[ParentReference] = []
    raw_refs = spec.get("parentRefs")
    if raw_refs is not None:
        items = _as_list(raw_refs)
        if items is None:
            issues.append(f"{label}: spec.parentRefs is not a list")
        else:
            for idx, r in enumerate(items):
                ref = _parse_parent_ref(r, label, idx, issues)
                if ref is not None:
                    parent_refs.append(ref)

    route = HTTPRoute(name=name, namespace=namespace, hostnames=hostnames, parent_refs=parent_refs)
    return route, issues


def parse_gateway_status(obj: Any) -> tuple[GatewayStatus, list[str]]:
    """Pull status.addresses[].value out of a Gateway dict."""
    issues: list[str] = []

    raw = _as_dict(obj)
    if raw is None:
        return GatewayStatus(), ["Gateway is not an object"]

    label = _object_label(raw)
    status = _as_dict(raw.get("status"))
    if status is None:
        return GatewayStatus(), [f"{label}: status missing"]

    items = _as_list(status.get("addresses"))
    if items is None:
        return GatewayStatus(), [f"{label}: status.addresses missing or not a list"]

    addresses: list[str] = []
    for idx, a in enumerate(items):
        entry = _as_dict(a)
        if entry is None:
            issues.append(f"{label}: status.addresses[{idx}] is not an object")
            continue
        value = entry.get("value")
        if not isinstance(value, str):
            issues.append(f"{label}: status.addresses[{idx}].value is not a string")
            continue
        addresses.append(value)

    return GatewayStatus(addresses=addresses), issues
