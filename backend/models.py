"""
Data models for k8s-ingress-hosts.

Cluster routing is modeled in two flavours:
- Ingress (networking.k8s.io/v1): hostnames + load-balancer status on the object itself
- HTTPRoute (gateway.networking.k8s.io/v1): hostnames + parent Gateway references,
  the address lives on the referenced Gateway's status
"""

from typing import Optional

from pydantic import BaseModel, Field


# --- Ingress Models ---

class LoadBalancerIngress(BaseModel):
    """One entry of status.loadBalancer.ingress."""
    ip: str = ""
    hostname: str = ""


class IngressRoute(BaseModel):
    name: str
    namespace: str = ""
    hostnames: list[str] = Field(default_factory=list)       # spec.rules[].host
    load_balancer: list[LoadBalancerIngress] = Field(default_factory=list)


# --- Gateway API Models ---

class ParentReference(BaseModel):
    name: str
    namespace: Optional[str] = None    # None → same namespace as the route


class HTTPRoute(BaseModel):
    name: str
    namespace: str = ""
    hostnames: list[str] = Field(default_factory=list)
    parent_refs: list[ParentReference] = Field(default_factory=list)

    @property
    def service_label(self) -> str:
        return f"{self.namespace}/{self.name}"


class GatewayStatus(BaseModel):
    """Addresses published in a Gateway's status, in declaration order."""
    addresses: list[str] = Field(default_factory=list)

    @property
    def first_address(self) -> str:
        return self.addresses[0] if self.addresses else ""
