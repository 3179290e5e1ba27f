"""Route collectors: normalize cluster routing objects to the common HostEntry format."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HostEntry:
    """One hosts-file line: address, domain and the resource that declared it."""
    domain: str
    address: str
    service: str            # ingress name, or namespace/name for HTTPRoutes

    def __str__(self) -> str:
        return f"{self.address}\t{self.domain}\t# {self.service}"


class CollectionError(RuntimeError):
    """Raised when a required resource list could not be fetched from the cluster."""
