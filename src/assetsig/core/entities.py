"""Immutable inventory entities.

Entities are built fresh for every request and discarded once the response
is serialized. ``signature`` stays ``None`` until the entity is signed.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IP:
    """Address associated with an asset. Not validated."""

    address: str
    signature: str | None = None


@dataclass(frozen=True, slots=True)
class Port:
    """Port number associated with an asset. Range is not enforced."""

    port: int
    signature: str | None = None


@dataclass(frozen=True, slots=True)
class Asset:
    """Host-centric inventory record with its IPs and ports in retrieval order."""

    id: int
    host: str
    comment: str
    owner: str
    ips: tuple[IP, ...] = ()
    ports: tuple[Port, ...] = ()
    signature: str | None = None

    @property
    def is_signed(self) -> bool:
        """True once the asset and every sub-entity carry a signature."""
        return (
            self.signature is not None
            and all(ip.signature is not None for ip in self.ips)
            and all(port.signature is not None for port in self.ports)
        )
