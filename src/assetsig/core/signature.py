"""Content-derived SHA-256 signatures for assets and their sub-entities.

Signatures are lowercase hex digests and form a compatibility contract
with other consumers, so the inputs below must not change:

* asset: ``host + comment + owner`` concatenated with no separator, so
  ``("ab", "c", "")`` and ``("a", "bc", "")`` collide
* IP: the address text
* port: the decimal text of the port number

The existing ``signature`` field is never part of the hashed input.
"""

import dataclasses
import hashlib

from assetsig.common.exceptions import ConfigurationError
from assetsig.core.entities import IP, Asset, Port

ALGORITHM = "sha256"


def ensure_digest_available() -> None:
    """Fail fast at startup if the hash primitive cannot be used.

    Raises:
        ConfigurationError: If SHA-256 is unavailable in this interpreter.
    """
    try:
        hashlib.new(ALGORITHM)
    except ValueError as e:
        raise ConfigurationError(
            f"Hash algorithm {ALGORITHM} is not available",
            cause=e,
        ) from e


def digest(data: str) -> str:
    """Hex-encoded SHA-256 of the UTF-8 bytes of ``data``."""
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def sign_ip(ip: IP) -> IP:
    return dataclasses.replace(ip, signature=digest(ip.address))


def sign_port(port: Port) -> Port:
    return dataclasses.replace(port, signature=digest(str(port.port)))


def sign_asset(asset: Asset) -> Asset:
    """Return a signed copy of ``asset``.

    The input and its IPs and ports are left untouched; every sub-entity of
    the result is a new signed object.
    """
    return dataclasses.replace(
        asset,
        signature=digest(asset.host + asset.comment + asset.owner),
        ips=tuple(sign_ip(ip) for ip in asset.ips),
        ports=tuple(sign_port(port) for port in asset.ports),
    )
