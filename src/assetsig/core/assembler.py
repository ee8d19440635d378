"""Turn flat inventory rows into nested asset entities.

The store returns one row per asset with its IP addresses and ports
pre-aggregated into comma-separated strings. Assembly is a pure
transformation and never drops a row.

Known lossy behaviours, kept for compatibility with existing clients:

* A port token that is not a base-10 integer becomes port ``0`` instead of
  rejecting the row.
* Splitting an empty list string yields one empty token, so an asset with
  no IPs gets a single IP with address ``""`` and an asset with no ports a
  single port ``0``. Pass ``preserve_empty_token=False`` to get empty
  lists instead.
"""

import re
from typing import NamedTuple

from assetsig.core.entities import IP, Asset, Port

DELIMITER = ","
DEFAULT_PORT = 0

# Optional sign followed by ASCII digits, no surrounding whitespace
_PORT_TOKEN = re.compile(r"[+-]?[0-9]+")
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_INT64_DIGITS = len(str(INT64_MAX))


class AssetRow(NamedTuple):
    """One denormalized row as produced by the inventory query."""

    id: int
    host: str
    comment: str
    owner: str
    ip_csv: str | None
    port_csv: str | None


def split_tokens(csv: str | None, preserve_empty_token: bool = True) -> list[str]:
    """Split an aggregated list string on commas.

    ``None`` (no child rows) is treated like the empty string.
    """
    csv = csv or ""
    if not csv and not preserve_empty_token:
        return []
    return csv.split(DELIMITER)


def _parse_int64(token: str) -> int | None:
    if _PORT_TOKEN.fullmatch(token) is None:
        return None
    # Leading zeros are allowed, so only significant digits are bounded
    digits = token.lstrip("+-").lstrip("0")
    if len(digits) > _INT64_DIGITS:
        return None
    value = int(digits or "0")
    if token.startswith("-"):
        value = -value
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def is_port_token(token: str) -> bool:
    """Check whether a token parses as a port without falling back."""
    return _parse_int64(token) is not None


def parse_port(token: str) -> int:
    """Parse a port token, degrading to ``DEFAULT_PORT`` when it is malformed."""
    value = _parse_int64(token)
    return DEFAULT_PORT if value is None else value


def assemble_asset(row: AssetRow, preserve_empty_token: bool = True) -> Asset:
    """Build an unsigned asset from a flat row.

    Args:
        row: Row with comma-joined IP and port lists.
        preserve_empty_token: Keep the single empty token produced by an
            empty list string.

    Returns:
        Asset with IPs and ports in the order they appear in the row.
    """
    return Asset(
        id=row.id,
        host=row.host,
        comment=row.comment,
        owner=row.owner,
        ips=tuple(
            IP(address=token)
            for token in split_tokens(row.ip_csv, preserve_empty_token)
        ),
        ports=tuple(
            Port(port=parse_port(token))
            for token in split_tokens(row.port_csv, preserve_empty_token)
        ),
    )
