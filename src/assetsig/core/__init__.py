"""Row assembly and content signatures for inventory assets."""

from assetsig.core.assembler import AssetRow, assemble_asset, is_port_token, parse_port, split_tokens
from assetsig.core.entities import IP, Asset, Port
from assetsig.core.signature import digest, sign_asset, sign_ip, sign_port

__all__ = [
    "Asset",
    "AssetRow",
    "IP",
    "Port",
    "assemble_asset",
    "digest",
    "is_port_token",
    "parse_port",
    "sign_asset",
    "sign_ip",
    "sign_port",
    "split_tokens",
]
