"""SQLAlchemy database models."""

from assetsig.models.base import Base
from assetsig.models.asset import Asset, AssetIP, AssetPort

__all__ = [
    "Base",
    "Asset",
    "AssetIP",
    "AssetPort",
]
