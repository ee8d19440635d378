"""API routers."""

from assetsig.api.routers import admin, assets

__all__ = [
    "admin",
    "assets",
]
