"""Pydantic schemas for Asset API responses."""

from pydantic import BaseModel, ConfigDict, Field


class IPResponse(BaseModel):
    """Signed IP address."""

    model_config = ConfigDict(from_attributes=True)

    address: str
    signature: str = Field(..., min_length=64, max_length=64)


class PortResponse(BaseModel):
    """Signed port."""

    model_config = ConfigDict(from_attributes=True)

    port: int
    signature: str = Field(..., min_length=64, max_length=64)


class AssetResponse(BaseModel):
    """Signed asset with its IPs and ports in retrieval order."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    host: str
    comment: str
    owner: str
    ips: list[IPResponse]
    ports: list[PortResponse]
    signature: str = Field(..., min_length=64, max_length=64)
