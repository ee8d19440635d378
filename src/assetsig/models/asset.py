"""Asset, IP and Port tables.

An asset owns its IP addresses and ports; both child tables cascade on
delete. Signatures are never stored, they are derived on every read.
"""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from assetsig.models.base import Base


class Asset(Base):
    """Host-centric inventory record."""

    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    host: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    comment: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    owner: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )

    ips: Mapped[list["AssetIP"]] = relationship(
        "AssetIP",
        back_populates="asset",
        cascade="all, delete-orphan",
        order_by="AssetIP.id",
    )

    ports: Mapped[list["AssetPort"]] = relationship(
        "AssetPort",
        back_populates="asset",
        cascade="all, delete-orphan",
        order_by="AssetPort.id",
    )

    def __repr__(self) -> str:
        return f"<Asset {self.id} ({self.host})>"


class AssetIP(Base):
    """IP address (or hostname-like text) attached to an asset."""

    __tablename__ = "ips"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    address: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    asset: Mapped["Asset"] = relationship(
        "Asset",
        back_populates="ips",
    )

    def __repr__(self) -> str:
        return f"<AssetIP {self.address}>"


class AssetPort(Base):
    """Port number attached to an asset. Range is not enforced."""

    __tablename__ = "ports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    port: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    asset: Mapped["Asset"] = relationship(
        "Asset",
        back_populates="ports",
    )

    def __repr__(self) -> str:
        return f"<AssetPort {self.port}>"
