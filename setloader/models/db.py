"""
SQLAlchemy ORM models for persistent storage.

The ``cards`` table mirrors CardRecord and adds store-managed identity and
timestamps.
"""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def _new_id() -> str:
    return str(uuid.uuid4())


class CardDB(Base):
    """
    One card printing stored in the database.

    ``scryfall_id`` is unique so re-importing a set updates rows in place.
    """

    __tablename__ = "cards"
    __table_args__ = (UniqueConstraint("scryfall_id", name="uq_cards_scryfall_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    scryfall_id: Mapped[str] = mapped_column(String(36))

    name: Mapped[str] = mapped_column(String(255), index=True)
    mana_cost: Mapped[str | None] = mapped_column(String(100), nullable=True)
    cmc: Mapped[float] = mapped_column(Float, default=0.0)
    type_line: Mapped[str] = mapped_column(String(255))
    colors: Mapped[list[str] | None] = mapped_column(JSON(none_as_null=True), nullable=True)
    color_identity: Mapped[list[str] | None] = mapped_column(JSON(none_as_null=True), nullable=True)
    power: Mapped[str | None] = mapped_column(String(10), nullable=True)
    toughness: Mapped[str | None] = mapped_column(String(10), nullable=True)
    rarity: Mapped[str] = mapped_column(String(20))
    set_code: Mapped[str] = mapped_column(String(10), index=True)
    collector_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    keywords: Mapped[str] = mapped_column(Text, default="")
    image_uris: Mapped[dict[str, Any] | None] = mapped_column(
        JSON(none_as_null=True), nullable=True
    )
    card_object_uri: Mapped[str] = mapped_column(Text, default="")
    scryfall_uri: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<CardDB(name={self.name}, set={self.set_code}, scryfall_id={self.scryfall_id})>"
