"""SQLAlchemy declarative models for the relic store."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Base class for all database models."""


class CharacterModel(Base):
    """ORM model for owned characters and their weight presets."""

    __tablename__ = "characters"

    character_id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    alias: Mapped[str | None] = mapped_column(String, nullable=True)
    rarity: Mapped[int] = mapped_column(Integer, nullable=False)
    path: Mapped[str] = mapped_column(String, nullable=False)
    element: Mapped[str] = mapped_column(String, nullable=False)
    base_stats: Mapped[dict] = mapped_column(JSON, nullable=False)

    # presets
    default_weights: Mapped[dict] = mapped_column(JSON, nullable=False)
    weight_presets: Mapped[list] = mapped_column(JSON, default=list)
    active_preset_id: Mapped[str] = mapped_column(String, nullable=False)

    # slot → relic_id
    equipped_relics: Mapped[dict] = mapped_column(JSON, default=dict)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class RelicModel(Base):
    """ORM model for relics. relic_id is the deterministic property hash."""

    __tablename__ = "relics"

    relic_id: Mapped[str] = mapped_column(String, primary_key=True)
    relic_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    set_name: Mapped[str] = mapped_column(String, nullable=False, default="")
    main_stat: Mapped[dict] = mapped_column(JSON, nullable=False)
    sub_stats: Mapped[list] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
