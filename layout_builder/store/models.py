"""
ORM — table des pages (SQLAlchemy, SQLite par défaut).
Le layout est stocké tel quel (chaîne JSON) dans `layout_json`.
"""
from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class PageDB(Base):
    __tablename__ = "pages"
    id:               Mapped[int]           = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    title:            Mapped[str]           = mapped_column(sa.String, nullable=False)
    slug:             Mapped[str]           = mapped_column(sa.String, nullable=False, unique=True, index=True)
    status:           Mapped[str]           = mapped_column(sa.String, default="draft")
    page_type:        Mapped[str]           = mapped_column(sa.String, default="custom")
    show_in_nav:      Mapped[int]           = mapped_column(sa.Integer, default=0)
    description:      Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    meta_description: Mapped[str]           = mapped_column(sa.Text, default="")
    meta_keywords:    Mapped[str]           = mapped_column(sa.Text, default="")
    settings:         Mapped[str]           = mapped_column(sa.Text, default="{}")
    layout_json:      Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    created_at:       Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:       Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
