# File: /docview/models/view.py | Version: 2.0 | Title: SQLAlchemy model for per-owner Document Views
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from docview.db.base_class import Base


def gen_uuid() -> str:
    return str(uuid.uuid4())


class DocumentView(Base):
    __tablename__ = "document_views"
    __table_args__ = (
        UniqueConstraint("module_id", "owner_id", "view_id", name="uq_view_module_owner"),
        Index("ix_document_views_scope", "module_id", "owner_id"),
    )

    pk: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    view_id: Mapped[str] = mapped_column(String(100), nullable=False)
    module_id: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_id: Mapped[str] = mapped_column(String, nullable=False)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    view_type: Mapped[str] = mapped_column(String(20), nullable=False, default="TABLE")
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    visible_properties: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    group_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    filters: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    sorts: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    config: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )
