# File: /docview/models/record.py | Version: 1.0 | Title: SQLAlchemy model for module records (JSON documents)
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from docview.db.base_class import Base
from docview.models.view import gen_uuid


class ModuleRecord(Base):
    __tablename__ = "module_records"
    __table_args__ = (
        UniqueConstraint("module_id", "owner_id", "id", name="uq_module_record_owner"),
        Index("ix_module_records_scope", "module_id", "owner_id"),
    )

    # Monotonic insertion sequence; records come back in this order
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Record ids are scoped to (module, owner)
    id: Mapped[str] = mapped_column(String, nullable=False, default=gen_uuid)
    module_id: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_id: Mapped[str] = mapped_column(String, nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
