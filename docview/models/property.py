# File: /docview/models/property.py | Version: 1.0 | Title: SQLAlchemy model for module Property Schemas
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, Boolean, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from docview.db.base_class import Base
from docview.models.view import gen_uuid


class ModuleProperty(Base):
    __tablename__ = "module_properties"
    __table_args__ = (UniqueConstraint("module_id", "property_id", name="uq_module_property"),)

    pk: Mapped[str] = mapped_column(String, primary_key=True, default=gen_uuid)
    module_id: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    property_id: Mapped[str] = mapped_column(String(100), nullable=False)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    property_type: Mapped[str] = mapped_column(String(30), nullable=False)  # PropertyType value
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    width: Mapped[int] = mapped_column(Integer, nullable=False, default=150)
    visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    frozen: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    options: Mapped[Optional[list[dict[str, Any]]]] = mapped_column(JSON, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
