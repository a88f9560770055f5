# File: /docview/crud/properties.py | Version: 1.0 | Title: CRUD helpers for module Property Schemas
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from docview.models.property import ModuleProperty
from docview.schemas.property import Property


def row_to_property(row: ModuleProperty, frozen: Optional[bool] = None) -> Property:
    return Property(
        id=row.property_id,
        name=row.name,
        type=row.property_type,
        order=row.order,
        width=row.width,
        visible=bool(row.visible),
        frozen=bool(row.frozen) if frozen is None else frozen,
        required=bool(row.required),
        options=row.options,
        description=row.description,
    )


def apply_property(row: ModuleProperty, prop: Property) -> ModuleProperty:
    row.name = prop.name
    row.property_type = prop.type.value
    row.order = prop.order
    row.width = prop.width
    row.visible = prop.visible
    row.frozen = prop.frozen
    row.required = prop.required
    row.options = [o.model_dump(mode="json", exclude_none=True) for o in prop.options] if prop.options is not None else None
    row.description = prop.description
    return row


def create_property(db: Session, module_id: str, prop: Property) -> ModuleProperty:
    row = ModuleProperty(module_id=module_id, property_id=prop.id)
    apply_property(row, prop)
    db.add(row)
    db.flush()
    return row


def get_property(db: Session, module_id: str, property_id: str) -> Optional[ModuleProperty]:
    return (
        db.query(ModuleProperty)
        .filter(ModuleProperty.module_id == module_id, ModuleProperty.property_id == property_id)
        .first()
    )


def list_properties(db: Session, module_id: str) -> List[ModuleProperty]:
    return (
        db.query(ModuleProperty)
        .filter(ModuleProperty.module_id == module_id)
        .order_by(ModuleProperty.order.asc(), ModuleProperty.property_id.asc())
        .all()
    )


def next_order(db: Session, module_id: str) -> int:
    current = db.query(func.max(ModuleProperty.order)).filter(ModuleProperty.module_id == module_id).scalar()
    return 0 if current is None else current + 1


def delete_property(db: Session, row: ModuleProperty) -> None:
    db.delete(row)
    db.flush()
