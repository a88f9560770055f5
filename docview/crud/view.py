# File: /docview/crud/view.py | Version: 2.0 | Title: CRUD helpers for Document Views
from __future__ import annotations

from typing import Callable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from docview.models.view import DocumentView
from docview.schemas.view import View


def _dump(items) -> list:
    return [i.model_dump(mode="json", by_alias=True) for i in items]


def row_to_view(row: DocumentView, frozen: bool = False) -> View:
    return View.model_validate(
        {
            "id": row.view_id,
            "name": row.name,
            "type": row.view_type,
            "isDefault": bool(row.is_default),
            "frozen": frozen,
            "visibleProperties": list(row.visible_properties or []),
            "groupBy": row.group_by,
            "filters": list(row.filters or []),
            "sorts": list(row.sorts or []),
            "config": dict(row.config or {}),
            "description": row.description,
        }
    )


def apply_view(row: DocumentView, view: View) -> DocumentView:
    row.name = view.name
    row.view_type = view.type.value
    row.is_default = bool(view.is_default)
    row.visible_properties = list(view.visible_properties)
    row.group_by = view.group_by
    row.filters = _dump(view.filters)
    row.sorts = _dump(view.sorts)
    row.config = dict(view.config)
    row.description = view.description
    return row


def create_view(db: Session, module_id: str, owner_id: str, view: View, position: int) -> DocumentView:
    row = DocumentView(module_id=module_id, owner_id=owner_id, view_id=view.id, position=position)
    apply_view(row, view)
    db.add(row)
    db.flush()
    return row


def get_view(db: Session, module_id: str, owner_id: str, view_id: str) -> Optional[DocumentView]:
    return (
        db.query(DocumentView)
        .filter(
            DocumentView.module_id == module_id,
            DocumentView.owner_id == owner_id,
            DocumentView.view_id == view_id,
        )
        .first()
    )


def list_views(db: Session, module_id: str, owner_id: str) -> List[DocumentView]:
    return (
        db.query(DocumentView)
        .filter(DocumentView.module_id == module_id, DocumentView.owner_id == owner_id)
        .order_by(DocumentView.position.asc(), DocumentView.created_at.asc())
        .all()
    )


def list_module_views(db: Session, module_id: str) -> List[DocumentView]:
    """Every owner's views for a module."""
    return db.query(DocumentView).filter(DocumentView.module_id == module_id).all()


def count_views(db: Session, module_id: str, owner_id: str) -> int:
    return (
        db.query(DocumentView)
        .filter(DocumentView.module_id == module_id, DocumentView.owner_id == owner_id)
        .count()
    )


def next_position(db: Session, module_id: str, owner_id: str) -> int:
    current = (
        db.query(func.max(DocumentView.position))
        .filter(DocumentView.module_id == module_id, DocumentView.owner_id == owner_id)
        .scalar()
    )
    return 0 if current is None else current + 1


def clear_default(db: Session, module_id: str, owner_id: str, keep_view_id: Optional[str] = None) -> None:
    q = db.query(DocumentView).filter(
        DocumentView.module_id == module_id,
        DocumentView.owner_id == owner_id,
        DocumentView.is_default.is_(True),
    )
    for row in q.all():
        if row.view_id != keep_view_id:
            row.is_default = False
    db.flush()


def delete_view(db: Session, row: DocumentView) -> None:
    db.delete(row)
    db.flush()


def strip_properties(row: DocumentView, keep: Callable[[str], bool]) -> bool:
    """Drop columns, filters, sorts and groupBy whose property fails ``keep``."""
    visible = [p for p in row.visible_properties or [] if keep(p)]
    filters = [f for f in row.filters or [] if keep(f.get("propertyId"))]
    sorts = [s for s in row.sorts or [] if keep(s.get("propertyId"))]
    group_by = row.group_by if row.group_by is None or keep(row.group_by) else None
    current = (row.visible_properties or [], row.filters or [], row.sorts or [], row.group_by)
    if (visible, filters, sorts, group_by) == current:
        return False
    row.visible_properties = visible
    row.filters = filters
    row.sorts = sorts
    row.group_by = group_by
    return True
