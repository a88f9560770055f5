# File: /docview/services/view_store.py | Version: 1.2 | Title: View Store (per-owner views with default/frozen invariants)
"""
Persistence and invariants for an owner's views of a module.

* exactly one default view per (module, owner)
* frozen views keep their name and type; they cannot be deleted
* the last remaining view cannot be deleted
* filters, sorts, visible properties and groupBy are checked against the module's
  property schema on every write
"""
from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from docview.core.errors import ForbiddenError, NotFoundError, ValidationError
from docview.crud import view as crud
from docview.engine.filters import FilterEvaluator
from docview.engine.freeze import FreezeGuard
from docview.engine.registry import ModuleRegistry
from docview.engine.sorting import SortComparator
from docview.models.view import DocumentView
from docview.schemas.property import Property
from docview.schemas.view import View, ViewCreate, ViewUpdate
from docview.services.property_schema import PropertySchema

log = logging.getLogger(__name__)


class ViewStore:
    def __init__(self, db: Session, registry: ModuleRegistry, schema: Optional[PropertySchema] = None):
        self.db = db
        self.registry = registry
        self.guard = FreezeGuard(registry)
        self.schema = schema or PropertySchema(db, registry)

    # ---- Helpers ----

    def _to_view(self, module_id: str, row: DocumentView) -> View:
        return crud.row_to_view(row, frozen=self.guard.is_view_frozen(module_id, row.view_id))

    def _row(self, module_id: str, owner_id: str, view_id: str) -> DocumentView:
        self.ensure_seeded(module_id, owner_id)
        row = crud.get_view(self.db, module_id, owner_id, view_id)
        if row is None:
            raise NotFoundError(f"View '{view_id}' not found in module '{module_id}'")
        return row

    def validate(self, module_id: str, view: View) -> None:
        """Check a view against the module's schema and supported view types."""
        module = self.registry.get(module_id)
        if view.type not in module.supported_view_types:
            raise ValidationError(
                f"View type '{view.type.value}' is not supported by module '{module_id}'",
                details={"supported": [t.value for t in module.supported_view_types]},
            )
        schema: Dict[str, Property] = self.schema.schema_map(module_id)
        for property_id in view.visible_properties:
            if property_id not in schema:
                raise NotFoundError(f"Property '{property_id}' not found")
        if view.group_by is not None and view.group_by not in schema:
            raise NotFoundError(f"Property '{view.group_by}' not found")
        evaluator = FilterEvaluator(schema)
        for flt in view.filters:
            evaluator.validate(flt)
        comparator = SortComparator(schema)
        for sort in view.sorts:
            comparator.validate(sort)

    # ---- Seeding ----

    def ensure_seeded(self, module_id: str, owner_id: str) -> None:
        module = self.registry.get(module_id)
        if crud.count_views(self.db, module_id, owner_id):
            return
        schema = self.schema.schema_map(module_id)
        for position, view in enumerate(module.default_views):
            row = crud.create_view(self.db, module_id, owner_id, view, position)
            # Default views may reference properties since deleted from the shared schema
            if crud.strip_properties(row, lambda pid: pid in schema):
                log.info("Seeded view %s without properties missing from module %s", view.id, module_id)
        self.db.commit()
        log.info("Seeded %d views for owner %s in module %s", len(module.default_views), owner_id, module_id)

    # ---- Reads ----

    def list_views(self, module_id: str, owner_id: str) -> List[View]:
        self.ensure_seeded(module_id, owner_id)
        return [self._to_view(module_id, r) for r in crud.list_views(self.db, module_id, owner_id)]

    def get_view(self, module_id: str, owner_id: str, view_id: str) -> View:
        return self._to_view(module_id, self._row(module_id, owner_id, view_id))

    def get_default_view(self, module_id: str, owner_id: str) -> View:
        views = self.list_views(module_id, owner_id)
        for view in views:
            if view.is_default:
                return view
        if not views:
            raise NotFoundError(f"Module '{module_id}' has no views")
        return views[0]

    # ---- Writes ----

    def create_view(self, module_id: str, owner_id: str, data: ViewCreate) -> View:
        self.ensure_seeded(module_id, owner_id)
        if not self.guard.capabilities(module_id).can_add_views:
            raise ForbiddenError(f"Module '{module_id}' does not allow adding views")

        view = View(id=str(uuid.uuid4()), frozen=False, **data.model_dump())
        self.validate(module_id, view)
        if view.is_default:
            crud.clear_default(self.db, module_id, owner_id)
        row = crud.create_view(self.db, module_id, owner_id, view, crud.next_position(self.db, module_id, owner_id))
        self.db.commit()
        log.info(
            "Created view %s for owner %s in module %s",
            view.id,
            owner_id,
            module_id,
            extra={"module_id": module_id, "owner_id": owner_id, "view_id": view.id},
        )
        return self._to_view(module_id, row)

    def update_view(self, module_id: str, owner_id: str, view_id: str, patch: ViewUpdate) -> View:
        row = self._row(module_id, owner_id, view_id)
        current = self._to_view(module_id, row)
        changes = {k: getattr(patch, k) for k in patch.model_fields_set}

        if current.frozen:
            renamed = "name" in changes and changes["name"] != current.name
            retyped = "type" in changes and changes["type"] != current.type
            if renamed or retyped:
                raise ForbiddenError(f"View '{view_id}' is frozen: its name and type cannot change")

        if changes.get("is_default") is False and current.is_default:
            raise ValidationError(
                "A module must keep one default view; set another view as default instead",
                details={"viewId": view_id},
            )
        for required in ("name", "type", "visible_properties", "filters", "sorts", "config"):
            if required in changes and changes[required] is None:
                raise ValidationError(f"'{required}' cannot be null")

        merged = current.model_copy(update=changes)
        self.validate(module_id, merged)
        if merged.is_default and not current.is_default:
            crud.clear_default(self.db, module_id, owner_id, keep_view_id=view_id)
        crud.apply_view(row, merged)
        self.db.commit()
        log.info("Updated view %s for owner %s in module %s", view_id, owner_id, module_id)
        return self._to_view(module_id, row)

    def delete_view(self, module_id: str, owner_id: str, view_id: str) -> None:
        row = self._row(module_id, owner_id, view_id)
        if self.guard.is_view_frozen(module_id, view_id):
            raise ForbiddenError(f"View '{view_id}' is frozen and cannot be deleted")
        if not self.guard.capabilities(module_id).can_delete_views:
            raise ForbiddenError(f"Module '{module_id}' does not allow deleting views")
        if crud.count_views(self.db, module_id, owner_id) <= 1:
            raise ForbiddenError("Cannot delete the last remaining view")

        was_default = bool(row.is_default)
        crud.delete_view(self.db, row)
        if was_default:
            remaining = crud.list_views(self.db, module_id, owner_id)
            remaining[0].is_default = True
            log.info("Promoted view %s to default in module %s", remaining[0].view_id, module_id)
        self.db.commit()
        log.info("Deleted view %s for owner %s in module %s", view_id, owner_id, module_id)

    def duplicate_view(self, module_id: str, owner_id: str, view_id: str, name: Optional[str] = None) -> View:
        source = self.get_view(module_id, owner_id, view_id)
        if not self.guard.capabilities(module_id).can_add_views:
            raise ForbiddenError(f"Module '{module_id}' does not allow adding views")

        copy = source.model_copy(
            update={
                "id": str(uuid.uuid4()),
                "name": name or f"{source.name} (Copy)",
                "is_default": False,
                "frozen": False,
            },
            deep=True,
        )
        row = crud.create_view(self.db, module_id, owner_id, copy, crud.next_position(self.db, module_id, owner_id))
        self.db.commit()
        log.info("Duplicated view %s as %s in module %s", view_id, copy.id, module_id)
        return self._to_view(module_id, row)

    def set_default(self, module_id: str, owner_id: str, view_id: str) -> View:
        row = self._row(module_id, owner_id, view_id)
        crud.clear_default(self.db, module_id, owner_id, keep_view_id=view_id)
        row.is_default = True
        self.db.commit()
        log.info("Set view %s as default for owner %s in module %s", view_id, owner_id, module_id)
        return self._to_view(module_id, row)
