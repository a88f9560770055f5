# File: /docview/services/property_schema.py | Version: 1.0 | Title: Property Schema service (per-module, shared by all owners)
"""
Per-module property definitions.

The schema is seeded from the module's default properties the first time it is
read. Frozen rules come from the module's FrozenConfig through the FreezeGuard;
the stored ``frozen`` column only mirrors them for display.
"""
from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from docview.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from docview.crud import properties as crud
from docview.crud.view import list_module_views, strip_properties
from docview.engine.freeze import FreezeGuard
from docview.engine.operators import PropertyType
from docview.engine.registry import ModuleRegistry
from docview.engine.storage import RecordStorage
from docview.schemas.property import Property, PropertyCreate, PropertyUpdate

log = logging.getLogger(__name__)

_OPTION_TYPES = (PropertyType.select, PropertyType.multi_select)


class PropertySchema:
    def __init__(self, db: Session, registry: ModuleRegistry, storage: Optional[RecordStorage] = None):
        self.db = db
        self.registry = registry
        self.guard = FreezeGuard(registry)
        self.storage = storage

    # ---- Reads ----

    def _ensure_seeded(self, module_id: str) -> None:
        module = self.registry.get(module_id)
        if crud.list_properties(self.db, module_id):
            return
        for prop in module.default_properties:
            crud.create_property(self.db, module_id, prop)
        self.db.commit()
        log.info("Seeded %d properties for module %s", len(module.default_properties), module_id)

    def get_schema(self, module_id: str) -> List[Property]:
        self._ensure_seeded(module_id)
        return [
            crud.row_to_property(row, frozen=self.guard.is_property_frozen(module_id, row.property_id))
            for row in crud.list_properties(self.db, module_id)
        ]

    def schema_map(self, module_id: str) -> Dict[str, Property]:
        return {p.id: p for p in self.get_schema(module_id)}

    def get_property(self, module_id: str, property_id: str) -> Property:
        self._ensure_seeded(module_id)
        row = crud.get_property(self.db, module_id, property_id)
        if row is None:
            raise NotFoundError(f"Property '{property_id}' not found in module '{module_id}'")
        return crud.row_to_property(row, frozen=self.guard.is_property_frozen(module_id, property_id))

    # ---- Writes ----

    def add_property(self, module_id: str, data: PropertyCreate) -> Property:
        self._ensure_seeded(module_id)
        if not self.guard.capabilities(module_id).can_add_properties:
            raise ForbiddenError(f"Module '{module_id}' does not allow adding properties")

        property_id = data.id or str(uuid.uuid4())
        if crud.get_property(self.db, module_id, property_id) is not None:
            raise ConflictError(
                f"Property '{property_id}' already exists in module '{module_id}'",
                details={"propertyId": property_id},
            )
        options = data.options
        if data.type in _OPTION_TYPES and options is None:
            options = []
        prop = Property(
            id=property_id,
            name=data.name,
            type=data.type,
            order=data.order if data.order is not None else crud.next_order(self.db, module_id),
            width=data.width,
            visible=data.visible,
            frozen=False,
            required=data.required,
            options=options if data.type in _OPTION_TYPES else None,
            description=data.description,
        )
        crud.create_property(self.db, module_id, prop)
        self.db.commit()
        log.info("Added property %s to module %s", property_id, module_id)
        return prop

    def update_property(self, module_id: str, property_id: str, patch: PropertyUpdate) -> Property:
        current = self.get_property(module_id, property_id)
        changes = patch.model_dump(exclude_unset=True)
        frozen = current.frozen

        new_type = changes.get("type")
        if new_type is not None and PropertyType(new_type) != current.type:
            if frozen:
                raise ForbiddenError(f"Cannot change the type of frozen property '{property_id}'")
            if self.storage is not None and self.storage.property_in_use(module_id, property_id):
                raise ValidationError(
                    f"Cannot change the type of '{property_id}': records already hold values for it",
                    details={"propertyId": property_id},
                )

        if frozen:
            rule = self.guard.property_rule(module_id, property_id)
            if "required" in changes and changes["required"] != current.required:
                raise ForbiddenError(f"Cannot change 'required' on frozen property '{property_id}'")
            edits_definition = ("name" in changes and changes["name"] != current.name) or (
                "options" in changes and changes["options"] != [o.model_dump() for o in current.options or []]
            )
            if edits_definition and not rule.allow_edit:
                raise ForbiddenError(f"Property '{property_id}' is frozen: {rule.reason or 'not editable'}")
            if changes.get("visible") is False and current.visible and not rule.allow_hide:
                raise ForbiddenError(f"Property '{property_id}' is frozen and cannot be hidden")

        applied = {k: v for k, v in changes.items() if v is not None or k == "description"}
        merged = Property.model_validate({**current.model_dump(), **applied})
        if merged.type in _OPTION_TYPES:
            if merged.options is None:
                merged.options = []
        else:
            merged.options = None

        row = crud.get_property(self.db, module_id, property_id)
        crud.apply_property(row, merged)
        self.db.commit()
        log.info("Updated property %s in module %s (%s)", property_id, module_id, ", ".join(sorted(changes)))
        return merged

    def delete_property(self, module_id: str, property_id: str) -> None:
        self._ensure_seeded(module_id)
        row = crud.get_property(self.db, module_id, property_id)
        if row is None:
            raise NotFoundError(f"Property '{property_id}' not found in module '{module_id}'")
        if self.guard.is_property_frozen(module_id, property_id):
            rule = self.guard.property_rule(module_id, property_id)
            raise ForbiddenError(
                f"Property '{property_id}' is frozen and cannot be deleted",
                details={"reason": rule.reason} if rule.reason else None,
            )
        if not self.guard.capabilities(module_id).can_delete_properties:
            raise ForbiddenError(f"Module '{module_id}' does not allow deleting properties")

        crud.delete_property(self.db, row)
        touched = self._strip_from_views(module_id, property_id)
        self.db.commit()
        log.info("Deleted property %s from module %s; updated %d views", property_id, module_id, touched)

    def _strip_from_views(self, module_id: str, property_id: str) -> int:
        touched = sum(
            strip_properties(row, lambda pid: pid != property_id) for row in list_module_views(self.db, module_id)
        )
        self.db.flush()
        return touched
