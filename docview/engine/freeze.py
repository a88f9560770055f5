# File: /docview/engine/freeze.py | Version: 1.0 | Title: Freeze Guard (module-owned immutability rules)
from __future__ import annotations

from typing import Optional

from docview.engine.registry import ModuleRegistry
from docview.schemas.module import Capabilities, FrozenConfig, FrozenPropertyRule


class FreezeGuard:
    """Read-only predicates over each module's FrozenConfig."""

    def __init__(self, registry: ModuleRegistry):
        self.registry = registry

    def frozen_config(self, module_id: str) -> FrozenConfig:
        return self.registry.get(module_id).frozen_config

    def capabilities(self, module_id: str) -> Capabilities:
        return self.frozen_config(module_id).capabilities

    def property_rule(self, module_id: str, property_id: str) -> Optional[FrozenPropertyRule]:
        for rule in self.frozen_config(module_id).frozen_properties:
            if rule.property_id == property_id:
                return rule
        return None

    def is_property_frozen(self, module_id: str, property_id: str) -> bool:
        return self.property_rule(module_id, property_id) is not None

    def is_view_frozen(self, module_id: str, view_id: str) -> bool:
        return view_id in self.frozen_config(module_id).frozen_views

    def can_edit_property(self, module_id: str, property_id: str) -> bool:
        rule = self.property_rule(module_id, property_id)
        return rule is None or rule.allow_edit

    def can_hide_property(self, module_id: str, property_id: str) -> bool:
        rule = self.property_rule(module_id, property_id)
        return rule is None or rule.allow_hide
