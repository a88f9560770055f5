# File: /docview/engine/registry.py | Version: 1.1 | Title: Module registry (seed properties, views & FrozenConfig)
"""
Explicit registry of the modules the engine serves.

Each module contributes only seed data: its default properties, its default
views and its FrozenConfig. The registry is built once at startup and handed to
the services; nothing in the engine reaches for a global.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from docview.core.errors import ConflictError, NotFoundError
from docview.engine.operators import ViewType
from docview.schemas.module import FrozenConfig, ModuleOut
from docview.schemas.property import Property
from docview.schemas.view import View

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleDefinition:
    id: str
    display_name: str
    display_name_plural: str
    default_properties: Tuple[Property, ...]
    default_views: Tuple[View, ...]
    frozen_config: FrozenConfig
    description: str = ""
    icon: str = ""
    supported_view_types: Tuple[ViewType, ...] = field(default_factory=lambda: tuple(ViewType))
    default_view_type: ViewType = ViewType.TABLE

    def to_out(self) -> ModuleOut:
        return ModuleOut(
            id=self.id,
            display_name=self.display_name,
            display_name_plural=self.display_name_plural,
            description=self.description,
            icon=self.icon,
            supported_view_types=list(self.supported_view_types),
            default_view_type=self.default_view_type,
        )


class ModuleRegistry:
    def __init__(self, modules: Iterable[ModuleDefinition] = ()):
        self._modules: Dict[str, ModuleDefinition] = {}
        for module in modules:
            self.register(module)

    def register(self, module: ModuleDefinition) -> ModuleDefinition:
        if module.id in self._modules:
            raise ConflictError(f"Module '{module.id}' is already registered")
        self._modules[module.id] = module
        log.debug("Registered module %s", module.id)
        return module

    def get(self, module_id: str) -> ModuleDefinition:
        module = self._modules.get(module_id)
        if module is None:
            raise NotFoundError(f"Module '{module_id}' not found")
        return module

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules

    def list(self) -> List[ModuleDefinition]:
        return list(self._modules.values())


def build_default_registry() -> ModuleRegistry:
    from docview.modules import DEFAULT_MODULES

    return ModuleRegistry(DEFAULT_MODULES)
