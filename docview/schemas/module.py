# File: /docview/schemas/module.py | Version: 1.0 | Title: Module registration & FrozenConfig schemas
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from docview.engine.operators import ViewType
from docview.schemas._base import BaseSchema


class FrozenPropertyRule(BaseSchema):
    property_id: str
    reason: Optional[str] = None
    allow_edit: bool = False
    allow_hide: bool = False


class Capabilities(BaseSchema):
    can_add_properties: bool = True
    can_delete_properties: bool = True
    can_add_views: bool = True
    can_delete_views: bool = True


class FrozenConfig(BaseSchema):
    module_id: str
    description: Optional[str] = None
    frozen_properties: List[FrozenPropertyRule] = Field(default_factory=list)
    frozen_views: List[str] = Field(default_factory=list)
    capabilities: Capabilities = Field(default_factory=Capabilities)


class ModuleOut(BaseSchema):
    id: str
    display_name: str
    display_name_plural: str
    description: Optional[str] = None
    icon: Optional[str] = None
    supported_view_types: List[ViewType]
    default_view_type: ViewType
