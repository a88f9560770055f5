# File: /docview/modules/_factory.py | Version: 1.0 | Title: Helpers for declaring module seed data
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from docview.engine.operators import ViewType
from docview.engine.registry import ModuleDefinition
from docview.schemas.module import Capabilities, FrozenConfig, FrozenPropertyRule
from docview.schemas.property import Property, SelectOption
from docview.schemas.view import Filter, Sort, SortConfig, View

SYSTEM_TIMESTAMP = "System timestamp"


def options(*choices: Tuple[str, str, str]) -> List[SelectOption]:
    return [SelectOption(id=i, name=n, color=c) for i, n, c in choices]


def prop(
    id: str,
    name: str,
    type: str,
    order: int,
    *,
    frozen: bool = False,
    required: bool = False,
    choices: Optional[List[SelectOption]] = None,
    width: int = 150,
    description: Optional[str] = None,
) -> Property:
    return Property(
        id=id,
        name=name,
        type=type,
        order=order,
        width=width,
        visible=True,
        frozen=frozen,
        required=required,
        options=choices,
        description=description,
    )


def timestamps(start_order: int) -> List[Property]:
    return [
        prop("createdAt", "Created", "date", start_order, frozen=True),
        prop("updatedAt", "Updated", "date", start_order + 1, frozen=True),
    ]


def sort_by(property_id: str, direction: str = "ASC", order: int = 0, **config: Any) -> Sort:
    return Sort(
        order=order,
        property_id=property_id,
        direction=direction,
        config=SortConfig(**config) if config else None,
    )


def where(property_id: str, operator: str, value: Any = None, order: int = 0, **extra: Any) -> Filter:
    return Filter(order=order, property_id=property_id, operator=operator, value=value, **extra)


def view(
    id: str,
    name: str,
    type: ViewType = ViewType.TABLE,
    *,
    default: bool = False,
    frozen: bool = False,
    visible: Sequence[str] = (),
    filters: Sequence[Filter] = (),
    sorts: Sequence[Sort] = (),
    group_by: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
    description: Optional[str] = None,
) -> View:
    return View(
        id=id,
        name=name,
        type=type,
        is_default=default,
        frozen=frozen,
        visible_properties=list(visible),
        group_by=group_by,
        filters=list(filters),
        sorts=list(sorts),
        config=config or {},
        description=description,
    )


def module(
    id: str,
    display_name: str,
    display_name_plural: str,
    *,
    properties: Iterable[Property],
    views: Iterable[View],
    rules: Iterable[FrozenPropertyRule] = (),
    capabilities: Optional[Capabilities] = None,
    supported_view_types: Sequence[ViewType] = (
        ViewType.TABLE,
        ViewType.BOARD,
        ViewType.GALLERY,
        ViewType.LIST,
        ViewType.CALENDAR,
    ),
    description: str = "",
    icon: str = "",
) -> ModuleDefinition:
    properties = tuple(properties)
    views = tuple(views)
    explicit = {r.property_id: r for r in rules}
    frozen_rules = list(explicit.values())
    # Properties flagged frozen without an explicit rule are locked down entirely
    for p in properties:
        if p.frozen and p.id not in explicit:
            reason = SYSTEM_TIMESTAMP if p.id in ("createdAt", "updatedAt") else "System property"
            frozen_rules.append(FrozenPropertyRule(property_id=p.id, reason=reason))
    return ModuleDefinition(
        id=id,
        display_name=display_name,
        display_name_plural=display_name_plural,
        description=description,
        icon=icon,
        default_properties=properties,
        default_views=views,
        frozen_config=FrozenConfig(
            module_id=id,
            description=f"Frozen configuration for {display_name_plural}",
            frozen_properties=frozen_rules,
            frozen_views=[v.id for v in views if v.frozen],
            capabilities=capabilities or Capabilities(),
        ),
        supported_view_types=tuple(supported_view_types),
        default_view_type=next((v.type for v in views if v.is_default), ViewType.TABLE),
    )


def rule(property_id: str, reason: str, *, allow_edit: bool = False, allow_hide: bool = False) -> FrozenPropertyRule:
    return FrozenPropertyRule(property_id=property_id, reason=reason, allow_edit=allow_edit, allow_hide=allow_hide)
