# File: /tests/test_registry_and_freeze.py | Version: 1.0 | Title: Module registry seed data & Freeze Guard predicates
import pytest

from docview.core.errors import ConflictError, NotFoundError
from docview.engine.filters import FilterEvaluator
from docview.engine.freeze import FreezeGuard
from docview.engine.operators import ViewType
from docview.engine.registry import ModuleRegistry
from docview.engine.sorting import SortComparator
from docview.modules import DEFAULT_MODULES, TASKS


def test_default_registry_lists_every_module(registry):
    ids = [m.id for m in registry.list()]
    assert ids == ["tasks", "goals", "books", "projects", "notes", "people", "journals"]
    assert "tasks" in registry
    assert "nope" not in registry


def test_registry_rejects_duplicates_and_unknown_ids():
    registry = ModuleRegistry([TASKS])
    with pytest.raises(ConflictError):
        registry.register(TASKS)
    with pytest.raises(NotFoundError):
        registry.get("nope")


@pytest.mark.parametrize("module", DEFAULT_MODULES, ids=lambda m: m.id)
def test_seed_views_are_valid_against_seed_properties(module):
    schema = {p.id: p for p in module.default_properties}
    evaluator = FilterEvaluator(schema)
    comparator = SortComparator(schema)
    defaults = [v for v in module.default_views if v.is_default]
    assert len(defaults) == 1
    assert module.default_view_type == defaults[0].type
    for view in module.default_views:
        assert view.type in module.supported_view_types
        for flt in view.filters:
            evaluator.validate(flt)
        for sort in view.sorts:
            comparator.validate(sort)
        for property_id in view.visible_properties:
            assert property_id in schema
        assert view.group_by is None or view.group_by in schema


def test_module_out_shape(registry):
    out = registry.get("projects").to_out().to_wire()
    assert out["displayNamePlural"] == "Projects"
    assert out["defaultViewType"] == "TABLE"
    assert "TIMELINE" in out["supportedViewTypes"]


def test_freeze_guard_property_rules(registry):
    guard = FreezeGuard(registry)
    assert guard.is_property_frozen("tasks", "title")
    assert guard.can_edit_property("tasks", "title")
    assert not guard.can_hide_property("tasks", "title")

    assert guard.is_property_frozen("tasks", "createdAt")
    assert not guard.can_edit_property("tasks", "createdAt")
    assert guard.property_rule("tasks", "createdAt").reason == "System timestamp"

    assert not guard.is_property_frozen("tasks", "tags")
    assert guard.can_edit_property("tasks", "tags")
    assert guard.property_rule("tasks", "tags") is None

    assert guard.can_hide_property("journals", "wordCount")
    assert not guard.can_edit_property("journals", "wordCount")


def test_freeze_guard_views_and_capabilities(registry):
    guard = FreezeGuard(registry)
    assert guard.is_view_frozen("tasks", "all-tasks")
    assert not guard.is_view_frozen("tasks", "kanban-board")
    assert guard.is_view_frozen("projects", "project-board")

    assert guard.capabilities("tasks").can_add_properties
    assert not guard.capabilities("journals").can_add_properties
    assert guard.capabilities("journals").can_add_views

    with pytest.raises(NotFoundError):
        guard.frozen_config("nope")


def test_frozen_config_wire_shape(registry):
    wire = FreezeGuard(registry).frozen_config("tasks").to_wire()
    assert wire["moduleId"] == "tasks"
    assert wire["frozenViews"] == ["all-tasks"]
    rules = {r["propertyId"]: r for r in wire["frozenProperties"]}
    assert rules["status"]["allowEdit"] is True
    assert rules["updatedAt"]["allowHide"] is False
    assert wire["capabilities"]["canDeleteViews"] is True


def test_seed_view_types():
    views = {v.id: v for v in TASKS.default_views}
    assert views["kanban-board"].type == ViewType.BOARD
    assert views["kanban-board"].group_by == "status"
