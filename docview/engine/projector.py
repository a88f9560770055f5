# File: /docview/engine/projector.py | Version: 1.1 | Title: Record Projector (filter -> sort -> group -> trim -> paginate)
"""
Apply a view to a batch of records.

``project_records`` is the pure pipeline and works on any in-memory batch.
``RecordProjector`` resolves the owner's view, pulls candidates from the record
storage collaborator and runs the same pipeline.
"""
from __future__ import annotations

import logging
from datetime import datetime
from math import ceil
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from docview.core.config import settings
from docview.engine.dates import DateContext
from docview.engine.filters import FilterEvaluator, as_bool, is_empty_value, item_key
from docview.engine.operators import FilterLogic, FilterOperator, PropertyType
from docview.engine.sorting import SortComparator
from docview.engine.storage import FilterHint, RecordStorage
from docview.schemas.property import Property
from docview.schemas.records import GroupBucket, Pagination, ProjectionOut
from docview.schemas.view import View

log = logging.getLogger(__name__)

Record = Mapping[str, Any]
Schema = Union[Mapping[str, Property], Sequence[Property]]

NO_VALUE_LABEL = "No value"
_HINTABLE_TYPES = (PropertyType.text, PropertyType.select)


def _as_map(schema: Schema) -> Dict[str, Property]:
    if isinstance(schema, Mapping):
        return dict(schema)
    return {p.id: p for p in schema}


def paginate(total: int, page: int, per_page: int) -> Pagination:
    pages = ceil(total / per_page) if total else 0
    return Pagination(
        page=page,
        per_page=per_page,
        total=total,
        pages=pages,
        has_next=page < pages,
        has_prev=page > 1,
    )


# ---- Grouping ----


def _bucket_keys(prop: Property, value: Any) -> List[Tuple[Optional[str], str]]:
    """(key, label) pairs a value falls into; an empty list means "no value"."""
    if is_empty_value(value):
        return []
    if prop.type == PropertyType.boolean:
        flag = as_bool(value)
        return [("true" if flag else "false", "Yes" if flag else "No")]
    items = value if isinstance(value, (list, tuple)) else [value]
    by_alias = {}
    for option in prop.options or []:
        by_alias.setdefault(option.id, option)
        by_alias.setdefault(option.name, option)
    keys = []
    for item in items:
        raw = item_key(item)
        option = by_alias.get(raw)
        pair = (option.id, option.name) if option else (raw, raw)
        if pair not in keys:
            keys.append(pair)
    return keys


def group_records(records: Sequence[Record], prop: Property) -> List[GroupBucket]:
    buckets: Dict[str, GroupBucket] = {}
    empty: List[str] = []
    for record in records:
        record_id = str(record.get("id"))
        keys = _bucket_keys(prop, record.get(prop.id))
        if not keys:
            empty.append(record_id)
        for key, label in keys:
            bucket = buckets.get(key)
            if bucket is None:
                bucket = buckets[key] = GroupBucket(key=key, label=label, count=0)
            bucket.record_ids.append(record_id)
            bucket.count += 1

    # Option order for select-like properties, first appearance otherwise
    ordered: List[GroupBucket] = []
    for option_id in prop.option_ids():
        if option_id in buckets:
            ordered.append(buckets.pop(option_id))
    ordered.extend(buckets.values())
    if empty:
        ordered.append(GroupBucket(key=None, label=NO_VALUE_LABEL, count=len(empty), record_ids=empty))
    return ordered


# ---- Pipeline ----


def visible_columns(view: View, schema: Mapping[str, Property]) -> List[str]:
    if view.visible_properties:
        columns = list(view.visible_properties)
    else:
        columns = [p.id for p in sorted(schema.values(), key=lambda p: p.order) if p.visible]
    return columns if "id" in columns else ["id"] + columns


def trim(record: Record, columns: Iterable[str]) -> Dict[str, Any]:
    return {c: record[c] for c in columns if c in record}


def project_records(
    view: View,
    records: Iterable[Record],
    schema: Schema,
    page: int = 1,
    per_page: Optional[int] = None,
    ctx: Optional[DateContext] = None,
    default_locale: Optional[str] = None,
) -> ProjectionOut:
    schema_map = _as_map(schema)
    ctx = ctx or DateContext.from_settings()
    per_page = max(1, min(per_page or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE))
    page = max(1, page)

    matched = FilterEvaluator(schema_map, ctx).filter_records(records, view.filters)
    ordered = SortComparator(schema_map, ctx, default_locale=default_locale).sort(matched, view.sorts)

    groups = None
    if view.group_by:
        group_prop = schema_map.get(view.group_by)
        if group_prop is None:
            log.warning("View '%s' groups by missing property '%s'", view.id, view.group_by)
        else:
            groups = group_records(ordered, group_prop)

    columns = visible_columns(view, schema_map)
    start = (page - 1) * per_page
    window = [trim(r, columns) for r in ordered[start : start + per_page]]
    return ProjectionOut(
        view=view,
        records=window,
        pagination=paginate(len(ordered), page, per_page),
        groups=groups,
    )


def equality_hint(view: View, schema: Mapping[str, Property]) -> Optional[FilterHint]:
    """
    Accepted-values hint for storage when the enabled filters form a pure AND chain.

    Only ASCII ``equals`` filters on text/select properties contribute, so a
    case-insensitive comparison in SQL agrees with the evaluator.
    """
    enabled = sorted((f for f in view.filters if f.enabled), key=lambda f: f.order)
    if not enabled or any(f.logic == FilterLogic.OR for f in enabled[1:]):
        return None
    hint: Dict[str, List[str]] = {}
    for flt in enabled:
        prop = schema.get(flt.property_id)
        if prop is None or prop.type not in _HINTABLE_TYPES or flt.operator != FilterOperator.equals:
            continue
        if flt.case_sensitive or not isinstance(flt.value, str) or not flt.value.isascii():
            continue
        # A missing value evaluates as "", which storage cannot express as an equality
        if not flt.value:
            continue
        accepted = [flt.value]
        for option in prop.options or []:
            if flt.value.casefold() in (option.id.casefold(), option.name.casefold()):
                accepted.extend([option.id, option.name])
        accepted = list(dict.fromkeys(accepted))
        if not all(a.isascii() for a in accepted):
            continue
        # Later equals filters on the same property only narrow further
        hint.setdefault(flt.property_id, accepted)
    return hint or None


class RecordProjector:
    def __init__(self, view_store, schema, storage: RecordStorage, default_locale: Optional[str] = None):
        self.view_store = view_store
        self.schema = schema
        self.storage = storage
        self.default_locale = default_locale if default_locale is not None else settings.DEFAULT_LOCALE

    def apply(
        self,
        module_id: str,
        owner_id: str,
        view_id: Optional[str] = None,
        page: int = 1,
        per_page: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ProjectionOut:
        if view_id is None:
            view = self.view_store.get_default_view(module_id, owner_id)
        else:
            view = self.view_store.get_view(module_id, owner_id, view_id)
        schema_map = self.schema.schema_map(module_id)
        candidates = self.storage.fetch_candidates(module_id, owner_id, equality_hint(view, schema_map))
        log.debug(
            "Projecting %d candidates through view %s",
            len(candidates),
            view.id,
            extra={"module_id": module_id, "owner_id": owner_id, "view_id": view.id},
        )
        return project_records(
            view,
            candidates,
            schema_map,
            page=page,
            per_page=per_page,
            ctx=DateContext.from_settings(now=now),
            default_locale=self.default_locale,
        )
