# File: /docview/engine/sorting.py | Version: 1.2 | Title: Sort Comparator (stable multi-key, null/empty aware)
"""
Multi-key record ordering.

Keys are applied in ``order`` (0 = primary); a tie on one key falls through to the
next, and records tied on every key keep their input order because ``sorted`` is
stable. Null and empty-string placement is absolute: ``direction`` only flips the
comparison between two real values.
"""
from __future__ import annotations

import logging
import re
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from docview.core.errors import NotFoundError, ValidationError
from docview.engine.collation import collation_key
from docview.engine.dates import DateContext, to_local_datetime
from docview.engine.filters import as_bool, item_key
from docview.engine.operands import as_number
from docview.engine.operators import PropertyType, SortDirection
from docview.schemas.property import Property
from docview.schemas.view import Sort, SortConfig

log = logging.getLogger(__name__)

Record = Mapping[str, Any]
ComparatorFn = Callable[[Any, Any, Property], int]

_NULL, _EMPTY, _VALUE = "null", "empty", "value"
_DEFAULT_CONFIG = SortConfig()

CUSTOM_COMPARATORS: Dict[str, ComparatorFn] = {}


def _cmp(x: Any, y: Any) -> int:
    return (x > y) - (x < y)


def register_comparator(name: str) -> Callable[[ComparatorFn], ComparatorFn]:
    def _register(fn: ComparatorFn) -> ComparatorFn:
        CUSTOM_COMPARATORS[name] = fn
        return fn

    return _register


@register_comparator("option_order")
def _option_order(a: Any, b: Any, prop: Property) -> int:
    """Order select values by their position in the property's option list."""
    positions: Dict[str, int] = {}
    for i, option in enumerate(prop.options or []):
        positions.setdefault(option.id, i)
        positions.setdefault(option.name, i)
    unknown = len(positions) + 1
    pa, pb = positions.get(str(a), unknown), positions.get(str(b), unknown)
    if pa == pb == unknown:
        return _cmp(str(a), str(b))
    return _cmp(pa, pb)


_DIGITS = re.compile(r"(\d+)")


def _natural_key(text: str) -> Tuple[Tuple[int, Any], ...]:
    return tuple(
        (0, int(part)) if part.isdigit() else (1, part.casefold())
        for part in _DIGITS.split(text)
        if part
    )


@register_comparator("natural")
def _natural(a: Any, b: Any, prop: Property) -> int:
    return _cmp(_natural_key(str(a)), _natural_key(str(b)))


@register_comparator("length")
def _length(a: Any, b: Any, prop: Property) -> int:
    return _cmp(len(str(a)), len(str(b)))


class SortComparator:
    def __init__(
        self,
        schema: Mapping[str, Property],
        ctx: Optional[DateContext] = None,
        default_locale: Optional[str] = None,
    ):
        self.schema = schema
        self.ctx = ctx or DateContext.from_settings()
        self.default_locale = default_locale

    def validate(self, sort: Sort) -> None:
        if sort.property_id not in self.schema:
            raise NotFoundError(f"Property '{sort.property_id}' not found")
        name = sort.config.custom_comparator if sort.config else None
        if name and name not in CUSTOM_COMPARATORS:
            raise ValidationError(
                f"Unknown comparator '{name}'",
                details={"propertyId": sort.property_id, "known": sorted(CUSTOM_COMPARATORS)},
            )

    def _active(self, sorts: Iterable[Sort]) -> List[Tuple[Sort, Property, SortConfig]]:
        keys = []
        for sort in sorted((s for s in sorts if s.enabled), key=lambda s: s.order):
            prop = self.schema.get(sort.property_id)
            if prop is None:
                log.warning("Sort references missing property '%s'; ignoring key", sort.property_id)
                continue
            keys.append((sort, prop, sort.config or _DEFAULT_CONFIG))
        return keys

    def compare(self, a: Record, b: Record, sorts: Sequence[Sort]) -> int:
        return self._compare_active(a, b, self._active(sorts))

    def sort(self, records: Iterable[Record], sorts: Sequence[Sort]) -> List[Record]:
        active = self._active(sorts)
        if not active:
            return list(records)
        return sorted(records, key=cmp_to_key(lambda a, b: self._compare_active(a, b, active)))

    def _compare_active(self, a: Record, b: Record, active) -> int:
        for sort, prop, cfg in active:
            result = self._compare_key(a.get(prop.id), b.get(prop.id), sort, prop, cfg)
            if result:
                return result
        return 0

    # ---- Single key ----

    @staticmethod
    def _classify(value: Any, cfg: SortConfig) -> str:
        if value is None or (isinstance(value, (list, tuple)) and not value):
            return _NULL
        if isinstance(value, str) and value.strip() == "":
            return _NULL if cfg.empty_string_handling == "as_null" else _EMPTY
        return _VALUE

    @staticmethod
    def _position(kind: str, cfg: SortConfig) -> int:
        if kind == _NULL:
            return -2 if cfg.nulls_first else 2
        if kind == _EMPTY:
            return -1 if cfg.empty_string_handling == "first" else 1
        return 0

    def _compare_key(self, va: Any, vb: Any, sort: Sort, prop: Property, cfg: SortConfig) -> int:
        ka, kb = self._classify(va, cfg), self._classify(vb, cfg)
        if ka != _VALUE or kb != _VALUE:
            return _cmp(self._position(ka, cfg), self._position(kb, cfg))
        result = self._compare_values(va, vb, prop, cfg)
        return -result if sort.direction == SortDirection.DESC else result

    def _compare_values(self, va: Any, vb: Any, prop: Property, cfg: SortConfig) -> int:
        if cfg.custom_comparator:
            fn = CUSTOM_COMPARATORS.get(cfg.custom_comparator)
            if fn is not None:
                return _cmp(fn(va, vb, prop), 0)
            log.warning("Unknown comparator '%s'; using default ordering", cfg.custom_comparator)

        ptype = prop.type
        if ptype in (PropertyType.number, PropertyType.progress) or cfg.treat_as_number:
            na, nb = as_number(va), as_number(vb)
            if na is not None and nb is not None:
                return _cmp(na, nb)
        elif ptype == PropertyType.date:
            da = to_local_datetime(va, self.ctx, cfg.date_format)
            db = to_local_datetime(vb, self.ctx, cfg.date_format)
            if da is not None and db is not None:
                return _cmp(da, db)
        elif ptype == PropertyType.boolean:
            return _cmp(as_bool(va), as_bool(vb))
        elif ptype in (PropertyType.multi_select, PropertyType.relation):
            la = self._list_keys(va, cfg)
            lb = self._list_keys(vb, cfg)
            return _cmp(la, lb)

        return _cmp(self._string_key(self._text(va), cfg), self._string_key(self._text(vb), cfg))

    @staticmethod
    def _text(value: Any) -> str:
        return value if isinstance(value, str) else str(value)

    def _list_keys(self, value: Any, cfg: SortConfig) -> Tuple:
        items = value if isinstance(value, (list, tuple)) else [value]
        return tuple(self._string_key(item_key(v), cfg) for v in items)

    def _string_key(self, text: str, cfg: SortConfig):
        if not cfg.case_sensitive:
            text = text.casefold()
        locale = cfg.locale or self.default_locale
        if locale:
            return collation_key(text, locale)
        # Code point order
        return text
