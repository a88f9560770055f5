# File: /docview/engine/filters.py | Version: 1.4 | Title: Filter Evaluator (type-scoped operators + AND/OR groups)
"""
Decide whether a record (a plain ``{property_id: value}`` mapping) satisfies a
view's filters.

Filters are applied left to right in ``order``. A run of consecutive filters that
share a ``group_id`` is evaluated as one parenthesised sub-expression and joins the
running result with the logic of its first member. Disabled filters are skipped.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from docview.core.errors import DocViewError, NotFoundError
from docview.engine.dates import DateContext, to_local_date, to_local_datetime
from docview.engine.operands import (
    DateOperand,
    DateRangeOperand,
    ListOperand,
    NumberOperand,
    NumberRangeOperand,
    Operand,
    TextOperand,
    as_number,
    parse_operand,
)
from docview.engine.operators import (
    RELATIVE_DATE_OPERATORS,
    FilterLogic,
    FilterOperator,
    OperatorCategory,
    category_for,
)
from docview.schemas.property import Property
from docview.schemas.view import Filter

log = logging.getLogger(__name__)

Record = Mapping[str, Any]

_TRUE_STRINGS = {"true", "1", "yes", "y", "on", "checked"}


def is_empty_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def _fold(text: str, case_sensitive: bool) -> str:
    return text if case_sensitive else text.casefold()


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def item_key(item: Any) -> str:
    # Relations are stored either as bare ids or as {"id": ..., ...} documents
    if isinstance(item, dict):
        return str(item.get("id", ""))
    return str(item)


@dataclass
class CompiledFilter:
    filter: Filter
    prop: Optional[Property]
    operand: Optional[Operand]

    @property
    def usable(self) -> bool:
        return self.prop is not None and self.operand is not None


class FilterEvaluator:
    """
    Evaluate filters against records for one module schema.

    ``schema`` maps property ids to Property definitions; ``ctx`` supplies the
    evaluation clock used by relative date operators.
    """

    def __init__(self, schema: Mapping[str, Property], ctx: Optional[DateContext] = None):
        self.schema = schema
        self.ctx = ctx or DateContext.from_settings()
        self._handlers: Dict[OperatorCategory, Callable[[Property, Filter, Operand, Any], bool]] = {
            OperatorCategory.text: self._match_text,
            OperatorCategory.number: self._match_number,
            OperatorCategory.date: self._match_date,
            OperatorCategory.multi_value: self._match_multi,
            OperatorCategory.boolean: self._match_boolean,
        }

    # ---- Write-time validation ----

    def validate(self, flt: Filter) -> Operand:
        """Raise ValidationError/NotFoundError if ``flt`` cannot be stored."""
        prop = self.schema.get(flt.property_id)
        if prop is None:
            raise NotFoundError(f"Property '{flt.property_id}' not found")
        return parse_operand(prop, flt)

    # ---- Compilation ----

    def compile(self, filters: Iterable[Filter]) -> List[CompiledFilter]:
        active = sorted((f for f in filters if f.enabled), key=lambda f: f.order)
        compiled: List[CompiledFilter] = []
        for flt in active:
            prop = self.schema.get(flt.property_id)
            operand = None
            if prop is None:
                log.warning("Filter references missing property '%s'; treating as no match", flt.property_id)
            else:
                try:
                    operand = parse_operand(prop, flt)
                except DocViewError as exc:
                    log.warning("Unusable filter on '%s': %s", flt.property_id, exc.message)
            compiled.append(CompiledFilter(filter=flt, prop=prop, operand=operand))
        return compiled

    # ---- Evaluation ----

    def matches(self, record: Record, flt: Filter) -> bool:
        if not flt.enabled:
            return True
        (compiled,) = self.compile([flt])
        return self._evaluate_one(record, compiled)

    def matches_all(self, record: Record, filters: Sequence[Filter]) -> bool:
        return self.matches_compiled(record, self.compile(filters))

    def matches_compiled(self, record: Record, chain: Sequence[CompiledFilter]) -> bool:
        result: Optional[bool] = None
        i = 0
        while i < len(chain):
            head = chain[i]
            group_id = head.filter.group_id
            if group_id is None:
                value = self._evaluate_one(record, head)
                i += 1
            else:
                value = self._evaluate_one(record, head)
                i += 1
                while i < len(chain) and chain[i].filter.group_id == group_id:
                    member = chain[i]
                    if member.filter.logic == FilterLogic.OR:
                        value = value or self._evaluate_one(record, member)
                    else:
                        value = value and self._evaluate_one(record, member)
                    i += 1
            if result is None:
                result = value
            elif head.filter.logic == FilterLogic.OR:
                result = result or value
            else:
                result = result and value
        return True if result is None else result

    def filter_records(self, records: Iterable[Record], filters: Sequence[Filter]) -> List[Record]:
        chain = self.compile(filters)
        return [r for r in records if self.matches_compiled(r, chain)]

    def _evaluate_one(self, record: Record, compiled: CompiledFilter) -> bool:
        if not compiled.usable:
            return False
        prop, flt = compiled.prop, compiled.filter
        value = record.get(prop.id)
        if flt.operator == FilterOperator.is_empty:
            return is_empty_value(value)
        if flt.operator == FilterOperator.is_not_empty:
            return not is_empty_value(value)
        handler = self._handlers[category_for(prop.type)]
        return handler(prop, flt, compiled.operand, value)

    # ---- Per-category matchers ----

    def _match_text(self, prop: Property, flt: Filter, operand: TextOperand, value: Any) -> bool:
        op = flt.operator
        cs = operand.case_sensitive
        needle = _fold(operand.text, cs)
        candidates = self._text_candidates(prop, value)

        if op == FilterOperator.equals:
            return any(_fold(c, cs) == needle for c in candidates)
        if op == FilterOperator.not_equals:
            return all(_fold(c, cs) != needle for c in candidates)
        if op in (FilterOperator.contains, FilterOperator.not_contains):
            if operand.pattern is not None:
                found = any(operand.pattern.search(c) for c in candidates)
            else:
                found = any(needle in _fold(c, cs) for c in candidates)
            return found if op == FilterOperator.contains else not found
        if op == FilterOperator.starts_with:
            return any(_fold(c, cs).startswith(needle) for c in candidates)
        if op == FilterOperator.ends_with:
            return any(_fold(c, cs).endswith(needle) for c in candidates)
        return False

    @staticmethod
    def _text_candidates(prop: Property, value: Any) -> List[str]:
        if value is None:
            return [""]
        text = value if isinstance(value, str) else str(value)
        # A select value may be stored as the option id; match its label too
        for option in prop.options or []:
            if option.id == text:
                return [text, option.name]
        return [text]

    def _match_number(self, prop: Property, flt: Filter, operand, value: Any) -> bool:
        op = flt.operator
        num = as_number(value)
        if isinstance(operand, NumberRangeOperand):
            if num is None:
                return False
            if operand.low is not None and num < operand.low:
                return False
            if operand.high is not None and num > operand.high:
                return False
            return True
        if not isinstance(operand, NumberOperand):
            log.warning("Number filter on '%s' has a %s operand; treating as no match", prop.id, type(operand).__name__)
            return False
        if op == FilterOperator.not_equals:
            return num is None or num != operand.value
        if num is None:
            return False
        if op == FilterOperator.equals:
            return num == operand.value
        if op == FilterOperator.greater_than:
            return num > operand.value
        if op == FilterOperator.greater_than_or_equal:
            return num >= operand.value
        if op == FilterOperator.less_than:
            return num < operand.value
        if op == FilterOperator.less_than_or_equal:
            return num <= operand.value
        return False

    def _operand_date(self, dt: datetime) -> date:
        # Zone-less operands name a calendar day directly
        if dt.tzinfo is None:
            return dt.date()
        return self.ctx.localize(dt).date()

    def _match_date(self, prop: Property, flt: Filter, operand, value: Any) -> bool:
        op = flt.operator
        if op in RELATIVE_DATE_OPERATORS:
            day = to_local_date(value, self.ctx)
            if day is None:
                return False
            start, end = self.ctx.relative_window(op)
            return start <= day <= end

        include_time = getattr(operand, "include_time", False)
        if include_time:
            subject = to_local_datetime(value, self.ctx)
            convert = self.ctx.localize
        else:
            subject = to_local_date(value, self.ctx)
            convert = self._operand_date
        if subject is None:
            return False

        if isinstance(operand, DateRangeOperand):
            if operand.start is not None and subject < convert(operand.start):
                return False
            if operand.end is not None and subject > convert(operand.end):
                return False
            return True
        if not isinstance(operand, DateOperand):
            log.warning("Date filter on '%s' has a %s operand; treating as no match", prop.id, type(operand).__name__)
            return False
        target = convert(operand.value)
        if op == FilterOperator.date_equals:
            return subject == target
        if op == FilterOperator.date_before:
            return subject < target
        if op == FilterOperator.date_after:
            return subject > target
        return False

    def _match_multi(self, prop: Property, flt: Filter, operand: ListOperand, value: Any) -> bool:
        aliases = {}
        for option in prop.options or []:
            aliases[option.name.casefold()] = option.id
            aliases[option.id.casefold()] = option.id

        def canon(item: str) -> str:
            return aliases.get(item.casefold(), item) if aliases else item

        if value is None:
            items: List[Any] = []
        elif isinstance(value, (list, tuple, set)):
            items = list(value)
        else:
            items = [value]
        present = {canon(item_key(v)) for v in items}
        wanted = [canon(v) for v in operand.values]

        op = flt.operator
        if op in (FilterOperator.includes, FilterOperator.includes_all):
            return all(w in present for w in wanted)
        if op == FilterOperator.includes_any:
            return any(w in present for w in wanted)
        if op == FilterOperator.not_includes:
            return not any(w in present for w in wanted)
        return False

    def _match_boolean(self, prop: Property, flt: Filter, operand, value: Any) -> bool:
        if flt.operator == FilterOperator.is_true:
            return as_bool(value)
        if flt.operator == FilterOperator.is_false:
            return not as_bool(value)
        return False
