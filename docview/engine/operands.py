# File: /docview/engine/operands.py | Version: 1.1 | Title: Typed filter operands (parsed at write time)
"""
Filter values arrive on the wire as arbitrary JSON. Before a filter is stored or
evaluated its value is parsed into one of the operand types below, chosen by the
operator's category, so the evaluator never has to guess what it was given.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Pattern, Tuple, Union

from docview.core.errors import ValidationError
from docview.engine.dates import parse_datetime
from docview.engine.operators import (
    UNARY_OPERATORS,
    FilterOperator,
    OperatorCategory,
    category_for,
    is_operator_allowed,
)
from docview.schemas.property import Property
from docview.schemas.view import Filter


@dataclass(frozen=True)
class NoOperand:
    pass


@dataclass(frozen=True)
class TextOperand:
    text: str
    case_sensitive: bool = False
    pattern: Optional[Pattern[str]] = None


@dataclass(frozen=True)
class NumberOperand:
    value: float


@dataclass(frozen=True)
class NumberRangeOperand:
    low: Optional[float]
    high: Optional[float]


@dataclass(frozen=True)
class DateOperand:
    value: datetime
    include_time: bool = False


@dataclass(frozen=True)
class DateRangeOperand:
    start: Optional[datetime]
    end: Optional[datetime]
    include_time: bool = False


@dataclass(frozen=True)
class ListOperand:
    values: Tuple[str, ...]


Operand = Union[
    NoOperand,
    TextOperand,
    NumberOperand,
    NumberRangeOperand,
    DateOperand,
    DateRangeOperand,
    ListOperand,
]


def _invalid(flt: Filter, reason: str) -> ValidationError:
    return ValidationError(
        f"Invalid value for filter '{flt.operator.value}' on '{flt.property_id}': {reason}",
        details={"propertyId": flt.property_id, "operator": flt.operator.value},
    )


def as_number(raw: Any) -> Optional[float]:
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        return float(raw) if math.isfinite(raw) else None
    if isinstance(raw, str):
        try:
            num = float(raw.strip())
        except ValueError:
            return None
        return num if math.isfinite(num) else None
    return None


def _pair(raw: Any, low_key: str, high_key: str) -> Tuple[Any, Any]:
    if isinstance(raw, dict):
        return raw.get(low_key), raw.get(high_key)
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return raw[0], raw[1]
    return None, None


def _text_operand(flt: Filter) -> TextOperand:
    raw = flt.value
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
        raise _invalid(flt, "expected a string")
    text = str(raw)
    pattern = None
    search = flt.config.text_search if flt.config else None
    if search and flt.operator in (FilterOperator.contains, FilterOperator.not_contains):
        flags = 0 if flt.case_sensitive else re.IGNORECASE
        source = text if search.regex else re.escape(text)
        if search.whole_word:
            source = rf"\b(?:{source})\b"
        try:
            pattern = re.compile(source, flags)
        except re.error as exc:
            raise _invalid(flt, f"bad regular expression ({exc})")
    return TextOperand(text=text, case_sensitive=flt.case_sensitive, pattern=pattern)


def _number_operand(flt: Filter) -> Union[NumberOperand, NumberRangeOperand]:
    if flt.operator == FilterOperator.number_between:
        low, high = _pair(flt.value, "min", "max")
        if flt.value is None and flt.config and flt.config.number_range:
            low, high = flt.config.number_range.min, flt.config.number_range.max
        low_n, high_n = as_number(low), as_number(high)
        if (low is not None and low_n is None) or (high is not None and high_n is None):
            raise _invalid(flt, "range bounds must be numbers")
        if low_n is None and high_n is None:
            raise _invalid(flt, "expected {min, max}")
        if low_n is not None and high_n is not None and low_n > high_n:
            raise _invalid(flt, "min is greater than max")
        return NumberRangeOperand(low=low_n, high=high_n)
    num = as_number(flt.value)
    if num is None:
        raise _invalid(flt, "expected a number")
    return NumberOperand(value=num)


def _date_or_none(flt: Filter, raw: Any) -> Optional[datetime]:
    if raw is None or raw == "":
        return None
    dt = parse_datetime(raw)
    if dt is None:
        raise _invalid(flt, f"'{raw}' is not a date")
    return dt


def _date_operand(flt: Filter) -> Union[DateOperand, DateRangeOperand]:
    date_range = flt.config.date_range if flt.config else None
    include_time = bool(date_range and date_range.include_time)
    if flt.operator == FilterOperator.date_between:
        start, end = _pair(flt.value, "start", "end")
        if flt.value is None and date_range:
            start, end = date_range.start, date_range.end
        start_dt, end_dt = _date_or_none(flt, start), _date_or_none(flt, end)
        if start_dt is None and end_dt is None:
            raise _invalid(flt, "expected {start, end}")
        return DateRangeOperand(start=start_dt, end=end_dt, include_time=include_time)
    dt = _date_or_none(flt, flt.value)
    if dt is None:
        raise _invalid(flt, "expected a date")
    return DateOperand(value=dt, include_time=include_time)


def _list_operand(flt: Filter) -> ListOperand:
    raw = flt.value
    if raw is None or raw == "" or raw == []:
        raise _invalid(flt, "expected one or more values")
    items = raw if isinstance(raw, (list, tuple)) else [raw]
    if any(isinstance(v, (dict, list)) or v is None for v in items):
        raise _invalid(flt, "values must be scalars")
    return ListOperand(values=tuple(str(v) for v in items))


_PARSERS = {
    OperatorCategory.text: _text_operand,
    OperatorCategory.number: _number_operand,
    OperatorCategory.date: _date_operand,
    OperatorCategory.multi_value: _list_operand,
}


def parse_operand(prop: Property, flt: Filter) -> Operand:
    """
    Validate ``flt`` against ``prop`` and return its typed operand.

    Raises ValidationError when the operator is not in the property type's operator
    set or when the value does not fit the operator.
    """
    if not is_operator_allowed(prop.type, flt.operator):
        raise ValidationError(
            f"Operator '{flt.operator.value}' is not valid for {prop.type.value} property '{prop.id}'",
            details={"propertyId": prop.id, "operator": flt.operator.value},
        )
    if flt.operator in UNARY_OPERATORS:
        return NoOperand()
    return _PARSERS[category_for(prop.type)](flt)
