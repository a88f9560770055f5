# File: /docview/engine/operators.py | Version: 1.2 | Title: Property types & type-scoped filter operators
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class PropertyType(str, Enum):
    text = "text"
    rich_text = "rich_text"
    number = "number"
    select = "select"
    multi_select = "multi_select"
    date = "date"
    boolean = "boolean"
    relation = "relation"
    icon = "icon"
    progress = "progress"
    url = "url"
    email = "email"
    phone = "phone"


class FilterOperator(str, Enum):
    # Text
    equals = "equals"
    not_equals = "not_equals"
    contains = "contains"
    not_contains = "not_contains"
    starts_with = "starts_with"
    ends_with = "ends_with"
    is_empty = "is_empty"
    is_not_empty = "is_not_empty"

    # Number
    greater_than = "greater_than"
    greater_than_or_equal = "greater_than_or_equal"
    less_than = "less_than"
    less_than_or_equal = "less_than_or_equal"
    number_between = "number_between"

    # Date (absolute)
    date_equals = "date_equals"
    date_before = "date_before"
    date_after = "date_after"
    date_between = "date_between"

    # Date (relative to the evaluation clock)
    is_today = "is_today"
    is_yesterday = "is_yesterday"
    is_tomorrow = "is_tomorrow"
    is_this_week = "is_this_week"
    is_this_month = "is_this_month"
    is_this_year = "is_this_year"
    is_past_week = "is_past_week"
    is_past_month = "is_past_month"
    is_next_week = "is_next_week"
    is_next_month = "is_next_month"

    # Multi-value
    includes = "includes"
    not_includes = "not_includes"
    includes_all = "includes_all"
    includes_any = "includes_any"

    # Boolean
    is_true = "is_true"
    is_false = "is_false"


class OperatorCategory(str, Enum):
    text = "text"
    number = "number"
    date = "date"
    multi_value = "multi_value"
    boolean = "boolean"


class FilterLogic(str, Enum):
    AND = "AND"
    OR = "OR"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class ViewType(str, Enum):
    TABLE = "TABLE"
    BOARD = "BOARD"
    CALENDAR = "CALENDAR"
    TIMELINE = "TIMELINE"
    GALLERY = "GALLERY"
    LIST = "LIST"


_F = FilterOperator

RELATIVE_DATE_OPERATORS: FrozenSet[FilterOperator] = frozenset(
    {
        _F.is_today,
        _F.is_yesterday,
        _F.is_tomorrow,
        _F.is_this_week,
        _F.is_this_month,
        _F.is_this_year,
        _F.is_past_week,
        _F.is_past_month,
        _F.is_next_week,
        _F.is_next_month,
    }
)

# Operators that take no value
UNARY_OPERATORS: FrozenSet[FilterOperator] = RELATIVE_DATE_OPERATORS | frozenset(
    {_F.is_empty, _F.is_not_empty, _F.is_true, _F.is_false}
)

TEXT_OPERATORS: FrozenSet[FilterOperator] = frozenset(
    {
        _F.equals,
        _F.not_equals,
        _F.contains,
        _F.not_contains,
        _F.starts_with,
        _F.ends_with,
        _F.is_empty,
        _F.is_not_empty,
    }
)

SELECT_OPERATORS: FrozenSet[FilterOperator] = frozenset(
    {_F.equals, _F.not_equals, _F.is_empty, _F.is_not_empty}
)

NUMBER_OPERATORS: FrozenSet[FilterOperator] = frozenset(
    {
        _F.equals,
        _F.not_equals,
        _F.greater_than,
        _F.greater_than_or_equal,
        _F.less_than,
        _F.less_than_or_equal,
        _F.number_between,
        _F.is_empty,
        _F.is_not_empty,
    }
)

DATE_OPERATORS: FrozenSet[FilterOperator] = frozenset(
    {_F.date_equals, _F.date_before, _F.date_after, _F.date_between, _F.is_empty, _F.is_not_empty}
    | RELATIVE_DATE_OPERATORS
)

MULTI_VALUE_OPERATORS: FrozenSet[FilterOperator] = frozenset(
    {
        _F.includes,
        _F.not_includes,
        _F.includes_all,
        _F.includes_any,
        _F.is_empty,
        _F.is_not_empty,
    }
)

BOOLEAN_OPERATORS: FrozenSet[FilterOperator] = frozenset({_F.is_true, _F.is_false})

_T = PropertyType

CATEGORY_BY_TYPE: Dict[PropertyType, OperatorCategory] = {
    _T.text: OperatorCategory.text,
    _T.rich_text: OperatorCategory.text,
    _T.url: OperatorCategory.text,
    _T.email: OperatorCategory.text,
    _T.phone: OperatorCategory.text,
    _T.icon: OperatorCategory.text,
    _T.select: OperatorCategory.text,
    _T.number: OperatorCategory.number,
    _T.progress: OperatorCategory.number,
    _T.date: OperatorCategory.date,
    _T.multi_select: OperatorCategory.multi_value,
    _T.relation: OperatorCategory.multi_value,
    _T.boolean: OperatorCategory.boolean,
}

OPERATORS_BY_TYPE: Dict[PropertyType, FrozenSet[FilterOperator]] = {
    _T.text: TEXT_OPERATORS,
    _T.rich_text: TEXT_OPERATORS,
    _T.url: TEXT_OPERATORS,
    _T.email: TEXT_OPERATORS,
    _T.phone: TEXT_OPERATORS,
    _T.icon: TEXT_OPERATORS,
    _T.select: SELECT_OPERATORS,
    _T.number: NUMBER_OPERATORS,
    _T.progress: NUMBER_OPERATORS,
    _T.date: DATE_OPERATORS,
    _T.multi_select: MULTI_VALUE_OPERATORS,
    _T.relation: MULTI_VALUE_OPERATORS,
    _T.boolean: BOOLEAN_OPERATORS,
}


def category_for(prop_type: PropertyType | str) -> OperatorCategory:
    return CATEGORY_BY_TYPE[PropertyType(prop_type)]


def operators_for(prop_type: PropertyType | str) -> FrozenSet[FilterOperator]:
    return OPERATORS_BY_TYPE[PropertyType(prop_type)]


def is_operator_allowed(prop_type: PropertyType | str, operator: FilterOperator | str) -> bool:
    try:
        op = FilterOperator(operator)
    except ValueError:
        return False
    return op in operators_for(prop_type)
