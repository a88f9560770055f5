# File: /docview/schemas/view.py | Version: 2.0 | Title: Pydantic v2 schemas for Views, Filters & Sorts
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, model_validator

from docview.engine.operators import FilterLogic, FilterOperator, SortDirection, ViewType
from docview.schemas._base import BaseSchema

EmptyStringHandling = Literal["first", "last", "as_null"]


# ---- Filters ----


class DateRange(BaseSchema):
    start: Optional[str] = None
    end: Optional[str] = None
    include_time: bool = False


class NumberRange(BaseSchema):
    min: Optional[float] = None
    max: Optional[float] = None


class TextSearch(BaseSchema):
    whole_word: bool = False
    regex: bool = False


class FilterConfig(BaseSchema):
    date_range: Optional[DateRange] = None
    number_range: Optional[NumberRange] = None
    text_search: Optional[TextSearch] = None


class Filter(BaseSchema):
    order: int = 0
    property_id: str = Field(min_length=1)
    operator: FilterOperator
    value: Optional[Any] = None
    logic: FilterLogic = FilterLogic.AND
    enabled: bool = True
    group_id: Optional[int] = None
    case_sensitive: bool = False
    config: Optional[FilterConfig] = None


# ---- Sorts ----


class SortConfig(BaseSchema):
    case_sensitive: bool = False
    locale: Optional[str] = None
    treat_as_number: bool = False
    date_format: Optional[str] = None
    custom_comparator: Optional[str] = None
    nulls_first: bool = False
    empty_string_handling: EmptyStringHandling = "as_null"


class Sort(BaseSchema):
    order: int = 0
    property_id: str = Field(min_length=1)
    direction: SortDirection = SortDirection.ASC
    enabled: bool = True
    config: Optional[SortConfig] = None

    @model_validator(mode="before")
    @classmethod
    def upper_direction(cls, data: Any) -> Any:
        # Seed data and older clients send "asc"/"desc"
        if isinstance(data, dict) and isinstance(data.get("direction"), str):
            data = {**data, "direction": data["direction"].upper()}
        return data


# ---- Views ----


class View(BaseSchema):
    id: str
    name: str = Field(min_length=1, max_length=200)
    type: ViewType = ViewType.TABLE
    is_default: bool = False
    frozen: bool = False
    visible_properties: List[str] = Field(default_factory=list)
    group_by: Optional[str] = None
    filters: List[Filter] = Field(default_factory=list)
    sorts: List[Sort] = Field(default_factory=list)
    config: Dict[str, Any] = Field(default_factory=dict)
    description: Optional[str] = None


class ViewCreate(BaseSchema):
    name: str = Field(min_length=1, max_length=200)
    type: ViewType = ViewType.TABLE
    is_default: bool = False
    visible_properties: List[str] = Field(default_factory=list)
    group_by: Optional[str] = None
    filters: List[Filter] = Field(default_factory=list)
    sorts: List[Sort] = Field(default_factory=list)
    config: Dict[str, Any] = Field(default_factory=dict)
    description: Optional[str] = None


class ViewUpdate(BaseSchema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    type: Optional[ViewType] = None
    is_default: Optional[bool] = None
    visible_properties: Optional[List[str]] = None
    group_by: Optional[str] = None
    filters: Optional[List[Filter]] = None
    sorts: Optional[List[Sort]] = None
    config: Optional[Dict[str, Any]] = None
    description: Optional[str] = None


class ViewDuplicate(BaseSchema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
