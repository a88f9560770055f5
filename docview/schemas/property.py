# File: /docview/schemas/property.py | Version: 1.1 | Title: Property schema definitions
from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from docview.engine.operators import PropertyType
from docview.schemas._base import BaseSchema


def _check_unique_options(options):
    if options:
        ids = [o.id for o in options]
        if len(ids) != len(set(ids)):
            raise ValueError("Select option ids must be unique")
    return options


class SelectOption(BaseSchema):
    id: str = Field(min_length=1)
    name: str
    color: Optional[str] = None


class Property(BaseSchema):
    id: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=200)
    type: PropertyType
    order: int = 0
    width: int = 150
    visible: bool = True
    frozen: bool = False
    required: bool = False
    options: Optional[List[SelectOption]] = None
    description: Optional[str] = None

    def option_ids(self) -> List[str]:
        return [o.id for o in self.options or []]


class PropertyCreate(BaseSchema):
    # `frozen` is owned by the module's FrozenConfig and never accepted from callers
    id: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=200)
    type: PropertyType
    order: Optional[int] = None
    width: int = 150
    visible: bool = True
    required: bool = False
    options: Optional[List[SelectOption]] = None
    description: Optional[str] = None

    @field_validator("options")
    @classmethod
    def unique_option_ids(cls, v):
        return _check_unique_options(v)


class PropertyUpdate(BaseSchema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    type: Optional[PropertyType] = None
    order: Optional[int] = None
    width: Optional[int] = None
    visible: Optional[bool] = None
    required: Optional[bool] = None
    options: Optional[List[SelectOption]] = None
    description: Optional[str] = None

    @field_validator("options")
    @classmethod
    def unique_option_ids(cls, v):
        return _check_unique_options(v)
