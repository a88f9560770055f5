# File: /docview/schemas/records.py | Version: 1.0 | Title: Record & projection output schemas
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from docview.schemas._base import BaseSchema
from docview.schemas.view import View


class RecordCreate(BaseSchema):
    id: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


class RecordOut(BaseSchema):
    id: str
    data: Dict[str, Any]


class Pagination(BaseSchema):
    page: int
    per_page: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


class GroupBucket(BaseSchema):
    key: Optional[str] = None
    label: str
    count: int
    record_ids: List[str] = Field(default_factory=list)


class ProjectionOut(BaseSchema):
    view: View
    records: List[Dict[str, Any]]
    pagination: Pagination
    groups: Optional[List[GroupBucket]] = None
