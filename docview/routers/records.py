# File: /docview/routers/records.py | Version: 1.0 | Title: Record projection & insertion endpoints
from datetime import UTC, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from docview.core.config import settings
from docview.core.errors import ConflictError, ValidationError
from docview.crud.records import SqlRecordStorage
from docview.dependencies import get_projector, get_property_schema, get_record_storage
from docview.engine.filters import is_empty_value
from docview.engine.projector import RecordProjector
from docview.schemas.records import ProjectionOut, RecordCreate, RecordOut
from docview.security import get_current_owner
from docview.services.property_schema import PropertySchema

router = APIRouter(prefix="/modules/{module_id}/records", tags=["Records"])

_TIMESTAMPS = ("createdAt", "updatedAt")


@router.get("", response_model=ProjectionOut, summary="Apply a view (default if none) to my records")
def project(
    module_id: str,
    view_id: Optional[str] = Query(default=None, alias="viewId"),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, alias="perPage"),
    projector: RecordProjector = Depends(get_projector),
    owner_id: str = Depends(get_current_owner),
):
    return projector.apply(module_id, owner_id, view_id=view_id, page=page, per_page=per_page)


@router.post("", response_model=RecordOut, status_code=status.HTTP_201_CREATED, summary="Insert a record")
def create_record(
    module_id: str,
    data: RecordCreate,
    schema: PropertySchema = Depends(get_property_schema),
    storage: SqlRecordStorage = Depends(get_record_storage),
    owner_id: str = Depends(get_current_owner),
):
    props = schema.schema_map(module_id)
    payload = dict(data.data)
    missing = [p.id for p in props.values() if p.required and is_empty_value(payload.get(p.id))]
    if missing:
        raise ValidationError("Missing required properties", details={"missing": missing})
    if data.id and storage.get_record(module_id, owner_id, data.id) is not None:
        raise ConflictError(f"Record '{data.id}' already exists")

    stamp = datetime.now(UTC).isoformat()
    for key in _TIMESTAMPS:
        if key in props and key not in payload:
            payload[key] = stamp
    record = storage.create_record(module_id, owner_id, payload, record_id=data.id)
    return RecordOut(id=record["id"], data={k: v for k, v in record.items() if k != "id"})
