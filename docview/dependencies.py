# File: /docview/dependencies.py | Version: 2.0 | Title: Request-scoped wiring for engine services
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from docview.crud.records import SqlRecordStorage
from docview.db.session import get_db
from docview.engine.projector import RecordProjector
from docview.engine.registry import ModuleRegistry, build_default_registry
from docview.services.property_schema import PropertySchema
from docview.services.view_store import ViewStore


@lru_cache(maxsize=1)
def get_registry() -> ModuleRegistry:
    return build_default_registry()


def get_record_storage(db: Session = Depends(get_db)) -> SqlRecordStorage:
    return SqlRecordStorage(db)


def get_property_schema(
    db: Session = Depends(get_db),
    registry: ModuleRegistry = Depends(get_registry),
    storage: SqlRecordStorage = Depends(get_record_storage),
) -> PropertySchema:
    return PropertySchema(db, registry, storage)


def get_view_store(
    db: Session = Depends(get_db),
    registry: ModuleRegistry = Depends(get_registry),
    schema: PropertySchema = Depends(get_property_schema),
) -> ViewStore:
    return ViewStore(db, registry, schema)


def get_projector(
    views: ViewStore = Depends(get_view_store),
    schema: PropertySchema = Depends(get_property_schema),
    storage: SqlRecordStorage = Depends(get_record_storage),
) -> RecordProjector:
    return RecordProjector(views, schema, storage)
