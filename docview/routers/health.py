# File: /docview/routers/health.py | Version: 2.0 | Title: Health & readiness endpoints
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from docview import __version__
from docview.db import Base
from docview.db.session import engine
from docview.dependencies import get_registry
from docview.engine.registry import ModuleRegistry

log = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/healthz")
def healthz(registry: ModuleRegistry = Depends(get_registry)) -> dict:
    """Liveness: the process serves requests and the module registry is built."""
    return {"status": "ok", "version": __version__, "modules": len(registry.list())}


@router.get("/readyz")
def readyz():
    """
    Readiness: 200 when the database answers and the view engine tables exist
    (i.e. migrations have run), else 503 with the missing tables.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            existing = set(inspect(conn).get_table_names())
    except SQLAlchemyError as exc:  # pragma: no cover
        log.warning("Readiness check failed: %s", exc)
        return JSONResponse({"status": "degraded", "db": "error"}, status_code=503)

    missing = sorted(set(Base.metadata.tables) - existing)
    if missing:
        return JSONResponse({"status": "degraded", "db": "ok", "missingTables": missing}, status_code=503)
    return {"status": "ok", "db": "ok"}
