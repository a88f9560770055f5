# File: /docview/main.py | Version: 2.0 | Title: FastAPI App (module registry, views, properties & record projection)
from __future__ import annotations

import logging

from fastapi import FastAPI

from docview import __version__
from docview.core.config import settings
from docview.core.error_handlers import register_engine_handlers
from docview.core.logging import configure_logging
from docview.observability.sentry import init_sentry_if_configured
from docview.routers import health, modules, properties, records, views

# Initialize logging & observability
configure_logging()
logging.getLogger("python_multipart.multipart").setLevel(logging.WARNING)
init_sentry_if_configured()

# App
app = FastAPI(title="Document View Engine API", version=__version__)
register_engine_handlers(app)

app.include_router(health.router)
app.include_router(modules.router)
app.include_router(properties.router)
app.include_router(views.router)
app.include_router(records.router)

# Optional standardized error responses
if getattr(settings, "ENABLE_STD_ERRORS", False):
    from docview.core.error_handlers import register_exception_handlers

    register_exception_handlers(app)
