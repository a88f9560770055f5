# File: /docview/routers/__init__.py | Version: 1.0 | Title: Routers package
from . import health, modules, properties, records, views

__all__ = ["health", "modules", "properties", "records", "views"]
