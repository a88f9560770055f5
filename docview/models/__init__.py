# File: /docview/models/__init__.py | Version: 1.0 | Title: Models Package Exports
from .property import ModuleProperty
from .record import ModuleRecord
from .view import DocumentView

__all__ = ["DocumentView", "ModuleProperty", "ModuleRecord"]
