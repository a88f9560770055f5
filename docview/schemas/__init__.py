# File: /docview/schemas/__init__.py | Version: 2.0 | Path: /docview/schemas/__init__.py
from . import module, property, records, view

__all__ = ["module", "property", "records", "view"]
