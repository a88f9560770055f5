# File: /docview/__init__.py | Version: 1.0 | Title: Document-View Engine package
__version__ = "1.0.0"
