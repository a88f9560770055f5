# File: /docview/core/errors.py | Version: 1.0 | Title: View engine error taxonomy
"""
Errors raised by the view engine and its services.

Every error carries a machine-readable ``kind`` and a human message. They are
recoverable at the caller boundary; the HTTP layer turns them into structured
JSON responses (see ``docview.core.error_handlers``).
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class DocViewError(Exception):
    kind: str = "error"
    status_code: int = 400

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(DocViewError):
    """Operator not valid for a property type, or a malformed filter/sort value."""

    kind = "validation"
    status_code = 422


class NotFoundError(DocViewError):
    kind = "not_found"
    status_code = 404


class ForbiddenError(DocViewError):
    """Mutation of a frozen property/view, or deletion of the last view."""

    kind = "forbidden"
    status_code = 403


class ConflictError(DocViewError):
    kind = "conflict"
    status_code = 409
