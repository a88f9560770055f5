# File: /docview/engine/storage.py | Version: 1.0 | Title: Record storage collaborator protocol
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence

# property id -> accepted values for an equality pre-filter
FilterHint = Dict[str, Sequence[str]]


class RecordStorage(Protocol):
    """
    Where records live. The engine only reads candidates from it.

    ``filter_hint`` is advisory: an implementation may use it to narrow the
    candidate set or ignore it entirely, since the engine re-applies every filter.
    Candidates must come back in insertion order.
    """

    def fetch_candidates(
        self, module_id: str, owner_id: str, filter_hint: Optional[FilterHint] = None
    ) -> List[Dict[str, Any]]: ...

    def property_in_use(self, module_id: str, property_id: str) -> bool: ...
