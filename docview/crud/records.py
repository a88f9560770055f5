# File: /docview/crud/records.py | Version: 1.1 | Title: SQL-backed record storage (JSON documents)
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from docview.core.errors import ConflictError
from docview.engine.storage import FilterHint
from docview.models.record import ModuleRecord

log = logging.getLogger(__name__)


def row_to_record(row: ModuleRecord) -> Dict[str, Any]:
    record = dict(row.data or {})
    record["id"] = row.id
    return record


def _sqlite_hint(property_id: str, accepted: Sequence[str]):
    path = '$."%s"' % property_id.replace('"', '\\"')
    value = func.json_extract(ModuleRecord.data, path)
    return or_(
        func.json_type(ModuleRecord.data, path) != "text",
        func.lower(value).in_(accepted),
        value.op("GLOB")("*[^ -~]*"),
    )


def _postgresql_hint(property_id: str, accepted: Sequence[str]):
    value = ModuleRecord.data[property_id].as_string()
    return or_(
        func.json_typeof(ModuleRecord.data[property_id]) != "string",
        func.lower(value).in_(accepted),
        value.op("~")("[^ -~]"),
    )


_HINT_CLAUSES = {"sqlite": _sqlite_hint, "postgresql": _postgresql_hint}


class SqlRecordStorage:
    """RecordStorage over the ``module_records`` table."""

    def __init__(self, db: Session):
        self.db = db

    def _hint_clauses(self, filter_hint: Optional[FilterHint]) -> list:
        """
        SQL narrowing for an equality hint.

        A row is ruled out only when its stored value is a printable-ASCII JSON
        string outside the accepted set; missing keys never equal a non-empty
        value. Numbers, booleans and non-ASCII strings stay in for the evaluator
        to decide. Unknown dialects get no narrowing.
        """
        if not filter_hint:
            return []
        build = _HINT_CLAUSES.get(self.db.get_bind().dialect.name)
        if build is None:
            return []
        return [build(pid, [v.lower() for v in accepted]) for pid, accepted in filter_hint.items()]

    def fetch_candidates(
        self, module_id: str, owner_id: str, filter_hint: Optional[FilterHint] = None
    ) -> List[Dict[str, Any]]:
        q = self.db.query(ModuleRecord).filter(
            ModuleRecord.module_id == module_id,
            ModuleRecord.owner_id == owner_id,
            *self._hint_clauses(filter_hint),
        )
        rows = q.order_by(ModuleRecord.seq.asc()).all()
        log.debug("Fetched %d candidate records for %s/%s", len(rows), module_id, owner_id)
        return [row_to_record(r) for r in rows]

    def property_in_use(self, module_id: str, property_id: str) -> bool:
        rows = self.db.query(ModuleRecord.data).filter(ModuleRecord.module_id == module_id).all()
        for (data,) in rows:
            value = (data or {}).get(property_id)
            if value is not None and value != "" and value != []:
                return True
        return False

    def create_record(
        self, module_id: str, owner_id: str, data: Dict[str, Any], record_id: Optional[str] = None
    ) -> Dict[str, Any]:
        payload = {k: v for k, v in data.items() if k != "id"}
        row = ModuleRecord(module_id=module_id, owner_id=owner_id, data=payload)
        if record_id:
            row.id = record_id
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Record '{record_id}' already exists", details={"recordId": record_id})
        self.db.refresh(row)
        return row_to_record(row)

    def get_record(self, module_id: str, owner_id: str, record_id: str) -> Optional[Dict[str, Any]]:
        row = (
            self.db.query(ModuleRecord)
            .filter(
                ModuleRecord.module_id == module_id,
                ModuleRecord.owner_id == owner_id,
                ModuleRecord.id == record_id,
            )
            .first()
        )
        return row_to_record(row) if row else None
