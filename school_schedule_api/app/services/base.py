"""
Helpers shared by the service classes.

Services operate on a ``Dataset`` loaded by the request handler.  They
validate first and mutate last, so a rejected call leaves the dataset
exactly as it was loaded.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from school_schedule_api.app.core.errors import MissingField
from school_schedule_api.app.core.store import Dataset


def utc_now_iso() -> str:
    """Current instant as an ISO-8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()


def is_blank(value: Any) -> bool:
    """``None`` and whitespace-only strings count as absent input."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require_fields(fields: Dict[str, Any]) -> None:
    """Raise ``MissingField`` naming every blank entry of ``fields``."""
    missing = [name for name, value in fields.items() if is_blank(value)]
    if missing:
        raise MissingField(f"Campos obrigatórios ausentes: {', '.join(missing)}")


def find_record(records: Iterable[Dict[str, Any]], record_id: Any) -> Optional[Dict[str, Any]]:
    """Return the first record whose ``id`` equals ``record_id``."""
    for record in records:
        if record.get("id") == record_id:
            return record
    return None


def next_id(dataset: Dataset, collection: str) -> int:
    """Hand out the next id of ``collection`` and remember it.

    The counter never goes below the highest id present, so documents
    written before counters existed keep working, and ids freed by a
    delete are never handed out again.
    """
    records: List[Dict[str, Any]] = getattr(dataset, collection)
    highest = max(
        (record["id"] for record in records if isinstance(record.get("id"), int)),
        default=0,
    )
    new_id = max(dataset.sequences.get(collection, 0), highest) + 1
    dataset.sequences[collection] = new_id
    return new_id
