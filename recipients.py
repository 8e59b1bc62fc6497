"""Recipient provider: ``LabelData`` records from JSON exports."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from label_types import LabelData

logger = logging.getLogger(__name__)

_FIELD_ALIASES = {
    "zip_code": "zip",
    "postal_code": "zip",
    "name": "contact",
    "address_1": "address1",
    "address_2": "address2",
}
_FIELDS = ("contact", "address1", "address2", "city", "state", "zip")


def _normalize_key(key: str) -> str:
    key = key.strip().lower().replace("-", "_")
    return _FIELD_ALIASES.get(key, key)


def recipient_from_record(record: Mapping[str, Any]) -> LabelData:
    """Build a ``LabelData``; missing or null fields become empty strings."""

    values: dict[str, str] = {}
    for key, value in record.items():
        name = _normalize_key(str(key))
        if name in _FIELDS and name not in values and value is not None:
            values[name] = str(value).strip()
    return LabelData(**values)


def recipients_from_records(records: Iterable[Mapping[str, Any]]) -> list[LabelData]:
    recipients: list[LabelData] = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ValueError(f"Recipient #{index + 1} is not an object.")
        recipients.append(recipient_from_record(record))
    return recipients


def load_recipients(path: str | Path) -> list[LabelData]:
    """Read a JSON list of recipient objects from ``path``."""

    source = Path(path).expanduser()
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SystemExit(f"Recipient file '{source}' does not exist.") from exc
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Recipient file '{source}' is not valid JSON: {exc}") from exc

    if isinstance(payload, Mapping):
        payload = payload.get("recipients", [])
    if not isinstance(payload, list):
        raise SystemExit(f"Recipient file '{source}' must contain a JSON list.")

    try:
        recipients = recipients_from_records(payload)
    except ValueError as exc:
        raise SystemExit(f"Recipient file '{source}': {exc}") from exc
    logger.debug("Loaded %d recipients from %s", len(recipients), source)
    return recipients


__all__ = ["load_recipients", "recipient_from_record", "recipients_from_records"]
