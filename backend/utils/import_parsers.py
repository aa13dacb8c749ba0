"""Parse CSV and JSON uploads for location import."""
import csv
import json
import re
from io import StringIO
from typing import Any

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _normalize_key(k: str) -> str:
    """Strip and convert camelCase to snake_case (qrCodeId -> qr_code_id); empty means missing."""
    k = k.strip() if k else ""
    return _CAMEL_RE.sub("_", k).lower() if k else ""


def _normalize_row(row: dict[str, Any]) -> dict[str, Any]:
    """Normalize keys and strip string values; drop empty keys and rows with only blank values."""
    out: dict[str, Any] = {}
    for k, v in row.items():
        key = _normalize_key(k) if isinstance(k, str) else ""
        if not key:
            continue
        if isinstance(v, str):
            val = v.strip()
        else:
            val = v
        out[key] = val
    if all(v is None or v == "" for v in out.values()):
        return {}
    return out


def parse_csv(content: bytes) -> list[dict[str, Any]]:
    """Parse CSV bytes into list of dicts. Skip empty rows."""
    text = content.decode("utf-8-sig", errors="replace")
    reader = csv.DictReader(StringIO(text))
    rows: list[dict[str, Any]] = []
    for row in reader:
        normalized = _normalize_row(dict(row))
        if not normalized:
            continue
        rows.append(normalized)
    return rows


def parse_json(content: bytes) -> list[dict[str, Any]]:
    """Parse JSON bytes (expect list of objects) into list of dicts."""
    try:
        data = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError("JSON must be an array of objects")
    rows: list[dict[str, Any]] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Row {i + 1} is not an object")
        normalized = _normalize_row(item)
        if not normalized:
            continue
        rows.append(normalized)
    return rows


def parse_upload(content: bytes, filename: str | None) -> list[dict[str, Any]]:
    """Detect format from filename or content and parse. Raises ValueError if invalid."""
    if filename and filename.lower().endswith(".json"):
        return parse_json(content)
    if filename and filename.lower().endswith(".csv"):
        return parse_csv(content)
    # Detect from content: JSON array starts with [
    stripped = content.lstrip()
    if stripped.startswith(b"["):
        return parse_json(content)
    return parse_csv(content)
