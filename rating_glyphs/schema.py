"""
schema.py

Validation of persisted payloads against the JSON contracts in
``rating_glyphs/contracts``.
"""

import json
import os
from functools import lru_cache
from pathlib import Path

import jsonschema

CONTRACTS_DIR = Path(__file__).resolve().parent / "contracts"
SETTINGS_SCHEMA = CONTRACTS_DIR / "rating.settings.schema.json"


class SettingsError(ValueError):
    """Settings file cannot be read or violates its contract."""


def settings_schema_path() -> Path:
    # Env > mitgelieferter Contract
    override = os.environ.get("RATING_SCHEMA_SETTINGS")
    return Path(override) if override else SETTINGS_SCHEMA


@lru_cache(maxsize=8)
def _get_cached_validator(path: str, mtime_ns: int, size: int):
    # mtime/size sind nur Cache-Schlüssel: geänderte Datei -> neuer Eintrag
    schema = json.loads(Path(path).read_text(encoding="utf-8"))
    return jsonschema.Draft202012Validator(
        schema, format_checker=jsonschema.FormatChecker()
    )


def validate_payload(payload: dict, schema_path: Path, label: str = "Payload") -> None:
    """
    Validates a payload against the given schema file.
    """
    if not schema_path.exists():
        raise SettingsError(f"Schema file not found at {schema_path}")

    stat = schema_path.stat()
    try:
        validator = _get_cached_validator(
            str(schema_path), stat.st_mtime_ns, stat.st_size
        )
    except json.JSONDecodeError as e:
        raise SettingsError(f"Failed to parse schema JSON: {e}") from e

    try:
        validator.validate(payload)
    except jsonschema.ValidationError as e:
        raise SettingsError(f"{label} failed schema validation: {e.message}") from e
