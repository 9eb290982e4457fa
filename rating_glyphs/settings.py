"""
Laden, Speichern und Ändern der Rating-Settings.

Persistiert wird ein flaches JSON-Objekt (wie ``data.json`` eines
Obsidian-Plugins)::

  {
    "textPrefix": "$-",
    "ratingDivider": "/",
    "filledStroke": "★",
    "emptyStroke": "☆"
  }

Fehlende Schlüssel werden beim Laden mit den Defaults aufgefüllt,
unbekannte Schlüssel ignoriert.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from rating_glyphs.renderer import (
    DEFAULT_SETTINGS,
    RatingSettings,
    describe_preview,
)
from rating_glyphs.schema import SettingsError, settings_schema_path, validate_payload

PLUGIN_ID = "rating"
DEFAULT_SETTINGS_FILE = Path("data.json")

# wire name -> dataclass field
WIRE_FIELDS: Dict[str, str] = {
    "textPrefix": "text_prefix",
    "ratingDivider": "rating_divider",
    "filledStroke": "filled_stroke",
    "emptyStroke": "empty_stroke",
}


@dataclass(frozen=True)
class SettingField:
    key: str
    name: str
    description: str
    placeholder: str


SETTING_FIELDS: List[SettingField] = [
    SettingField(
        "text_prefix",
        "Text Prefix",
        "Enter the text that comes before the rating in the code block. This is "
        "used to tell the plugin that the encompassing codeblock is a rating.",
        DEFAULT_SETTINGS.text_prefix,
    ),
    SettingField(
        "rating_divider",
        "Rating Divider",
        "Here you can customize the text that divides the rating number from the "
        "total number.",
        DEFAULT_SETTINGS.rating_divider,
    ),
    SettingField(
        "filled_stroke",
        "Filled Rating Item",
        "Enter the unicode character you'd like to represent a filled rating item.",
        DEFAULT_SETTINGS.filled_stroke,
    ),
    SettingField(
        "empty_stroke",
        "Empty Rating Item",
        "Enter the unicode character you'd like to represent an empty rating item.",
        DEFAULT_SETTINGS.empty_stroke,
    ),
]


def resolve_settings_path(arg: Optional[Path] = None) -> Path:
    """Arg > RATING_SETTINGS > VAULT_ROOT plugin data > ./data.json"""
    if arg:
        return Path(arg)
    env_path = os.environ.get("RATING_SETTINGS")
    if env_path:
        return Path(env_path)
    vault_root = os.environ.get("VAULT_ROOT")
    if vault_root:
        return Path(vault_root) / ".obsidian" / "plugins" / PLUGIN_ID / "data.json"
    return DEFAULT_SETTINGS_FILE


def settings_from_json(data: Dict[str, Any]) -> RatingSettings:
    values = {
        field: data[wire] for wire, field in WIRE_FIELDS.items() if wire in data
    }
    return replace(DEFAULT_SETTINGS, **values)


def load_settings(path: Path) -> RatingSettings:
    """Read settings from ``path``; a missing file yields the defaults."""
    if not path.exists():
        return DEFAULT_SETTINGS

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SettingsError(f"Failed to parse settings JSON {path}: {e}") from e

    # "null" schreibt der Host für leere Plugin-Daten
    if data is None:
        return DEFAULT_SETTINGS

    validate_payload(data, settings_schema_path(), label=f"Settings {path}")
    return settings_from_json(data)


def save_settings(settings: RatingSettings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(settings.to_json(), fh, ensure_ascii=False, indent=2)
        fh.write("\n")


class SettingsController:
    """Owns the current settings value and persists every change."""

    def __init__(self, store_path: Path):
        self.store_path = store_path
        self.settings = load_settings(store_path)

    def update(self, **changes: str) -> str:
        """Apply field changes, save, and return the refreshed preview sentence."""
        unknown = set(changes) - set(WIRE_FIELDS.values())
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        for key, value in changes.items():
            if not isinstance(value, str):
                raise ValueError(f"Setting {key} must be a string, got {type(value)!r}")

        self.settings = replace(self.settings, **changes)
        save_settings(self.settings, self.store_path)
        return self.preview()

    def preview(self) -> str:
        return describe_preview(self.settings)
