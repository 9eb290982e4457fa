import json
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

hypothesis = pytest.importorskip("hypothesis")
from hypothesis import given, settings, strategies as st  # type: ignore

from rating_glyphs.renderer import DEFAULT_SETTINGS, RatingSettings
from rating_glyphs.settings import (
    SETTING_FIELDS,
    SettingsController,
    SettingsError,
    load_settings,
    resolve_settings_path,
    save_settings,
)


def test_missing_file_yields_defaults(tmp_path):
    assert load_settings(tmp_path / "data.json") == DEFAULT_SETTINGS


def test_null_payload_yields_defaults(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("null", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_defaults_merged_for_missing_keys(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"filledStroke": "●", "other": 1}), encoding="utf-8")

    loaded = load_settings(path)
    assert loaded == RatingSettings(filled_stroke="●")


def test_saved_file_uses_wire_names(tmp_path):
    path = tmp_path / "plugins" / "rating" / "data.json"
    save_settings(DEFAULT_SETTINGS, path)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {
        "textPrefix": "$-",
        "ratingDivider": "/",
        "filledStroke": "★",
        "emptyStroke": "☆",
    }
    assert "★" in path.read_text(encoding="utf-8")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{ kaputt", encoding="utf-8")
    with pytest.raises(SettingsError, match="Failed to parse settings JSON"):
        load_settings(path)


@pytest.mark.parametrize("payload", [{"textPrefix": 3}, ["$-"], "text"])
def test_schema_violation_raises(tmp_path, payload):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(SettingsError, match="failed schema validation"):
        load_settings(path)


_values = st.text(max_size=6)


@settings(max_examples=50, deadline=None)
@given(
    st.fixed_dictionaries(
        {},
        optional={
            "textPrefix": _values,
            "ratingDivider": _values,
            "filledStroke": _values,
            "emptyStroke": _values,
        },
    )
)
def test_save_load_round_trip(payload):
    """Gespeicherte Settings kommen unverändert zurück, fehlende Felder als Default."""
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "data.json"
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        loaded = load_settings(path)

        for wire, value in DEFAULT_SETTINGS.to_json().items():
            assert loaded.to_json()[wire] == payload.get(wire, value)

        save_settings(loaded, path)
        assert load_settings(path) == loaded


def test_controller_update_persists_and_previews(tmp_path):
    path = tmp_path / "data.json"
    controller = SettingsController(path)

    sentence = controller.update(filled_stroke="●", empty_stroke="○")

    assert sentence == "`$-3/5` will appear as ●●●○○ in reading mode"
    assert load_settings(path) == RatingSettings(filled_stroke="●", empty_stroke="○")

    sentence = controller.update(text_prefix="", rating_divider=" of ")
    assert sentence == "`3 of 5` will appear as ●●●○○ in reading mode"
    assert SettingsController(path).settings == controller.settings


def test_controller_rejects_unknown_field(tmp_path):
    controller = SettingsController(tmp_path / "data.json")
    with pytest.raises(ValueError, match="Unknown setting"):
        controller.update(colour="red")
    assert not (tmp_path / "data.json").exists()


def test_setting_fields_cover_all_settings():
    keys = [field.key for field in SETTING_FIELDS]
    assert keys == ["text_prefix", "rating_divider", "filled_stroke", "empty_stroke"]


def test_resolve_settings_path_precedence(tmp_path):
    explicit = tmp_path / "explicit.json"
    with patch.dict(os.environ, {"RATING_SETTINGS": "env.json", "VAULT_ROOT": "/vault"}):
        assert resolve_settings_path(explicit) == explicit
        assert resolve_settings_path() == Path("env.json")

    with patch.dict(os.environ, {"VAULT_ROOT": "/vault"}, clear=True):
        assert resolve_settings_path() == Path("/vault/.obsidian/plugins/rating/data.json")

    with patch.dict(os.environ, {}, clear=True):
        assert resolve_settings_path() == Path("data.json")
