from pathlib import Path

import pytest

from path_editor.config import (
    CONFIG_FILENAME,
    PathEditorSettings,
    config_path,
    load_settings,
    save_settings,
)


def test_missing_file_returns_defaults(tmp_path):
    assert load_settings(tmp_path / "missing.ini") == PathEditorSettings()


def test_values_are_read_from_sections(tmp_path):
    ini = tmp_path / CONFIG_FILENAME
    ini.write_text(
        "[path]\n"
        "proximity_threshold = 42.5\n"
        "spline_point_multiplier = 4\n"
        "hit_policy = Closest\n"
        "gesture_hold_seconds = 0.75\n"
        "[render]\n"
        "render_width = 800\n"
        "render_height = 600\n",
        encoding="utf-8",
    )

    settings = load_settings(ini)

    assert settings.proximity_threshold == 42.5
    assert settings.spline_point_multiplier == 4
    assert settings.hit_policy == "closest"
    assert settings.gesture_hold_seconds == 0.75
    assert settings.resolution == (800, 600)
    assert settings.checkpoint_scale == 10.0


def test_invalid_values_fall_back_per_key(tmp_path, caplog):
    ini = tmp_path / CONFIG_FILENAME
    ini.write_text(
        "[path]\n"
        "proximity_threshold = far\n"
        "hit_policy = random\n"
        "gesture_threshold_frames = -3\n"
        "checkpoint_scale = 5\n",
        encoding="utf-8",
    )

    with caplog.at_level("WARNING"):
        settings = load_settings(ini)

    assert settings.proximity_threshold == 100.0
    assert settings.hit_policy == "first"
    assert settings.gesture_threshold_frames == 30
    assert settings.checkpoint_scale == 5.0
    assert "proximity_threshold" in caplog.text


def test_malformed_file_returns_defaults(tmp_path):
    ini = tmp_path / CONFIG_FILENAME
    ini.write_text("this is not an ini file\n", encoding="utf-8")

    assert load_settings(ini) == PathEditorSettings()


def test_save_and_load_round_trip(tmp_path):
    ini = tmp_path / "nested" / CONFIG_FILENAME
    settings = PathEditorSettings(proximity_threshold=60.0, hit_policy="closest", gesture_hold_seconds=0.5)

    save_settings(ini, settings)

    assert load_settings(ini) == settings


def test_config_path_next_to_main_script(tmp_path, monkeypatch):
    monkeypatch.delenv("PATH_EDITOR_CONFIG", raising=False)
    script = tmp_path / "app" / "main.py"

    assert config_path(script) == (tmp_path / "app").resolve() / CONFIG_FILENAME


def test_config_path_env_override(tmp_path, monkeypatch):
    override = tmp_path / "custom.ini"
    monkeypatch.setenv("PATH_EDITOR_CONFIG", str(override))

    assert config_path(Path("ignored.py")) == override


def test_settings_validate_hit_policy_in_code():
    assert PathEditorSettings(hit_policy="closest").hit_policy == "closest"
    with pytest.raises(ValueError):
        PathEditorSettings(hit_policy="random")
