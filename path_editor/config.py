"""Configuration helpers for path editor settings persistence."""
from __future__ import annotations

from configparser import ConfigParser, Error
from dataclasses import dataclass, fields, replace
import logging
import os
from pathlib import Path
import sys
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "path_editor.ini"
_PATH_SECTION = "path"
_RENDER_SECTION = "render"
HIT_POLICIES = ("first", "closest")


@dataclass(frozen=True)
class PathEditorSettings:
    proximity_threshold: float = 100.0
    checkpoint_scale: float = 10.0
    spline_point_multiplier: int = 10
    gesture_threshold_frames: int = 30
    gesture_hold_seconds: Optional[float] = None
    hit_policy: str = "first"
    render_width: int = 1920
    render_height: int = 1080
    line_width: float = 100.0

    def __post_init__(self) -> None:
        if self.hit_policy not in HIT_POLICIES:
            raise ValueError(
                f"hit_policy must be one of {', '.join(HIT_POLICIES)}, got {self.hit_policy!r}"
            )

    @property
    def resolution(self) -> tuple[int, int]:
        return self.render_width, self.render_height


_SECTIONS = {
    "proximity_threshold": _PATH_SECTION,
    "checkpoint_scale": _PATH_SECTION,
    "spline_point_multiplier": _PATH_SECTION,
    "gesture_threshold_frames": _PATH_SECTION,
    "gesture_hold_seconds": _PATH_SECTION,
    "hit_policy": _PATH_SECTION,
    "render_width": _RENDER_SECTION,
    "render_height": _RENDER_SECTION,
    "line_width": _RENDER_SECTION,
}


def _config_dir(main_script_path: Optional[Path]) -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent
    if main_script_path is not None:
        return main_script_path.resolve().parent
    main_module = sys.modules.get("__main__")
    if main_module and getattr(main_module, "__file__", None):
        return Path(main_module.__file__).resolve().parent
    return Path.cwd()


def config_path(main_script_path: Optional[Path]) -> Path:
    override = os.getenv("PATH_EDITOR_CONFIG")
    if override:
        return Path(override)
    return _config_dir(main_script_path) / CONFIG_FILENAME


def _parse_value(name: str, raw: str, default: object) -> object:
    if name == "gesture_hold_seconds":
        if not raw.strip() or raw.strip().lower() == "none":
            return None
        value = float(raw)
        if value <= 0:
            raise ValueError("hold time must be positive")
        return value
    if name == "hit_policy":
        value = raw.strip().lower()
        if value not in HIT_POLICIES:
            raise ValueError(f"unknown hit policy {raw!r}")
        return value
    if isinstance(default, bool):
        raise ValueError("boolean settings are not supported")
    if isinstance(default, int):
        value = int(raw)
    else:
        value = float(raw)
    if value <= 0:
        raise ValueError("value must be positive")
    return value


def load_settings(ini_path: Path) -> PathEditorSettings:
    defaults = PathEditorSettings()
    if not ini_path.exists():
        return defaults
    parser = ConfigParser()
    try:
        with ini_path.open("r", encoding="utf-8") as handle:
            parser.read_file(handle)
    except (OSError, Error):
        logger.warning("Could not read settings from %s; using defaults", ini_path)
        return defaults

    overrides: dict[str, object] = {}
    for item in fields(PathEditorSettings):
        section = _SECTIONS[item.name]
        raw = parser.get(section, item.name, fallback=None)
        if raw is None:
            continue
        default = getattr(defaults, item.name)
        try:
            overrides[item.name] = _parse_value(item.name, raw, default)
        except ValueError:
            logger.warning("Ignoring invalid %s=%r in %s", item.name, raw, ini_path)
    return replace(defaults, **overrides)


def load_settings_for(main_script_path: Optional[Path]) -> PathEditorSettings:
    return load_settings(config_path(main_script_path))


def save_settings(ini_path: Path, settings: PathEditorSettings) -> None:
    parser = ConfigParser()
    parser.add_section(_PATH_SECTION)
    parser.add_section(_RENDER_SECTION)
    for item in fields(PathEditorSettings):
        value = getattr(settings, item.name)
        parser.set(_SECTIONS[item.name], item.name, "none" if value is None else str(value))
    ini_path.parent.mkdir(parents=True, exist_ok=True)
    with ini_path.open("w", encoding="utf-8") as handle:
        parser.write(handle)
