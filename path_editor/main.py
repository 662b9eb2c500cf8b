"""Entry point that replays a recorded pointer-event script into a path."""
from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path as FilePath
import sys
from typing import Any

from path_editor.config import PathEditorSettings, load_settings, load_settings_for
from path_editor.container import SceneContainer
from path_editor.events import PathEvent
from path_editor.geometry import Ray
from path_editor.path import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay a checkpoint path event script")
    parser.add_argument("script", help="JSON file with the recorded pointer events")
    parser.add_argument(
        "--config",
        default=None,
        help="Settings INI file. Defaults to path_editor.ini next to the program.",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("PATH_EDITOR_LOG_LEVEL", "INFO"),
        help=(
            "Logging level (e.g. DEBUG, INFO). Defaults to PATH_EDITOR_LOG_LEVEL "
            "environment variable or INFO."
        ),
    )
    parser.add_argument("--log-file", default=os.getenv("PATH_EDITOR_LOG_PATH"), help="Optional log file path.")
    parser.add_argument("--debug", action="store_true", help="Shortcut for --log-level DEBUG")
    return parser.parse_args(argv)


def configure_logging(log_level_name: str, log_path: str | None) -> int:
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_path:
        handlers.append(logging.FileHandler(log_path, mode="a", encoding="utf-8"))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )
    return log_level


def _apply_event(path: Path, event: dict[str, Any]) -> None:
    kind = event["type"]
    if kind == "ray":
        ray = Ray.from_vectors(event["origin"], event["direction"])
        result = path.on_ray_intersection(ray, event.get("position", event["origin"]), int(event.get("mode", 0)))
        logger.debug("Ray event -> %s", result.outcome)
    elif kind == "mode":
        path.activate_selected_checkpoint_mode(int(event["code"]))
    elif kind == "speed":
        if path.selected_checkpoint is not None:
            path.selected_checkpoint.speed = float(event["value"])
            path.rebuild_visuals()
    elif kind == "update":
        for _ in range(int(event.get("frames", 1))):
            path.update()
    elif kind == "release":
        path.close_reset()
    elif kind == "close":
        path.close()
    elif kind == "clear":
        path.clear()
    else:
        raise ValueError(f"Unknown event type {kind!r}")


def replay(script: dict[str, Any], settings: PathEditorSettings) -> Path:
    container = SceneContainer.from_translation(script.get("container_offset", (0.0, 0.0, 0.0)))
    path = Path(container, int(script.get("index", 0)), settings=settings)
    for event in PathEvent:
        path.on(event, lambda payload, error, event=event: logger.info("Path emitted %s", event.value))
    for event in script.get("events", []):
        _apply_event(path, event)
    return path


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging("DEBUG" if args.debug else args.log_level, args.log_file)

    if args.config:
        settings = load_settings(FilePath(args.config))
    else:
        settings = load_settings_for(None)

    script_path = FilePath(args.script)
    try:
        script = json.loads(script_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read event script %s: %s", script_path, exc)
        return 1
    if not isinstance(script, dict):
        logger.error("Event script %s must contain a JSON object", script_path)
        return 1

    try:
        path = replay(script, settings)
    except (KeyError, TypeError, ValueError) as exc:
        logger.error("Invalid event in %s: %s", script_path, exc)
        return 1

    print(json.dumps(path.path_data.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
