"""Visual resources produced by a path and handed to its container.

These are plain descriptions; the rendering layer turns them into meshes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Sequence

import numpy as np

from path_editor.checkpoint import CheckpointLike
from path_editor.geometry import (
    FLOOR_HEIGHT,
    catmull_rom_points,
    project_to_floor,
    speed_profile,
    width_attribute,
)

CURVE_COLOR = 0xFFFFFF
CLOSED_CURVE_COLOR = 0x42F4CE
CURVE_OFFSET_Y = -20.0
FLOOR_DECAL_Y = -20.0
FLOOR_DECAL_SCALE = 0.5
FLOOR_DECAL_SIZE = 150.0
FLOOR_CURVE_LINE_WIDTH = 5.0
HEIGHT_LINE_WIDTH = 5.0
ARROW_TEXTURE = "assets/textures/pathArrow2.png"
FLOOR_MARK_TEXTURE = "assets/textures/checkpointFloor.png"


@dataclass(frozen=True)
class CurveStyle:
    resolution: tuple[int, int] = (1920, 1080)
    line_width: float = 100.0
    point_multiplier: int = 10


@dataclass
class CurveMesh:
    points: np.ndarray
    widths: list[float] = field(default_factory=list)
    point_speeds: list[float] = field(default_factory=list)
    color: int = CURVE_COLOR
    line_width: float = 100.0
    resolution: tuple[int, int] | None = None
    texture: str | None = None
    texture_repeat: tuple[float, float] = (1.0, 1.0)
    offset_y: float = CURVE_OFFSET_Y

    @property
    def point_count(self) -> int:
        return int(self.points.shape[0])


@dataclass
class HeightIndicator:
    checkpoint_name: str
    start: np.ndarray
    end: np.ndarray
    line_width: float = HEIGHT_LINE_WIDTH
    dash_array: float = 0.1
    dash_ratio: float = 0.5
    resolution: tuple[int, int] | None = None

    @property
    def height(self) -> float:
        return float(self.end[1] - self.start[1])


@dataclass
class FloorDecal:
    checkpoint_name: str
    position: np.ndarray
    color: int
    size: float = FLOOR_DECAL_SIZE
    scale: float = FLOOR_DECAL_SCALE
    rotation_x: float = -math.pi / 2
    texture: str = FLOOR_MARK_TEXTURE


def _positions(checkpoints: Sequence[CheckpointLike]) -> np.ndarray:
    return np.array([np.asarray(cp.position, dtype=float) for cp in checkpoints]).reshape(-1, 3)


def build_guidance_curve(checkpoints: Sequence[CheckpointLike], style: CurveStyle) -> CurveMesh:
    """Sample the travel curve and derive its per-vertex widths from checkpoint speeds.

    Each sampled point takes the speed of its nearest preceding checkpoint;
    the widths stretch that bucketed profile over the line's vertex pairs.
    """
    multiplier = style.point_multiplier
    points = catmull_rom_points(_positions(checkpoints), len(checkpoints) * multiplier)
    speeds = [float(cp.speed) for cp in checkpoints]
    point_speeds = speed_profile(speeds, len(points), multiplier)
    return CurveMesh(
        points=points,
        widths=width_attribute(point_speeds, multiplier),
        point_speeds=point_speeds,
        line_width=style.line_width,
        resolution=style.resolution,
        texture=ARROW_TEXTURE,
        texture_repeat=(float(len(points)), 1.0),
    )


def build_floor_curve(checkpoints: Sequence[CheckpointLike], style: CurveStyle) -> CurveMesh:
    flat = np.array([project_to_floor(p) for p in _positions(checkpoints)]).reshape(-1, 3)
    points = catmull_rom_points(flat, len(checkpoints) * style.point_multiplier)
    return CurveMesh(points=points, line_width=FLOOR_CURVE_LINE_WIDTH)


def build_indicators(
    checkpoints: Sequence[CheckpointLike], style: CurveStyle
) -> tuple[list[HeightIndicator], list[FloorDecal]]:
    height_lines: list[HeightIndicator] = []
    floor_marks: list[FloorDecal] = []
    for checkpoint in checkpoints:
        position = np.asarray(checkpoint.position, dtype=float).copy()
        height_lines.append(
            HeightIndicator(
                checkpoint_name=checkpoint.name,
                start=project_to_floor(position, FLOOR_HEIGHT),
                end=position,
                resolution=style.resolution,
            )
        )
        floor_marks.append(
            FloorDecal(
                checkpoint_name=checkpoint.name,
                position=project_to_floor(position, FLOOR_DECAL_Y),
                color=checkpoint.grounded_color,
            )
        )
    return height_lines, floor_marks
