"""Checkpoint contract and the reference checkpoint model used by :class:`Path`."""
from __future__ import annotations

from enum import IntEnum
import math
from typing import Any, Callable, Optional, Protocol, Sequence

import numpy as np

from path_editor.geometry import as_point


DEFAULT_SPEED = 1.0
GROUNDED_COLOR = 0xFFFFFF
FLOATING_COLOR = 0x4286F4


class EditMode(IntEnum):
    DESELECT = 0
    ROTATION = 1
    SPEED = 2
    HEIGHT = 3
    RESERVED = 4


class CheckpointLike(Protocol):
    """What :class:`path_editor.path.Path` needs from a checkpoint."""

    checkpoint_id: int
    name: str
    position: np.ndarray
    scale: float
    speed: float
    grounded_color: int

    def select_checkpoint(self) -> None: ...

    def deselect_checkpoint(self) -> None: ...

    def activate_rotation(self) -> None: ...

    def activate_speed(self) -> None: ...

    def activate_height(self) -> None: ...

    def get_orientation(self) -> float: ...

    def get_world_position(self) -> np.ndarray: ...

    def face_camera(self, target: Sequence[float] | np.ndarray) -> None: ...

    def update(self) -> None: ...


CheckpointFactory = Callable[[int, int, Any, Any], CheckpointLike]


def checkpoint_name(checkpoint_id: int) -> str:
    return f"checkpoint_{checkpoint_id}"


class Checkpoint:
    """A positioned, orientable waypoint with an editable speed.

    The checkpoint keeps its ``position`` in the local space of the path
    container. ``to_world`` maps local points to world space; it is supplied
    by the path so that ``get_world_position`` follows the container's
    transform. The geometry templates are passed through untouched for the
    rendering layer.
    """

    def __init__(
        self,
        checkpoint_id: int,
        path_index: int,
        floating_template: Any = None,
        grounded_template: Any = None,
        *,
        to_world: Optional[Callable[[np.ndarray], np.ndarray]] = None,
    ) -> None:
        self.checkpoint_id = checkpoint_id
        self.path_index = path_index
        self.name = checkpoint_name(checkpoint_id)
        self.floating_template = floating_template
        self.grounded_template = grounded_template
        self.position = np.zeros(3)
        self.scale = 1.0
        self.speed = DEFAULT_SPEED
        self.orientation = 0.0
        self.selected = False
        self.edit_mode: EditMode | None = None
        self.frames = 0
        self._to_world = to_world

    @property
    def is_grounded(self) -> bool:
        return bool(abs(self.position[1]) < 1e-6)

    @property
    def grounded_color(self) -> int:
        return GROUNDED_COLOR if self.is_grounded else FLOATING_COLOR

    def select_checkpoint(self) -> None:
        self.selected = True

    def deselect_checkpoint(self) -> None:
        self.selected = False
        self.edit_mode = None

    def activate_rotation(self) -> None:
        self.edit_mode = EditMode.ROTATION

    def activate_speed(self) -> None:
        self.edit_mode = EditMode.SPEED

    def activate_height(self) -> None:
        self.edit_mode = EditMode.HEIGHT

    def get_orientation(self) -> float:
        return self.orientation

    def get_world_position(self) -> np.ndarray:
        if self._to_world is None:
            return self.position.copy()
        return self._to_world(self.position.copy())

    def face_camera(self, target: Sequence[float] | np.ndarray) -> None:
        point = as_point(target)
        dx = float(point[0] - self.position[0])
        dz = float(point[2] - self.position[2])
        if dx == 0.0 and dz == 0.0:
            return
        self.orientation = math.atan2(dx, dz)

    def update(self) -> None:
        self.frames += 1

    def __repr__(self) -> str:
        return f"Checkpoint({self.name!r}, position={self.position.tolist()!r}, speed={self.speed})"
