"""A robot travel path: its checkpoints, edit state and derived visuals."""
from __future__ import annotations

from dataclasses import dataclass
from functools import partial
import logging
from typing import Any, Literal, Optional, Sequence

import numpy as np

from PyQt5 import QtCore

from path_editor.checkpoint import Checkpoint, CheckpointFactory, CheckpointLike, EditMode
from path_editor.config import PathEditorSettings
from path_editor.container import PathContainer
from path_editor.events import PathEvent, PathEventEmitter
from path_editor.geometry import Ray, as_point, distance_to_ray, project_to_floor
from path_editor.gesture import GestureTimer
from path_editor.path_data import PathData
from path_editor.visuals import (
    CLOSED_CURVE_COLOR,
    CurveMesh,
    CurveStyle,
    FloorDecal,
    HeightIndicator,
    build_floor_curve,
    build_guidance_curve,
    build_indicators,
)

logger = logging.getLogger(__name__)

CREATE_MODE = 0

Outcome = Literal["selected", "already_selected", "created", "ignored"]


@dataclass(frozen=True)
class IntersectionResult:
    outcome: Outcome
    checkpoint: Optional[CheckpointLike] = None
    distance: Optional[float] = None


class Path(PathEventEmitter):
    """Ordered checkpoints plus the guidance curve derived from them.

    Pointer rays go through :meth:`on_ray_intersection`, which either selects
    the checkpoint under the ray or, in create mode, appends a new one. Every
    structural change rebuilds the curves and indicators in the container;
    old visuals are removed from the container before new ones are added.
    """

    selectionChanged = QtCore.pyqtSignal(object)

    def __init__(
        self,
        container: PathContainer,
        index: int,
        checkpoint_floating: Any = None,
        checkpoint_grounded: Any = None,
        *,
        settings: PathEditorSettings | None = None,
        checkpoint_factory: CheckpointFactory | None = None,
        parent: QtCore.QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings or PathEditorSettings()
        self.container = container
        self.checkpoint_floating = checkpoint_floating
        self.checkpoint_grounded = checkpoint_grounded
        self._checkpoint_factory = checkpoint_factory or partial(
            Checkpoint, to_world=container.local_to_world
        )

        self.checkpoints: list[CheckpointLike] = []
        self.selected_checkpoint: CheckpointLike | None = None
        self.is_closed = False
        self.path_data = PathData(index=index)

        self.curve_style = CurveStyle(
            resolution=self.settings.resolution,
            line_width=self.settings.line_width,
            point_multiplier=self.settings.spline_point_multiplier,
        )
        self.spline_mesh: CurveMesh | None = None
        self.floor_spline_mesh: CurveMesh | None = None
        self.height_lines: list[HeightIndicator] = []
        self.floor_marks: list[FloorDecal] = []

        self.gesture_timer = GestureTimer(
            threshold_frames=self.settings.gesture_threshold_frames,
            hold_seconds=self.settings.gesture_hold_seconds,
        )
        self._next_checkpoint_id = 0

    @property
    def index(self) -> int:
        return self.path_data.index

    @property
    def checkpoint_touch_count(self) -> int:
        return self.gesture_timer.count

    @property
    def checkpoint_touch_active(self) -> bool:
        return self.gesture_timer.active

    # ------------------------------------------------------------------
    # Selection and creation
    # ------------------------------------------------------------------
    def activate_selected_checkpoint_mode(self, mode: int) -> None:
        checkpoint = self.selected_checkpoint
        if checkpoint is None:
            return
        if mode == EditMode.DESELECT:
            checkpoint.deselect_checkpoint()
            self._set_selected(None)
        elif mode == EditMode.ROTATION:
            checkpoint.activate_rotation()
        elif mode == EditMode.SPEED:
            checkpoint.activate_speed()
        elif mode == EditMode.HEIGHT:
            checkpoint.activate_height()

    def on_ray_intersection(
        self,
        ray: Ray,
        position: Sequence[float] | np.ndarray,
        mode: int,
    ) -> IntersectionResult:
        hit, distance = self._find_hit(ray)

        if hit is not None:
            self.gesture_timer.start()
            if hit is self.selected_checkpoint:
                return IntersectionResult("already_selected", hit, distance)

            self.deselect_all_checkpoints()
            logger.debug("Activate checkpoint %s", hit.name)
            hit.select_checkpoint()
            self._set_selected(hit)
            self.gesture_timer.reset()
            self.emit_event(PathEvent.RESET_MODE)
            return IntersectionResult("selected", hit, distance)

        if mode != CREATE_MODE:
            logger.debug("Ray missed all checkpoints in mode %s; ignored", mode)
            return IntersectionResult("ignored")

        self.deselect_all_checkpoints()
        checkpoint = self.new_checkpoint(position)
        if len(self.checkpoints) > 1:
            self.update_spline()
            self.update_floor_spline()
        self.update_height_lines_and_floor_marks()
        return IntersectionResult("created", checkpoint)

    def _find_hit(self, ray: Ray) -> tuple[Optional[CheckpointLike], Optional[float]]:
        threshold = self.settings.proximity_threshold
        best: CheckpointLike | None = None
        best_distance: float | None = None
        for checkpoint in self.checkpoints:
            distance = distance_to_ray(ray, checkpoint.get_world_position())
            if distance >= threshold:
                continue
            if self.settings.hit_policy == "first":
                return checkpoint, distance
            if best_distance is None or distance < best_distance:
                best, best_distance = checkpoint, distance
        return best, best_distance

    def new_checkpoint(self, position: Sequence[float] | np.ndarray) -> CheckpointLike:
        checkpoint = self._checkpoint_factory(
            self._next_checkpoint_id,
            self.path_data.index,
            self.checkpoint_floating,
            self.checkpoint_grounded,
        )
        self._next_checkpoint_id += 1
        checkpoint.scale = self.settings.checkpoint_scale
        checkpoint.position = self.container.world_to_local(as_point(position))
        self.container.add(checkpoint)
        logger.info("Created %s at %s", checkpoint.name, checkpoint.position.tolist())

        checkpoint.select_checkpoint()
        self.checkpoints.append(checkpoint)
        self._set_selected(checkpoint)

        self.sync_path_data()
        return checkpoint

    def deselect_all_checkpoints(self) -> None:
        for checkpoint in self.checkpoints:
            checkpoint.deselect_checkpoint()

    def _set_selected(self, checkpoint: CheckpointLike | None) -> None:
        if checkpoint is self.selected_checkpoint:
            return
        self.selected_checkpoint = checkpoint
        self.selectionChanged.emit(checkpoint)

    # ------------------------------------------------------------------
    # Serializable data
    # ------------------------------------------------------------------
    def sync_path_data(self) -> None:
        checkpoint = self.selected_checkpoint
        if checkpoint is None:
            return
        if self.path_data.sync(checkpoint):
            logger.debug("Added %s to path data of path %s", checkpoint.name, self.index)

    # ------------------------------------------------------------------
    # Visuals
    # ------------------------------------------------------------------
    def update_spline(self) -> None:
        if self.spline_mesh is not None:
            self.container.remove(self.spline_mesh)
            self.spline_mesh = None
        if len(self.checkpoints) < 2:
            return
        mesh = build_guidance_curve(self.checkpoints, self.curve_style)
        if self.is_closed:
            mesh.color = CLOSED_CURVE_COLOR
        self.spline_mesh = mesh
        self.container.add(mesh)

    def update_floor_spline(self) -> None:
        if self.floor_spline_mesh is not None:
            self.container.remove(self.floor_spline_mesh)
            self.floor_spline_mesh = None
        if len(self.checkpoints) < 2:
            return
        mesh = build_floor_curve(self.checkpoints, self.curve_style)
        self.floor_spline_mesh = mesh
        self.container.add(mesh)

    def update_height_lines_and_floor_marks(self) -> None:
        for height_line in self.height_lines:
            self.container.remove(height_line)
        for floor_mark in self.floor_marks:
            self.container.remove(floor_mark)

        self.height_lines, self.floor_marks = build_indicators(self.checkpoints, self.curve_style)

        for height_line in self.height_lines:
            self.container.add(height_line)
        for floor_mark in self.floor_marks:
            self.container.add(floor_mark)

    def rebuild_visuals(self) -> None:
        self.update_spline()
        self.update_floor_spline()
        self.update_height_lines_and_floor_marks()

    def checkpoints_look_at(self, camera_world_position: Sequence[float] | np.ndarray) -> None:
        camera_local = self.container.world_to_local(as_point(camera_world_position))
        target = project_to_floor(camera_local)
        for checkpoint in self.checkpoints:
            checkpoint.face_camera(target)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def clear(self) -> None:
        self._set_selected(None)
        for checkpoint in self.checkpoints:
            self.container.remove(checkpoint)
        for mesh in (self.spline_mesh, self.floor_spline_mesh):
            if mesh is not None:
                self.container.remove(mesh)
        self.spline_mesh = None
        self.floor_spline_mesh = None

        self.checkpoints = []
        self.path_data.clear()

        self.update_height_lines_and_floor_marks()
        logger.info("Cleared path %s", self.index)

    def close_reset(self) -> None:
        self.gesture_timer.stop()

    def close(self) -> None:
        self.is_closed = True
        if self.spline_mesh is not None:
            self.spline_mesh.color = CLOSED_CURVE_COLOR
        self.deselect_all_checkpoints()
        logger.info("Closed path %s with %d checkpoints", self.index, len(self.checkpoints))

    def is_active(self) -> bool:
        return not self.is_closed

    def update(self, delta_time: float = 0.0, elapsed_time: float = 0.0, frame_count: int = 0) -> None:
        for checkpoint in self.checkpoints:
            checkpoint.update()

        if self.gesture_timer.tick(self.selected_checkpoint is not None):
            self.emit_event(PathEvent.CHECKPOINT_MENU, self.selected_checkpoint)
