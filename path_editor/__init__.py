"""Checkpoint path editing for mobile robot travel paths."""

from .checkpoint import Checkpoint, CheckpointLike, EditMode
from .config import PathEditorSettings
from .container import PathContainer, SceneContainer
from .events import PathEvent, PathEventEmitter
from .geometry import Ray
from .path import CREATE_MODE, IntersectionResult, Path
from .path_data import CheckpointRecord, PathData

__all__ = [
    "CREATE_MODE",
    "Checkpoint",
    "CheckpointLike",
    "CheckpointRecord",
    "EditMode",
    "IntersectionResult",
    "Path",
    "PathContainer",
    "PathData",
    "PathEditorSettings",
    "PathEvent",
    "PathEventEmitter",
    "Ray",
    "SceneContainer",
]
