"""Path container: the spatial parent that owns the local transform and visuals."""
from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence

import numpy as np

from path_editor.geometry import as_point

logger = logging.getLogger(__name__)


class PathContainer(Protocol):
    def add(self, obj: Any) -> None: ...

    def remove(self, obj: Any) -> None: ...

    def world_to_local(self, point: Sequence[float] | np.ndarray) -> np.ndarray: ...

    def local_to_world(self, point: Sequence[float] | np.ndarray) -> np.ndarray: ...


class SceneContainer:
    """Composition surface with a rigid/affine 4x4 world transform.

    Objects are kept in insertion order. Removing an object that was never
    added is ignored, matching a scene graph's ``remove``.
    """

    def __init__(self, matrix: np.ndarray | None = None) -> None:
        self._matrix = np.identity(4) if matrix is None else np.asarray(matrix, dtype=float)
        if self._matrix.shape != (4, 4):
            raise ValueError("Container transform must be a 4x4 matrix")
        self._inverse = np.linalg.inv(self._matrix)
        self._children: list[Any] = []

    @classmethod
    def from_translation(cls, offset: Sequence[float]) -> "SceneContainer":
        matrix = np.identity(4)
        matrix[:3, 3] = as_point(offset)
        return cls(matrix)

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def children(self) -> list[Any]:
        return list(self._children)

    def set_matrix(self, matrix: np.ndarray) -> None:
        matrix = np.asarray(matrix, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError("Container transform must be a 4x4 matrix")
        self._matrix = matrix
        self._inverse = np.linalg.inv(matrix)

    def add(self, obj: Any) -> None:
        if any(child is obj for child in self._children):
            return
        self._children.append(obj)

    def remove(self, obj: Any) -> None:
        for idx, child in enumerate(self._children):
            if child is obj:
                del self._children[idx]
                return
        logger.debug("Container.remove ignored object not in scene: %r", obj)

    def contains(self, obj: Any) -> bool:
        return any(child is obj for child in self._children)

    def children_of_type(self, kind: type) -> list[Any]:
        return [child for child in self._children if isinstance(child, kind)]

    def world_to_local(self, point: Sequence[float] | np.ndarray) -> np.ndarray:
        return _apply(self._inverse, point)

    def local_to_world(self, point: Sequence[float] | np.ndarray) -> np.ndarray:
        return _apply(self._matrix, point)


def _apply(matrix: np.ndarray, point: Sequence[float] | np.ndarray) -> np.ndarray:
    homogeneous = np.append(as_point(point), 1.0)
    result = matrix @ homogeneous
    return result[:3] / result[3]
