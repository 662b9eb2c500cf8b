"""Geometry helpers shared by the path editor: rays, curve sampling and width profiles."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

FLOOR_HEIGHT = 0.0


def as_point(value: Sequence[float] | np.ndarray) -> np.ndarray:
    point = np.asarray(value, dtype=float)
    if point.shape != (3,):
        raise ValueError(f"Expected a 3D point, got shape {point.shape}")
    return point


@dataclass(frozen=True)
class Ray:
    origin: np.ndarray
    direction: np.ndarray  # normalized on construction

    def __post_init__(self) -> None:
        origin = as_point(self.origin)
        direction = as_point(self.direction)
        length = float(np.linalg.norm(direction))
        if not np.isfinite(length) or length <= 0.0:
            raise ValueError("Ray direction must be non-zero")
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "direction", direction / length)

    @staticmethod
    def from_vectors(
        origin: Sequence[float] | np.ndarray, direction: Sequence[float] | np.ndarray
    ) -> "Ray":
        return Ray(origin=origin, direction=direction)

    def point_at(self, distance: float) -> np.ndarray:
        return self.origin + self.direction * distance


def closest_point_on_ray(ray: Ray, point: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return the point on ``ray`` nearest to ``point``.

    Points behind the origin clamp to the origin, so a checkpoint behind the
    camera is never considered close to the pointer ray.
    """
    target = as_point(point)
    t = float(np.dot(target - ray.origin, ray.direction))
    t = max(0.0, t)
    return ray.point_at(t)


def distance_to_ray(ray: Ray, point: Sequence[float] | np.ndarray) -> float:
    target = as_point(point)
    return float(np.linalg.norm(target - closest_point_on_ray(ray, target)))


def project_to_floor(point: Sequence[float] | np.ndarray, height: float = FLOOR_HEIGHT) -> np.ndarray:
    projected = as_point(point).copy()
    projected[1] = height
    return projected


CURVE_TYPES = ("centripetal", "uniform")


def _knot_step(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.linalg.norm(b - a)) ** 0.5


def _centripetal_segment(p0, p1, p2, p3, t: float) -> np.ndarray:
    dt0 = _knot_step(p0, p1)
    dt1 = _knot_step(p1, p2)
    dt2 = _knot_step(p2, p3)
    # coincident points would divide by zero
    if dt1 < 1e-4:
        dt1 = 1.0
    if dt0 < 1e-4:
        dt0 = dt1
    if dt2 < 1e-4:
        dt2 = dt1

    m1 = ((p1 - p0) / dt0 - (p2 - p0) / (dt0 + dt1) + (p2 - p1) / dt1) * dt1
    m2 = ((p2 - p1) / dt1 - (p3 - p1) / (dt1 + dt2) + (p3 - p2) / dt2) * dt1

    c2 = -3.0 * p1 + 3.0 * p2 - 2.0 * m1 - m2
    c3 = 2.0 * p1 - 2.0 * p2 + m1 + m2
    t2 = t * t
    return p1 + m1 * t + c2 * t2 + c3 * t2 * t


def _uniform_segment(p0, p1, p2, p3, t: float) -> np.ndarray:
    t2 = t * t
    t3 = t2 * t
    return 0.5 * (
        (2.0 * p1)
        + (-p0 + p2) * t
        + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * t2
        + (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * t3
    )


def catmull_rom_points(
    points: Sequence[Sequence[float]] | np.ndarray,
    divisions: int,
    curve_type: str = "centripetal",
) -> np.ndarray:
    """Sample an open Catmull-Rom curve through ``points``.

    Returns ``divisions + 1`` points evenly spaced in curve parameter, one
    parameter unit per segment. The curve passes through every control
    point. The outer neighbours of the first and last points are their
    mirror images (``2 * p[0] - p[1]``), and ``curve_type`` selects the
    centripetal (default) or uniform knot spacing.
    """
    if curve_type not in CURVE_TYPES:
        raise ValueError(f"Unknown curve type {curve_type!r}")
    ctrl = np.asarray(points, dtype=float)
    if ctrl.ndim != 2 or ctrl.shape[1] != 3:
        raise ValueError("Control points must be an (n, 3) array")
    count = ctrl.shape[0]
    if count == 0:
        return np.zeros((0, 3))
    if count == 1 or divisions <= 0:
        return np.repeat(ctrl[:1], max(divisions, 0) + 1, axis=0)

    segment = _centripetal_segment if curve_type == "centripetal" else _uniform_segment
    first = 2.0 * ctrl[0] - ctrl[1]
    last = 2.0 * ctrl[-1] - ctrl[-2]
    segments = count - 1
    samples = np.linspace(0.0, float(segments), divisions + 1)
    result = np.empty((divisions + 1, 3))
    for idx, s in enumerate(samples):
        seg = int(np.clip(np.floor(s), 0, segments - 1))
        t = float(s - seg)
        p0 = ctrl[seg - 1] if seg > 0 else first
        p3 = ctrl[seg + 2] if seg + 2 < count else last
        result[idx] = segment(p0, ctrl[seg], ctrl[seg + 1], p3, t)
    return result


def bin_lerp(values: Sequence[float], size: int) -> list[float]:
    """Stretch ``values`` into ``size`` samples spread over evenly sized bins.

    Sample ``j`` falls in bin ``b = j * len(values) // size``. Inside a bin the
    output blends linearly from ``values[b]`` toward ``values[b + 1]``; the
    last bin holds its value.
    """
    count = len(values)
    if size <= 0 or count == 0:
        return []
    if count == 1:
        return [float(values[0])] * size

    result: list[float] = []
    for j in range(size):
        position = j * count / size
        b = min(int(position), count - 1)
        if b == count - 1:
            result.append(float(values[b]))
            continue
        start = b * size / count
        end = (b + 1) * size / count
        fraction = (j - start) / (end - start)
        result.append(float(values[b]) + (float(values[b + 1]) - float(values[b])) * fraction)
    return result


def speed_profile(speeds: Sequence[float], point_count: int, multiplier: int) -> list[float]:
    """Speed of the nearest preceding checkpoint for every sampled curve point."""
    if not speeds or point_count <= 0:
        return []
    last = len(speeds) - 1
    step = max(int(multiplier), 1)
    return [float(speeds[min(i // step, last)]) for i in range(point_count)]


def width_attribute(point_speeds: Sequence[float], multiplier: int) -> list[float]:
    """Per-vertex widths for a line whose points carry ``point_speeds``.

    ``point_speeds`` is the bucketed profile from :func:`speed_profile`; every
    ``multiplier`` points form one checkpoint's bucket. The bucket values are
    stretched with :func:`bin_lerp` so that each adjacent point pair gets a
    start and an end width, giving ``(len(point_speeds) - 1) * 2`` entries.
    """
    point_count = len(point_speeds)
    if point_count < 2:
        return []
    step = max(int(multiplier), 1)
    buckets = [float(point_speeds[i]) for i in range(0, point_count - 1, step)]
    return bin_lerp(buckets, (point_count - 1) * 2)
