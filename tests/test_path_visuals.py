import numpy as np
import pytest

from path_editor.checkpoint import Checkpoint
from path_editor.visuals import (
    ARROW_TEXTURE,
    CURVE_OFFSET_Y,
    CurveStyle,
    build_floor_curve,
    build_guidance_curve,
    build_indicators,
)


def _checkpoints(specs):
    result = []
    for idx, (position, speed) in enumerate(specs):
        checkpoint = Checkpoint(idx, 0)
        checkpoint.position = np.array(position, dtype=float)
        checkpoint.speed = speed
        result.append(checkpoint)
    return result


@pytest.fixture
def checkpoints():
    return _checkpoints(
        [
            ((0.0, 0.0, 0.0), 1.0),
            ((300.0, 100.0, 0.0), 2.0),
            ((300.0, 50.0, 300.0), 4.0),
        ]
    )


def test_guidance_curve_samples_and_widths(checkpoints):
    style = CurveStyle(resolution=(640, 480), line_width=80.0, point_multiplier=10)

    mesh = build_guidance_curve(checkpoints, style)

    assert mesh.point_count == 31
    assert len(mesh.widths) == 60
    assert mesh.point_speeds[0] == 1.0
    assert mesh.point_speeds[15] == 2.0
    assert mesh.point_speeds[-1] == 4.0
    assert mesh.resolution == (640, 480)
    assert mesh.line_width == 80.0
    assert mesh.texture == ARROW_TEXTURE
    assert mesh.texture_repeat == (31.0, 1.0)
    assert mesh.offset_y == CURVE_OFFSET_Y
    assert mesh.points[0].tolist() == pytest.approx([0.0, 0.0, 0.0])
    assert mesh.points[-1].tolist() == pytest.approx([300.0, 50.0, 300.0])


def test_guidance_curve_respects_multiplier(checkpoints):
    mesh = build_guidance_curve(checkpoints, CurveStyle(point_multiplier=4))

    assert mesh.point_count == 13
    assert len(mesh.widths) == 24


def test_floor_curve_is_flat_without_widths(checkpoints):
    mesh = build_floor_curve(checkpoints, CurveStyle())

    assert mesh.point_count == 31
    assert np.allclose(mesh.points[:, 1], 0.0)
    assert mesh.widths == []
    assert mesh.line_width == 5.0


def test_indicators_per_checkpoint(checkpoints):
    height_lines, floor_marks = build_indicators(checkpoints, CurveStyle())

    assert len(height_lines) == len(floor_marks) == 3
    assert height_lines[1].start.tolist() == [300.0, 0.0, 0.0]
    assert height_lines[1].end.tolist() == [300.0, 100.0, 0.0]
    assert floor_marks[2].position.tolist() == [300.0, -20.0, 300.0]
    assert floor_marks[0].color != floor_marks[1].color


def test_indicator_end_is_snapshot_of_position(checkpoints):
    height_lines, _ = build_indicators(checkpoints, CurveStyle())

    checkpoints[0].position[1] = 500.0

    assert height_lines[0].end.tolist() == [0.0, 0.0, 0.0]
