from __future__ import annotations

import pytest

pytest.importorskip("PyQt5")

from path_editor.checkpoint import EditMode
from path_editor.container import SceneContainer
from path_editor.events import PathEvent
from path_editor.geometry import Ray
from path_editor.path import CREATE_MODE, Path
from path_editor.visuals import CLOSED_CURVE_COLOR, CURVE_COLOR, CurveMesh, FloorDecal, HeightIndicator


def _tap(path: Path, x: float, y: float = 0.0) -> None:
    ray = Ray.from_vectors((x, 1000.0, 0.0), (0.0, -1.0, 0.0))
    path.on_ray_intersection(ray, (x, y, 0.0), CREATE_MODE)


@pytest.fixture
def container():
    return SceneContainer()


@pytest.fixture
def path(container):
    path = Path(container, index=1)
    for x in (0.0, 500.0, 1000.0):
        _tap(path, x)
    return path


def test_clear_empties_everything(path, container):
    path.clear()

    assert path.checkpoints == []
    assert path.path_data.checkpoints == []
    assert path.selected_checkpoint is None
    assert path.height_lines == []
    assert path.floor_marks == []
    assert path.spline_mesh is None
    assert path.floor_spline_mesh is None
    assert container.children == []


def test_clear_keeps_path_index(path):
    path.clear()
    assert path.path_data.to_dict() == {"index": 1, "checkpoints": []}


def test_close_recolors_curve_and_deselects(path):
    assert path.spline_mesh.color == CURVE_COLOR

    path.close()

    assert path.is_closed
    assert not path.is_active()
    assert path.spline_mesh.color == CLOSED_CURVE_COLOR
    assert not any(cp.selected for cp in path.checkpoints)


def test_edit_dispatch_after_close_keeps_path_closed(path):
    path.close()

    for code in (EditMode.ROTATION, EditMode.SPEED, EditMode.HEIGHT, EditMode.DESELECT):
        path.activate_selected_checkpoint_mode(code)

    assert path.is_closed
    assert not path.is_active()


def test_new_path_is_active(container):
    assert Path(container, index=0).is_active()


def test_indicators_track_every_checkpoint(path, container):
    assert len(path.height_lines) == 3
    assert len(path.floor_marks) == 3
    assert len(container.children_of_type(HeightIndicator)) == 3
    assert len(container.children_of_type(FloorDecal)) == 3
    assert [line.checkpoint_name for line in path.height_lines] == [cp.name for cp in path.checkpoints]


def test_height_indicator_spans_floor_to_checkpoint(container):
    path = Path(container, index=0)
    _tap(path, 0.0, y=250.0)

    line = path.height_lines[0]
    assert line.start.tolist() == [0.0, 0.0, 0.0]
    assert line.end.tolist() == [0.0, 250.0, 0.0]
    assert line.height == pytest.approx(250.0)
    decal = path.floor_marks[0]
    assert decal.position.tolist() == [0.0, -20.0, 0.0]
    assert decal.color == path.checkpoints[0].grounded_color


def test_rebuild_visuals_picks_up_speed_changes(path, container):
    old_mesh = path.spline_mesh
    path.checkpoints[-1].speed = 3.0

    path.rebuild_visuals()

    assert path.spline_mesh is not old_mesh
    assert not container.contains(old_mesh)
    assert path.spline_mesh.widths[-1] == pytest.approx(3.0)
    assert len(container.children_of_type(CurveMesh)) == 2


def test_update_advances_each_checkpoint(path):
    path.update(0.016, 1.0, 60)
    path.update(0.016, 1.016, 61)

    assert [cp.frames for cp in path.checkpoints] == [2, 2, 2]


def test_sync_path_data_updates_moved_checkpoint(path):
    selected = path.selected_checkpoint
    selected.position[1] = 75.0
    selected.orientation = 1.5

    path.sync_path_data()

    record = path.path_data.find(selected.name)
    assert record.pos_y == 75.0
    assert record.orientation == 1.5
    assert len(path.path_data.checkpoints) == 3


def test_menu_event_not_raised_after_clear(path):
    fired = []
    path.on(PathEvent.CHECKPOINT_MENU, lambda payload, error: fired.append(payload))
    ray = Ray.from_vectors((0.0, 1000.0, 0.0), (0.0, -1.0, 0.0))
    path.on_ray_intersection(ray, (0.0, 0.0, 0.0), CREATE_MODE)
    path.clear()

    for _ in range(40):
        path.update()

    assert fired == []
    assert not path.checkpoint_touch_active
