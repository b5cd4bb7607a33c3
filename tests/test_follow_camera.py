from __future__ import annotations

from types import SimpleNamespace

import pytest
from panda3d.core import LVector3f, NodePath

from citywalk.world.follow_camera import FollowCameraController


class _FakeTaskMgr:
    def __init__(self) -> None:
        self.tasks: dict[str, object] = {}

    def add(self, fn, name: str) -> None:
        self.tasks[name] = fn

    def remove(self, name: str) -> None:
        self.tasks.pop(name, None)


def _make_base() -> SimpleNamespace:
    events: dict[str, object] = {}
    return SimpleNamespace(
        taskMgr=_FakeTaskMgr(),
        mouseWatcherNode=None,
        events=events,
        accept=lambda name, fn, args=None: events.__setitem__(name, (fn, args)),
        ignore=lambda name: events.pop(name, None),
    )


def _make_camera(base: SimpleNamespace) -> tuple[FollowCameraController, NodePath, NodePath]:
    render = NodePath("render")
    camera = render.attachNewNode("camera")
    ctrl = FollowCameraController(base=base, camera_np=camera, world_root=render)
    return ctrl, camera, render


def test_follow_targets_point_above_character() -> None:
    base = _make_base()
    ctrl, camera, render = _make_camera(base)

    ctrl.follow(LVector3f(3.0, 4.0, 0.0))

    pivot_pos = ctrl.pivot.getPos(render)
    assert pivot_pos.x == pytest.approx(3.0)
    assert pivot_pos.y == pytest.approx(4.0)
    assert pivot_pos.z == pytest.approx(1.0)
    assert camera.getPos().y == pytest.approx(-8.0)


def test_dolly_is_clamped_to_radius_limits() -> None:
    base = _make_base()
    ctrl, camera, _render = _make_camera(base)

    for _ in range(200):
        ctrl._dolly(-1.0)
    assert ctrl.distance == pytest.approx(2.0)

    for _ in range(200):
        ctrl._dolly(1.0)
    assert ctrl.distance == pytest.approx(40.0)
    assert camera.getPos().y == pytest.approx(-40.0)


def test_destroy_unbinds_and_keeps_camera_alive() -> None:
    base = _make_base()
    ctrl, camera, render = _make_camera(base)
    assert "wheel_up" in base.events
    assert "citywalk.follow_camera" in base.taskMgr.tasks

    ctrl.destroy()

    assert base.events == {}
    assert base.taskMgr.tasks == {}
    assert camera.getParent() == render
