from __future__ import annotations

import math
from dataclasses import dataclass

from direct.task import Task
from panda3d.core import LVector3f, NodePath


@dataclass
class FollowCameraSettings:
    orbit_sensitivity: float = 180.0  # deg per normalized screen unit
    dolly_sensitivity: float = 0.13  # exponential step per wheel tick
    min_distance: float = 2.0
    max_distance: float = 40.0
    pitch_min: float = -85.0
    pitch_max: float = 5.0
    target_height: float = 1.0


class FollowCameraController:
    """
    Orbit camera locked onto a moving target node.

    - Orbit: RMB drag
    - Dolly: wheel_up/down, clamped to [min_distance, max_distance]
    The target is re-read every frame through `follow()`.
    """

    def __init__(
        self,
        *,
        base,
        camera_np: NodePath,
        world_root: NodePath,
        initial_yaw_deg: float = 60.0,
        initial_pitch_deg: float = -30.0,
        initial_distance: float = 8.0,
        settings: FollowCameraSettings | None = None,
    ) -> None:
        self.base = base
        self.world_root = world_root
        self.camera = camera_np
        self.settings = settings or FollowCameraSettings()

        # Pivot node lives in world space; camera is a child with a -Y offset.
        self.pivot = world_root.attachNewNode("citywalk.follow_camera_pivot")
        self.target = LVector3f(0.0, 0.0, float(self.settings.target_height))
        self.yaw = float(initial_yaw_deg)
        self.pitch = float(initial_pitch_deg)
        self.distance = float(initial_distance)

        self.camera.reparentTo(self.pivot)

        self._dragging = False
        self._drag_last: tuple[float, float] | None = None

        self._apply()
        self._bind_inputs()
        self.base.taskMgr.add(self._task, "citywalk.follow_camera")

    def destroy(self) -> None:
        self.base.taskMgr.remove("citywalk.follow_camera")
        for event in ("mouse3", "mouse3-up", "wheel_up", "wheel_down"):
            self.base.ignore(event)
        self.camera.wrtReparentTo(self.world_root)
        self.pivot.removeNode()

    def _bind_inputs(self) -> None:
        self.base.accept("mouse3", self._on_rmb_down)
        self.base.accept("mouse3-up", self._on_rmb_up)
        self.base.accept("wheel_up", self._dolly, [-1.0])
        self.base.accept("wheel_down", self._dolly, [1.0])

    def _mouse_pos(self) -> tuple[float, float] | None:
        mw = getattr(self.base, "mouseWatcherNode", None)
        if mw is None or not mw.hasMouse():
            return None
        return (float(mw.getMouseX()), float(mw.getMouseY()))

    def _on_rmb_down(self) -> None:
        self._dragging = True
        self._drag_last = self._mouse_pos()

    def _on_rmb_up(self) -> None:
        self._dragging = False
        self._drag_last = None

    def _dolly(self, step: float) -> None:
        # Exponential dolly feels consistent at every distance.
        self.distance *= math.exp(float(step) * float(self.settings.dolly_sensitivity))
        self._apply()

    def follow(self, target_pos: LVector3f) -> None:
        self.target = LVector3f(target_pos) + LVector3f(0.0, 0.0, float(self.settings.target_height))
        self._apply()

    def _apply(self) -> None:
        s = self.settings
        self.pitch = max(float(s.pitch_min), min(float(s.pitch_max), float(self.pitch)))
        self.distance = max(float(s.min_distance), min(float(s.max_distance), float(self.distance)))
        self.pivot.setPos(self.world_root, self.target)
        self.pivot.setHpr(float(self.yaw), float(self.pitch), 0.0)
        self.camera.setPos(0.0, -float(self.distance), 0.0)
        self.camera.setHpr(0.0, 0.0, 0.0)

    def _task(self, task) -> int:
        if not self._dragging:
            return Task.cont
        mp = self._mouse_pos()
        if mp is None:
            return Task.cont
        last = self._drag_last
        self._drag_last = mp
        if last is None:
            return Task.cont
        dx = mp[0] - last[0]
        dy = mp[1] - last[1]
        self.yaw -= dx * float(self.settings.orbit_sensitivity)
        self.pitch += dy * float(self.settings.orbit_sensitivity)
        self._apply()
        return Task.cont
