from __future__ import annotations

import logging
import math

from direct.showbase.ShowBase import ShowBase
from direct.showbase.ShowBaseGlobal import globalClock
from direct.task import Task
from panda3d.core import AmbientLight, DirectionalLight, LVector4, loadPrcFileData

from citywalk.app_config import RunConfig
from citywalk.character.input_state import InputState
from citywalk.character.locomotion import FrameContext, LocomotionController
from citywalk.common.error_log import ErrorLog
from citywalk.settings import Settings, load_settings, save_settings
from citywalk.ui.hud import CONTROLS_HINT, CornerLabel, DebugReadout
from citywalk.ui.theme import Theme
from citywalk.world.assets import load_character, load_environment
from citywalk.world.follow_camera import FollowCameraController

logger = logging.getLogger(__name__)

UPDATE_TASK = "citywalk.update"
SMOKE_FRAMES = 8


class CityWalkApp(ShowBase):
    def __init__(self, cfg: RunConfig) -> None:
        # Keep audio from being a dependency for smoke runs / CI.
        loadPrcFileData("", "audio-library-name null")
        if cfg.smoke:
            loadPrcFileData("", "window-type offscreen")

        super().__init__()

        self.cfg = cfg
        self.disableMouse()
        self.errors = ErrorLog(persist_path=cfg.error_log_path)
        self.settings: Settings = load_settings(cfg.settings_path)
        self.theme = Theme()

        self._setup_lighting()
        self.world_root = self.render.attachNewNode("world-root")
        self.environment = load_environment(
            loader=self.loader,
            parent=self.world_root,
            folder=cfg.asset_dir,
            file_name=cfg.city_file,
            errors=self.errors,
        )
        rig = load_character(
            loader=self.loader,
            parent=self.world_root,
            folder=cfg.asset_dir,
            file_name=cfg.character_file,
            bones=self.settings.bones,
            errors=self.errors,
        )

        self.input_state = InputState()
        self.ctx = FrameContext(input_state=self.input_state, rig=rig)
        self.controller = LocomotionController(tuning=self.settings.tuning, bindings=self.settings.bindings)

        self.follow_camera = FollowCameraController(base=self, camera_np=self.camera, world_root=self.render)
        self.follow_camera.follow(rig.root.position)

        self._setup_input()
        self._setup_ui()

        self.taskMgr.add(self._update, UPDATE_TASK)
        self.exitFunc = self._teardown

        if cfg.smoke:
            # Walk forward for a handful of frames then exit.
            self._frames_left = SMOKE_FRAMES
            self.input_state.key_down(self.settings.bindings.forward[0])
            self.taskMgr.add(self._smoke_task, "citywalk.smoke_exit")

        logger.info(
            "Scene ready: environment=%s character=%s (%s)",
            "ground" if self.environment.fallback else "city",
            rig.source,
            rig.strategy.value,
        )

    def _setup_lighting(self) -> None:
        self.setBackgroundColor(*self.theme.background)

        # Ambient + overhead directional approximates a hemispheric sky light.
        ambient = AmbientLight("ambient")
        ambient.setColor(LVector4(0.45, 0.45, 0.45, 1))
        self.render.setLight(self.render.attachNewNode(ambient))

        sky = DirectionalLight("sky")
        sky.setColor(LVector4(0.45, 0.45, 0.45, 1))
        sky_np = self.render.attachNewNode(sky)
        sky_np.setHpr(30, -70, 0)
        self.render.setLight(sky_np)

    def _setup_input(self) -> None:
        for key in self.settings.bindings.all_keys():
            self.accept(key, self.input_state.key_down, [key])
            self.accept(f"{key}-up", self.input_state.key_up, [key])
        self.accept("f3", self._toggle_debug)
        self.accept("f5", self._save_settings)

    def _setup_ui(self) -> None:
        height = self.win.getYSize() if self.win is not None else 600
        self.corner_label = CornerLabel(anchor=self.a2dBottomRight, theme=self.theme, window_height=height)
        self.corner_label.set_visible(self.settings.flags.show_label)
        self.debug_readout = DebugReadout(anchor=self.a2dTopLeft, theme=self.theme)

    def _toggle_debug(self) -> None:
        self.settings.flags.show_debug = not self.settings.flags.show_debug

    def _save_settings(self) -> None:
        try:
            save_settings(self.settings, self.cfg.settings_path)
        except OSError as e:
            self.errors.log_exception(context="settings.save", exc=e)

    def _update(self, task):  # type: ignore[no-untyped-def]
        try:
            dt = min(float(globalClock.getDt()), float(self.settings.tuning.max_frame_dt))
            self.controller.step(self.ctx, dt)
            self.follow_camera.follow(self.ctx.rig.root.position)
            self._update_debug_readout()
        except Exception as e:
            self.errors.log_exception(context="update.loop", exc=e)
        return task.cont

    def _update_debug_readout(self) -> None:
        if not self.settings.flags.show_debug:
            self.debug_readout.update(None)
            return
        rig = self.ctx.rig
        pos = rig.root.position
        lines = [
            CONTROLS_HINT,
            "",
            f"Animation: {rig.strategy.value} ({rig.source})",
            f"Position: {pos.x:.2f}, {pos.y:.2f}, {pos.z:.2f}",
            f"Yaw: {math.degrees(rig.root.yaw):.1f} deg",
            f"Walk phase: {self.ctx.locomotion.walk_phase:.2f}",
            f"Environment: {'ground (fallback)' if self.environment.fallback else 'city'}",
        ]
        last = self.errors.latest()
        if last is not None:
            lines.append(f"Last error: {last.summary_line()}")
        self.debug_readout.update(lines)

    def _smoke_task(self, task):  # type: ignore[no-untyped-def]
        self._frames_left -= 1
        if self._frames_left <= 0:
            self.userExit()
            return Task.done
        return Task.cont

    def _teardown(self) -> None:
        self.taskMgr.remove(UPDATE_TASK)
        self.ignoreAll()
        self.input_state.release_all()
        self.follow_camera.destroy()
        self.corner_label.destroy()
        self.debug_readout.destroy()
        logger.info("Scene torn down")


def run(cfg: RunConfig) -> None:
    app = CityWalkApp(cfg)
    app.run()
