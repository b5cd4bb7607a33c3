from __future__ import annotations

import math
from dataclasses import dataclass, field

from citywalk.character.input_state import InputState, KeyBindings, MoveIntent, resolve_intent
from citywalk.character.rig import AnimationStrategy, CharacterRig, LimbSet
from citywalk.character.tuning import LocomotionTuning

# Opposite-phase gait: left arm swings with the right leg.
LIMB_SIGNS: dict[str, float] = {
    "left_arm": 1.0,
    "right_arm": -1.0,
    "left_leg": -1.0,
    "right_leg": 1.0,
}


@dataclass
class LocomotionState:
    # Oscillator phase; advances only while translating and never decreases.
    walk_phase: float = 0.0
    moving: bool = False
    last_intent: MoveIntent = field(default_factory=MoveIntent)


@dataclass
class FrameContext:
    """Everything the per-frame update reads or mutates. Owned by the app, not by module globals."""

    input_state: InputState
    rig: CharacterRig
    locomotion: LocomotionState = field(default_factory=LocomotionState)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class LocomotionController:
    """Turns held keys into root motion and drives the rig's resolved animation strategy."""

    def __init__(self, *, tuning: LocomotionTuning | None = None, bindings: KeyBindings | None = None) -> None:
        self.tuning = tuning or LocomotionTuning()
        self.bindings = bindings or KeyBindings()

    def step(self, ctx: FrameContext, dt: float) -> None:
        dt = max(0.0, float(dt))
        t = self.tuning
        rig = ctx.rig
        state = ctx.locomotion

        intent = resolve_intent(ctx.input_state, self.bindings)
        state.last_intent = intent
        state.moving = intent.moving

        if intent.turn != 0:
            rig.root.yaw += t.rotation_speed * intent.turn * dt

        if intent.forward != 0:
            direction = rig.root.forward()
            rig.root.position += direction * (t.move_speed * intent.forward * dt)
            state.walk_phase += dt

        rig.root.sync()

        if rig.strategy is AnimationStrategy.CLIPS:
            self._drive_clips(rig, moving=state.moving)
        elif rig.strategy is AnimationStrategy.BONES:
            self._drive_bones(rig.limbs, walk_phase=state.walk_phase, moving=state.moving)
        elif rig.strategy is AnimationStrategy.PIVOTS:
            self._drive_pivots(rig.limbs, walk_phase=state.walk_phase, moving=state.moving)

    def _drive_clips(self, rig: CharacterRig, *, moving: bool) -> None:
        for clip in rig.clips:
            if moving:
                if not clip.is_playing():
                    clip.play(True)
            elif clip.is_playing():
                clip.stop()

    def _drive_bones(self, limbs: LimbSet, *, walk_phase: float, moving: bool) -> None:
        t = self.tuning
        if not moving:
            for _limb, bone in limbs.present():
                bone.rotation_x *= t.bone_decay
            return

        swing = math.sin(walk_phase * t.walk_frequency)
        for limb, bone in limbs.present():
            damping = t.leg_damping if limb.endswith("_leg") else t.arm_damping
            target = swing * t.bone_swing * LIMB_SIGNS[limb] * damping
            bone.rotation_x = lerp(bone.rotation_x, target, t.bone_lerp)

    def _drive_pivots(self, limbs: LimbSet, *, walk_phase: float, moving: bool) -> None:
        t = self.tuning
        if not moving:
            for _limb, pivot in limbs.present():
                pivot.rotation_x *= t.pivot_decay
            return

        swing = math.sin(walk_phase * t.walk_frequency)
        for limb, pivot in limbs.present():
            pivot.rotation_x = t.pivot_swing * swing * LIMB_SIGNS[limb]


__all__ = [
    "LIMB_SIGNS",
    "FrameContext",
    "LocomotionController",
    "LocomotionState",
    "lerp",
]
