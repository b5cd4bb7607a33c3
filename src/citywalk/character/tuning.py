from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LocomotionTuning:
    # Root motion.
    move_speed: float = 2.8  # units/s
    rotation_speed: float = 2.8  # rad/s

    # Limb oscillator (shared by bone and pivot swinging).
    walk_frequency: float = 6.0

    # Skeleton bones: swing is smoothed toward the target, then decays to rest when idle.
    bone_swing: float = 0.4
    arm_damping: float = 1.0
    leg_damping: float = 0.8
    bone_lerp: float = 0.2
    bone_decay: float = 0.9

    # Rigid pivots: swing is set directly, decays to rest when idle.
    pivot_swing: float = 0.6
    pivot_decay: float = 0.85

    # Frame hitch clamp applied by the app loop (not by the controller).
    max_frame_dt: float = 0.1
