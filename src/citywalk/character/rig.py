from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, Protocol, Sequence

from panda3d.core import LVector3f

from citywalk.character.bone_matching import LIMBS

logger = logging.getLogger(__name__)


class Clip(Protocol):
    def is_playing(self) -> bool: ...

    def play(self, loop: bool = True) -> None: ...

    def stop(self) -> None: ...


class Hinge(Protocol):
    """A bone or pivot whose swing around the local X axis is driven procedurally (radians)."""

    rotation_x: float


class AnimationStrategy(enum.Enum):
    CLIPS = "clips"
    BONES = "bones"
    PIVOTS = "pivots"
    NONE = "none"


class CharacterRoot:
    """
    Root transform of the character.

    Yaw is in radians, positive turns right. With the Z-up / Y-forward world frame,
    yaw 0 faces +Y. `sync()` pushes the transform to the scene node when one is attached.
    """

    def __init__(self, *, node=None, position: LVector3f | None = None, yaw: float = 0.0) -> None:
        self.node = node
        if position is None and node is not None:
            position = LVector3f(node.getPos())
        self.position = LVector3f(position) if position is not None else LVector3f(0, 0, 0)
        self.yaw = float(yaw)

    def forward(self) -> LVector3f:
        return forward_direction(self.yaw)

    def sync(self) -> None:
        if self.node is None:
            return
        self.node.setPos(self.position)
        # Panda3D heading is counter-clockwise in degrees.
        self.node.setH(-math.degrees(self.yaw))


def forward_direction(yaw: float) -> LVector3f:
    return LVector3f(math.sin(yaw), math.cos(yaw), 0.0)


@dataclass
class LimbSet:
    left_arm: Hinge | None = None
    right_arm: Hinge | None = None
    left_leg: Hinge | None = None
    right_leg: Hinge | None = None

    def present(self) -> Iterator[tuple[str, Hinge]]:
        for limb in LIMBS:
            hinge = getattr(self, limb)
            if hinge is not None:
                yield limb, hinge

    @property
    def empty(self) -> bool:
        return next(self.present(), None) is None

    @classmethod
    def from_mapping(cls, hinges: dict[str, Hinge] | None) -> "LimbSet":
        hinges = hinges or {}
        return cls(**{limb: hinges.get(limb) for limb in LIMBS})


@dataclass
class CharacterRig:
    """Character with its animation strategy resolved once, at load time."""

    root: CharacterRoot
    strategy: AnimationStrategy
    clips: list[Clip] = field(default_factory=list)
    limbs: LimbSet = field(default_factory=LimbSet)
    source: str = ""


def resolve_rig(
    *,
    root: CharacterRoot,
    clips: Sequence[Clip] | None = None,
    bones: dict[str, Hinge] | None = None,
    pivots: dict[str, Hinge] | None = None,
    source: str = "",
) -> CharacterRig:
    """
    Pick the animation strategy: clips, then skeleton bones, then rigid pivots.

    Clips win even if bones are also present. Missing parts are not errors; a character
    with nothing animatable gets `AnimationStrategy.NONE` and only its root moves.
    """

    clip_list = list(clips or [])
    if clip_list:
        rig = CharacterRig(root=root, strategy=AnimationStrategy.CLIPS, clips=clip_list, source=source)
    else:
        bone_set = LimbSet.from_mapping(bones)
        pivot_set = LimbSet.from_mapping(pivots)
        if not bone_set.empty:
            rig = CharacterRig(root=root, strategy=AnimationStrategy.BONES, limbs=bone_set, source=source)
        elif not pivot_set.empty:
            rig = CharacterRig(root=root, strategy=AnimationStrategy.PIVOTS, limbs=pivot_set, source=source)
        else:
            rig = CharacterRig(root=root, strategy=AnimationStrategy.NONE, source=source)

    logger.info("Character rig %r uses %s animation", source or "character", rig.strategy.value)
    return rig


__all__ = [
    "AnimationStrategy",
    "CharacterRig",
    "CharacterRoot",
    "Clip",
    "Hinge",
    "LimbSet",
    "forward_direction",
    "resolve_rig",
]
