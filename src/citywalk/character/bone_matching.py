from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)

LIMBS: tuple[str, ...] = ("left_arm", "right_arm", "left_leg", "right_leg")


@dataclass(frozen=True)
class BoneNameTable:
    """
    Limb -> bone name fragments (lowercase, matched as substrings).

    Best-effort mapping for common rig naming conventions (Mixamo, Blender `.L/.R`,
    Unreal `upperarm_l`). Override per asset through settings when a rig uses something else.
    """

    left_arm: tuple[str, ...] = ("leftarm", "l_arm", "arm.l", "upperarm_l")
    right_arm: tuple[str, ...] = ("rightarm", "r_arm", "arm.r", "upperarm_r")
    left_leg: tuple[str, ...] = ("leftleg", "l_leg", "leg.l", "thigh_l")
    right_leg: tuple[str, ...] = ("rightleg", "r_leg", "leg.r", "thigh_r")

    def fragments(self, limb: str) -> tuple[str, ...]:
        return tuple(getattr(self, limb))

    @classmethod
    def from_dict(cls, payload: dict) -> "BoneNameTable":
        defaults = cls()
        kwargs: dict[str, tuple[str, ...]] = {}
        for limb in LIMBS:
            raw = payload.get(limb)
            if isinstance(raw, str):
                raw = [raw]
            if not isinstance(raw, (list, tuple)):
                kwargs[limb] = defaults.fragments(limb)
                continue
            frags = tuple(f for f in (str(x).strip().lower() for x in raw) if f)
            kwargs[limb] = frags or defaults.fragments(limb)
        return cls(**kwargs)


@dataclass(frozen=True)
class MissingCapability:
    """An optional animation capability that a loaded asset does not provide."""

    kind: str
    detail: str = ""


@dataclass(frozen=True)
class LimbMatch:
    bones: dict[str, str] = field(default_factory=dict)
    missing: MissingCapability | None = None

    @property
    def empty(self) -> bool:
        return not self.bones


def find_bone(bone_names: Sequence[str], fragments: Iterable[str]) -> str | None:
    """Return the first bone (skeleton order) whose lowercase name contains any fragment."""
    frags = [f for f in (str(x).strip().lower() for x in fragments) if f]
    if not frags:
        return None
    for name in bone_names:
        low = str(name).lower()
        if any(f in low for f in frags):
            return str(name)
    return None


def match_limb_bones(bone_names: Sequence[str], table: BoneNameTable | None = None) -> LimbMatch:
    table = table or BoneNameTable()
    names = [str(n) for n in bone_names]
    found: dict[str, str] = {}
    for limb in LIMBS:
        bone = find_bone(names, table.fragments(limb))
        if bone is not None:
            found[limb] = bone

    logger.info(
        "Limb bones: %s",
        ", ".join(f"{limb}={found.get(limb)}" for limb in LIMBS),
    )
    if found:
        return LimbMatch(bones=found)

    missing = MissingCapability(
        kind="limb_bones",
        detail=f"no limb bone matched among {len(names)} bone(s)",
    )
    logger.warning("Missing capability %s: %s", missing.kind, missing.detail)
    return LimbMatch(bones={}, missing=missing)


__all__ = [
    "LIMBS",
    "BoneNameTable",
    "LimbMatch",
    "MissingCapability",
    "find_bone",
    "match_limb_bones",
]
