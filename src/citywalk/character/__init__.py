from __future__ import annotations

from citywalk.character.bone_matching import BoneNameTable, LimbMatch, MissingCapability, match_limb_bones
from citywalk.character.input_state import InputState, KeyBindings, MoveIntent, resolve_intent
from citywalk.character.locomotion import FrameContext, LocomotionController, LocomotionState
from citywalk.character.rig import AnimationStrategy, CharacterRig, CharacterRoot, LimbSet, resolve_rig
from citywalk.character.tuning import LocomotionTuning

__all__ = [
    "AnimationStrategy",
    "BoneNameTable",
    "CharacterRig",
    "CharacterRoot",
    "FrameContext",
    "InputState",
    "KeyBindings",
    "LimbMatch",
    "LimbSet",
    "LocomotionController",
    "LocomotionState",
    "LocomotionTuning",
    "MissingCapability",
    "MoveIntent",
    "match_limb_bones",
    "resolve_intent",
    "resolve_rig",
]
