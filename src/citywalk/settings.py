from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from citywalk.character.bone_matching import BoneNameTable
from citywalk.character.input_state import KeyBindings
from citywalk.character.tuning import LocomotionTuning

logger = logging.getLogger(__name__)


@dataclass
class FeatureFlags:
    show_debug: bool = False
    show_label: bool = True


@dataclass
class Settings:
    tuning: LocomotionTuning = field(default_factory=LocomotionTuning)
    bindings: KeyBindings = field(default_factory=KeyBindings)
    bones: BoneNameTable = field(default_factory=BoneNameTable)
    flags: FeatureFlags = field(default_factory=FeatureFlags)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        # JSON has no tuples.
        for section in ("bindings", "bones"):
            payload[section] = {k: list(v) for k, v in payload[section].items()}
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Settings":
        tuning_payload = _section(payload, "tuning")
        flags_payload = _section(payload, "flags")
        return cls(
            tuning=LocomotionTuning(**_known(LocomotionTuning, _numeric(tuning_payload))),
            bindings=KeyBindings.from_dict(_section(payload, "bindings")),
            bones=BoneNameTable.from_dict(_section(payload, "bones")),
            flags=FeatureFlags(**_known(FeatureFlags, {k: bool(v) for k, v in flags_payload.items()})),
        )


def _section(payload: dict[str, Any], name: str) -> dict[str, Any]:
    raw = payload.get(name, {}) if isinstance(payload, dict) else {}
    return dict(raw) if isinstance(raw, dict) else {}


def _numeric(payload: dict[str, Any]) -> dict[str, float]:
    out: dict[str, float] = {}
    for key, value in payload.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        out[key] = float(value)
    return out


def _known(cls, payload: dict[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in payload.items() if k in names}


def load_settings(path: Path) -> Settings:
    if not path.exists():
        return Settings()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable settings %s: %s", path, e)
        return Settings()
    if not isinstance(payload, dict):
        return Settings()
    return Settings.from_dict(payload)


def save_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
    logger.info("Saved settings to %s", path)
