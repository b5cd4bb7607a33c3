from __future__ import annotations

import json
from pathlib import Path

from citywalk.character.bone_matching import BoneNameTable
from citywalk.character.input_state import KeyBindings
from citywalk.character.tuning import LocomotionTuning
from citywalk.settings import Settings, load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    s = load_settings(tmp_path / "nope.json")
    assert s == Settings()
    assert s.tuning.move_speed == 2.8
    assert s.tuning.bone_lerp == 0.2
    assert s.tuning.bone_decay == 0.9


def test_save_then_load_restores_settings(tmp_path: Path) -> None:
    path = tmp_path / "cfg" / "settings.json"
    s = Settings(
        tuning=LocomotionTuning(move_speed=4.0, pivot_decay=0.7),
        bindings=KeyBindings(forward=("i",)),
        bones=BoneNameTable(left_leg=("hip_l",)),
    )
    s.flags.show_debug = True
    save_settings(s, path)

    assert load_settings(path) == s


def test_partial_sections_merge_over_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "tuning": {"rotation_speed": 1.5, "unknown_knob": 3, "bone_lerp": "fast"},
                "flags": {"show_label": False},
            }
        ),
        encoding="utf-8",
    )
    s = load_settings(path)

    assert s.tuning.rotation_speed == 1.5
    assert s.tuning.move_speed == 2.8
    assert s.tuning.bone_lerp == 0.2
    assert s.flags.show_label is False
    assert s.flags.show_debug is False
    assert s.bindings == KeyBindings()


def test_unreadable_json_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == Settings()

    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_settings(path) == Settings()


def test_to_dict_is_json_friendly() -> None:
    payload = Settings().to_dict()
    assert payload["bindings"]["forward"] == ["w", "arrow_up"]
    assert payload["bones"]["right_leg"][0] == "rightleg"
    json.dumps(payload)
