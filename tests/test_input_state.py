from __future__ import annotations

from citywalk.character.input_state import InputState, KeyBindings, MoveIntent, resolve_intent


def test_key_events_are_case_insensitive_and_last_write_wins() -> None:
    state = InputState()
    state.key_down("W")
    assert state.is_down("w") is True

    state.key_up("w")
    state.key_down("w")
    state.key_up("W")
    assert state.is_down("w") is False
    assert state.snapshot() == {"w": False}


def test_unknown_keys_read_as_released() -> None:
    state = InputState()
    assert state.is_down("q") is False
    assert resolve_intent(state, KeyBindings()) == MoveIntent(forward=0, turn=0)


def test_resolve_intent_sums_opposing_keys() -> None:
    state = InputState()
    state.key_down("w")
    state.key_down("d")
    assert resolve_intent(state, KeyBindings()) == MoveIntent(forward=1, turn=1)

    state.key_down("s")
    state.key_down("a")
    assert resolve_intent(state, KeyBindings()) == MoveIntent(forward=0, turn=0)

    state.key_up("w")
    state.key_up("d")
    intent = resolve_intent(state, KeyBindings())
    assert intent == MoveIntent(forward=-1, turn=-1)
    assert intent.moving is True


def test_arrow_keys_are_alternates_for_the_same_action() -> None:
    state = InputState()
    state.key_down("arrow_up")
    state.key_down("w")
    # Two keys bound to one action still count once.
    assert resolve_intent(state, KeyBindings()).forward == 1


def test_release_all_clears_held_keys() -> None:
    state = InputState()
    state.key_down("w")
    state.key_down("a")
    state.release_all()
    assert resolve_intent(state, KeyBindings()) == MoveIntent()


def test_bindings_from_dict_normalizes_and_keeps_defaults() -> None:
    b = KeyBindings.from_dict({"forward": ["I", " Arrow_Up "], "turn_left": "J", "backward": 3})

    assert b.forward == ("i", "arrow_up")
    assert b.turn_left == ("j",)
    assert b.backward == KeyBindings().backward
    assert b.turn_right == KeyBindings().turn_right


def test_all_keys_is_deduplicated() -> None:
    b = KeyBindings(forward=("w",), backward=("w", "s"), turn_left=("a",), turn_right=("d",))
    assert b.all_keys() == ("w", "s", "a", "d")
