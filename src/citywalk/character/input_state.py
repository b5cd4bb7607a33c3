from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBindings:
    """Key identifiers per locomotion action. Any bound key held counts as the action held."""

    forward: tuple[str, ...] = ("w", "arrow_up")
    backward: tuple[str, ...] = ("s", "arrow_down")
    turn_left: tuple[str, ...] = ("a", "arrow_left")
    turn_right: tuple[str, ...] = ("d", "arrow_right")

    def all_keys(self) -> tuple[str, ...]:
        out: list[str] = []
        for group in (self.forward, self.backward, self.turn_left, self.turn_right):
            for key in group:
                k = normalize_key(key)
                if k and k not in out:
                    out.append(k)
        return tuple(out)

    @classmethod
    def from_dict(cls, payload: dict) -> "KeyBindings":
        defaults = cls()
        kwargs: dict[str, tuple[str, ...]] = {}
        for name in ("forward", "backward", "turn_left", "turn_right"):
            raw = payload.get(name)
            if isinstance(raw, str):
                raw = [raw]
            if not isinstance(raw, (list, tuple)):
                kwargs[name] = getattr(defaults, name)
                continue
            keys = tuple(k for k in (normalize_key(str(x)) for x in raw) if k)
            kwargs[name] = keys or getattr(defaults, name)
        return cls(**kwargs)


@dataclass(frozen=True)
class MoveIntent:
    forward: int = 0
    turn: int = 0

    @property
    def moving(self) -> bool:
        return self.forward != 0


def normalize_key(key: str) -> str:
    return (key or "").strip().lower()


class InputState:
    """
    Key identifier -> pressed map, fed by key-down/key-up events.

    Events and frame reads happen on the render thread, so the last write wins.
    """

    def __init__(self) -> None:
        self._keys: dict[str, bool] = {}

    def key_down(self, key: str) -> None:
        k = normalize_key(key)
        if k:
            self._keys[k] = True

    def key_up(self, key: str) -> None:
        k = normalize_key(key)
        if k:
            self._keys[k] = False

    def set_key(self, key: str, pressed: bool) -> None:
        if pressed:
            self.key_down(key)
        else:
            self.key_up(key)

    def is_down(self, key: str) -> bool:
        return bool(self._keys.get(normalize_key(key), False))

    def any_down(self, keys: tuple[str, ...]) -> bool:
        return any(self.is_down(k) for k in keys)

    def release_all(self) -> None:
        for k in list(self._keys):
            self._keys[k] = False

    def snapshot(self) -> dict[str, bool]:
        return dict(self._keys)


def resolve_intent(state: InputState, bindings: KeyBindings) -> MoveIntent:
    fwd = 0
    turn = 0
    if state.any_down(bindings.forward):
        fwd += 1
    if state.any_down(bindings.backward):
        fwd -= 1
    if state.any_down(bindings.turn_right):
        turn += 1
    if state.any_down(bindings.turn_left):
        turn -= 1
    return MoveIntent(forward=fwd, turn=turn)


__all__ = [
    "InputState",
    "KeyBindings",
    "MoveIntent",
    "normalize_key",
    "resolve_intent",
]
