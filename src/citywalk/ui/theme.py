from __future__ import annotations

from dataclasses import dataclass, replace

Color = tuple[float, float, float, float]


def hex_color(value: str, alpha: float = 1.0) -> Color:
    v = value.lstrip("#")
    return (int(v[0:2], 16) / 255.0, int(v[2:4], 16) / 255.0, int(v[4:6], 16) / 255.0, float(alpha))


@dataclass(frozen=True)
class Theme:
    """
    HUD theme tokens.

    Sizes are in window pixels and converted to aspect2d units by the HUD; colors are
    normalized floats compatible with Panda3D color tuples.
    """

    label_w_px: float = 160.0
    label_h_px: float = 40.0
    margin_px: float = 16.0
    outline_px: float = 1.5
    font_px: float = 14.0

    outline: Color = hex_color("#8ab4f8")
    panel: Color = (20 / 255, 20 / 255, 24 / 255, 0.6)
    text: Color = hex_color("#e8eaed")
    text_debug: Color = (1.0, 1.0, 1.0, 1.0)
    shadow: Color = (0.0, 0.0, 0.0, 0.6)
    background: Color = (0.07, 0.07, 0.08, 1.0)

    def with_overrides(self, **kwargs) -> "Theme":
        return replace(self, **kwargs)
