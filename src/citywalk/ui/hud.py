from __future__ import annotations

from direct.gui import DirectGuiGlobals as DGG
from direct.gui.DirectGui import DirectFrame, DirectLabel
from direct.gui.OnscreenText import OnscreenText
from panda3d.core import TextNode

from citywalk.ui.theme import Theme

DEFAULT_LABEL = "Low Poly City"
CONTROLS_HINT = "W/S move | A/D turn | RMB drag orbit | wheel zoom | F3 debug | F5 save settings"


def px_to_units(px: float, *, window_height: int) -> float:
    # aspect2d spans 2 units vertically.
    return float(px) * 2.0 / float(max(1, int(window_height)))


class CornerLabel:
    """Outlined rectangle with a text label, anchored to the bottom-right corner."""

    def __init__(self, *, anchor, theme: Theme, text: str = DEFAULT_LABEL, window_height: int = 600) -> None:
        def u(px: float) -> float:
            return px_to_units(px, window_height=window_height)

        w = u(theme.label_w_px)
        h = u(theme.label_h_px)
        m = u(theme.margin_px)
        ow = u(theme.outline_px)

        self._root = DirectFrame(
            parent=anchor,
            frameColor=theme.outline,
            relief=DGG.FLAT,
            frameSize=(-w, 0.0, 0.0, h),
            pos=(-m, 0.0, m),
        )
        self._root["state"] = DGG.DISABLED
        DirectFrame(
            parent=self._root,
            frameColor=theme.panel,
            relief=DGG.FLAT,
            frameSize=(-w + ow, -ow, ow, h - ow),
        )["state"] = DGG.DISABLED

        text_scale = u(theme.font_px)
        self._label = DirectLabel(
            parent=self._root,
            text=str(text),
            text_scale=text_scale,
            text_align=TextNode.ACenter,
            text_fg=theme.text,
            frameColor=(0, 0, 0, 0),
            pos=(-w * 0.5, 0.0, h * 0.5 - text_scale * 0.35),
        )

    def set_text(self, text: str) -> None:
        self._label["text"] = str(text)

    def set_visible(self, visible: bool) -> None:
        if visible:
            self._root.show()
        else:
            self._root.hide()

    def destroy(self) -> None:
        self._root.destroy()


class DebugReadout:
    """Top-left multi-line text; empty when disabled."""

    def __init__(self, *, anchor, theme: Theme) -> None:
        self._text = OnscreenText(
            text="",
            parent=anchor,
            pos=(0.05, -0.08),
            align=TextNode.ALeft,
            scale=0.045,
            fg=theme.text_debug,
            shadow=theme.shadow,
            mayChange=True,
        )

    def update(self, lines: list[str] | None) -> None:
        self._text.setText("\n".join(lines) if lines else "")

    def destroy(self) -> None:
        self._text.destroy()
