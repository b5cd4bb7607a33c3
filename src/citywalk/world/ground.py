from __future__ import annotations

from panda3d.core import CardMaker, NodePath

GROUND_SIZE = 200.0
GROUND_COLOR = (0.5, 0.5, 0.5, 1.0)


def build_ground(*, parent: NodePath, size: float = GROUND_SIZE) -> NodePath:
    """Flat grey ground plane centered at the origin, used when the city model is unavailable."""
    half = float(size) * 0.5
    cm = CardMaker("ground")
    cm.setFrame(-half, half, -half, half)
    ground = parent.attachNewNode(cm.generate())
    # Cards are built in the XZ plane; lay it down so it faces +Z.
    ground.setP(-90.0)
    ground.setColor(*GROUND_COLOR)
    ground.setTwoSided(True)
    return ground
