from __future__ import annotations

import math

from panda3d.core import NodePath


class ActorClip:
    """Clip protocol over a Panda3D `AnimControl`."""

    def __init__(self, name: str, control) -> None:
        self.name = str(name)
        self._control = control

    def is_playing(self) -> bool:
        return bool(self._control.isPlaying())

    def play(self, loop: bool = True) -> None:
        if loop:
            self._control.loop(True)
        else:
            self._control.play()

    def stop(self) -> None:
        self._control.stop()


class NodeHinge:
    """
    Hinge protocol over a NodePath (controlled joint or limb pivot).

    `rotation_x` is the swing in radians around the node's X axis, applied as pitch on top
    of the node's rest pitch so a rig's bind pose is kept.
    """

    def __init__(self, node: NodePath) -> None:
        self.node = node
        self._rest_p = float(node.getP())

    @property
    def rotation_x(self) -> float:
        return math.radians(float(self.node.getP()) - self._rest_p)

    @rotation_x.setter
    def rotation_x(self, value: float) -> None:
        self.node.setP(self._rest_p + math.degrees(float(value)))


def actor_clips(actor) -> list[ActorClip]:
    clips: list[ActorClip] = []
    for name in actor.getAnimNames():
        control = actor.getAnimControl(name)
        if control is not None:
            clips.append(ActorClip(name, control))
    return clips


def actor_joint_names(actor) -> list[str]:
    return [str(j.getName()) for j in actor.getJoints()]


def control_joints(actor, bones: dict[str, str]) -> dict[str, NodeHinge]:
    """Take procedural control of the matched bones (limb -> joint name)."""
    hinges: dict[str, NodeHinge] = {}
    for limb, joint_name in bones.items():
        node = actor.controlJoint(None, "modelRoot", joint_name)
        if node is None or node.isEmpty():
            continue
        hinges[limb] = NodeHinge(node)
    return hinges
