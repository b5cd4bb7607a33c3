from __future__ import annotations

from dataclasses import dataclass

from panda3d.core import LVector3f, NodePath

from citywalk.character.rig import CharacterRig, CharacterRoot, resolve_rig
from citywalk.world.actor_bindings import NodeHinge

BODY_COLOR = (0.2, 0.8, 0.6, 1.0)
ACCENT_COLOR = (0.9, 0.5, 0.2, 1.0)
VISOR_COLOR = (0.1, 0.6, 1.0, 1.0)

# Root sits slightly above the ground so the feet do not z-fight with it.
ROBOT_ROOT_Z = 0.1


@dataclass
class Limb:
    pivot: NodePath
    mesh: NodePath


@dataclass
class Robot:
    root: NodePath
    arm_l: Limb
    arm_r: Limb
    leg_l: Limb
    leg_r: Limb

    def pivots(self) -> dict[str, NodeHinge]:
        return {
            "left_arm": NodeHinge(self.arm_l.pivot),
            "right_arm": NodeHinge(self.arm_r.pivot),
            "left_leg": NodeHinge(self.leg_l.pivot),
            "right_leg": NodeHinge(self.leg_r.pivot),
        }


def _box(*, loader, parent: NodePath, name: str, size: tuple[float, float, float], center: LVector3f, color) -> NodePath:
    # models/box spans 0..1 on each axis; wrap it so `center` is the box center.
    holder = parent.attachNewNode(name)
    holder.setPos(center)
    model = loader.loadModel("models/box")
    model.reparentTo(holder)
    model.setScale(*size)
    model.setPos(-size[0] * 0.5, -size[1] * 0.5, -size[2] * 0.5)
    holder.setColor(*color)
    return holder


def _limb(*, loader, parent: NodePath, name: str, length: float, radius: float, pivot_pos: LVector3f, color) -> Limb:
    pivot = parent.attachNewNode(f"{name}Pivot")
    pivot.setPos(pivot_pos)
    # The pivot is the upper joint; the limb hangs below it.
    mesh = _box(
        loader=loader,
        parent=pivot,
        name=name,
        size=(radius * 2.0, radius * 2.0, length),
        center=LVector3f(0.0, 0.0, -length * 0.5),
        color=color,
    )
    return Limb(pivot=pivot, mesh=mesh)


def build_robot(*, loader, parent: NodePath) -> Robot:
    """Multi-part rigid figure with shoulder and hip pivots, used when the character model is unavailable."""
    root = parent.attachNewNode("robotRoot")

    _box(
        loader=loader,
        parent=root,
        name="torso",
        size=(0.8, 0.4, 1.2),
        center=LVector3f(0.0, 0.0, 1.3),
        color=BODY_COLOR,
    )

    head = root.attachNewNode("head")
    head.setPos(0.0, 0.0, 2.2)
    head_model = loader.loadModel("models/misc/sphere")
    head_model.reparentTo(head)
    head_model.setScale(0.25)
    head.setColor(*ACCENT_COLOR)

    visor = _box(
        loader=loader,
        parent=head,
        name="visor",
        size=(0.3, 0.06, 0.12),
        center=LVector3f(0.0, 0.25, 0.0),
        color=VISOR_COLOR,
    )
    visor.setLightOff()

    arm_l = _limb(loader=loader, parent=root, name="armL", length=0.9, radius=0.09, pivot_pos=LVector3f(-0.5, 0.0, 1.7), color=BODY_COLOR)
    arm_r = _limb(loader=loader, parent=root, name="armR", length=0.9, radius=0.09, pivot_pos=LVector3f(0.5, 0.0, 1.7), color=BODY_COLOR)
    leg_l = _limb(loader=loader, parent=root, name="legL", length=1.1, radius=0.1, pivot_pos=LVector3f(-0.22, 0.0, 1.0), color=BODY_COLOR)
    leg_r = _limb(loader=loader, parent=root, name="legR", length=1.1, radius=0.1, pivot_pos=LVector3f(0.22, 0.0, 1.0), color=BODY_COLOR)

    root.setZ(ROBOT_ROOT_Z)
    return Robot(root=root, arm_l=arm_l, arm_r=arm_r, leg_l=leg_l, leg_r=leg_r)


def robot_rig(robot: Robot) -> CharacterRig:
    return resolve_rig(root=CharacterRoot(node=robot.root), pivots=robot.pivots(), source="robot")
