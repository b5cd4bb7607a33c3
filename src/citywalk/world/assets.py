from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from direct.actor.Actor import Actor
from panda3d.core import Filename, NodePath

from citywalk.character.bone_matching import BoneNameTable, match_limb_bones
from citywalk.character.rig import CharacterRig, CharacterRoot, resolve_rig
from citywalk.common.error_log import ErrorLog
from citywalk.world.actor_bindings import ActorClip, actor_clips, actor_joint_names, control_joints
from citywalk.world.ground import build_ground
from citywalk.world.robot import build_robot, robot_rig

logger = logging.getLogger(__name__)

CHARACTER_SCALE = 0.8


class AssetLoadFailure(Exception):
    """A model import was rejected (missing file, unsupported format, parse error)."""

    def __init__(self, *, folder: Path, file_name: str, message: str) -> None:
        self.folder = Path(folder)
        self.file_name = str(file_name)
        self.message = str(message or "unknown error")
        super().__init__(f"{self.folder / self.file_name}: {self.message}")


@dataclass
class ImportedModel:
    root: NodePath
    mesh_count: int = 0
    joint_names: list[str] = field(default_factory=list)
    clips: list[ActorClip] = field(default_factory=list)

    @property
    def has_skeleton(self) -> bool:
        return bool(self.joint_names)


@dataclass
class Environment:
    root: NodePath
    fallback: bool = False


def _model_filename(folder: Path, file_name: str) -> Filename:
    return Filename.fromOsSpecific(str(Path(folder) / file_name))


def _count_meshes(np: NodePath) -> int:
    return int(np.findAllMatches("**/+GeomNode").getNumPaths())


def import_static_model(*, loader, folder: Path, file_name: str) -> NodePath:
    path = Path(folder) / file_name
    if not path.is_file():
        raise AssetLoadFailure(folder=folder, file_name=file_name, message="file not found")
    try:
        model = loader.loadModel(_model_filename(folder, file_name))
    except OSError as e:
        raise AssetLoadFailure(folder=folder, file_name=file_name, message=str(e)) from e
    if model is None or model.isEmpty():
        raise AssetLoadFailure(folder=folder, file_name=file_name, message="loader returned no model")
    return model


def import_character_model(*, folder: Path, file_name: str) -> ImportedModel:
    """Import a rigged model as an Actor, exposing its meshes, skeleton joints and embedded clips."""
    path = Path(folder) / file_name
    if not path.is_file():
        raise AssetLoadFailure(folder=folder, file_name=file_name, message="file not found")
    try:
        actor = Actor(_model_filename(folder, file_name))
    except OSError as e:
        raise AssetLoadFailure(folder=folder, file_name=file_name, message=str(e)) from e

    model = ImportedModel(
        root=actor,
        mesh_count=_count_meshes(actor),
        joint_names=actor_joint_names(actor),
        clips=actor_clips(actor),
    )
    logger.info(
        "Loaded %s: meshes=%d joints=%d clips=%d",
        file_name,
        model.mesh_count,
        len(model.joint_names),
        len(model.clips),
    )
    return model


def load_environment(*, loader, parent: NodePath, folder: Path, file_name: str, errors: ErrorLog) -> Environment:
    try:
        model = import_static_model(loader=loader, folder=folder, file_name=file_name)
    except AssetLoadFailure as e:
        errors.log_exception(context="assets.city", exc=e)
        logger.warning("City unavailable, using flat ground")
        root = parent.attachNewNode("groundRoot")
        build_ground(parent=root)
        return Environment(root=root, fallback=True)

    root = parent.attachNewNode("cityRoot")
    model.reparentTo(root)
    root.setScale(1.0)
    root.setZ(0.0)
    logger.info("City loaded: meshes=%d", _count_meshes(model))
    return Environment(root=root, fallback=False)


def _stand_on_feet(container: NodePath) -> None:
    bounds = container.getTightBounds()
    if not bounds:
        return
    lo, _hi = bounds
    # Raise the container so its lowest point sits at the character root.
    container.setZ(container.getZ() - float(lo.z))


def rig_imported_model(*, model: ImportedModel, parent: NodePath, bones: BoneNameTable) -> CharacterRig:
    root = parent.attachNewNode("ninjaRoot")
    container = root.attachNewNode("ninjaContainer")
    container.setScale(CHARACTER_SCALE)
    model.root.reparentTo(container)
    _stand_on_feet(container)

    hinges = {}
    if model.has_skeleton and not model.clips:
        logger.debug("Available bones: %s", model.joint_names)
        match = match_limb_bones(model.joint_names, bones)
        if not match.empty:
            hinges = control_joints(model.root, match.bones)

    return resolve_rig(root=CharacterRoot(node=root), clips=model.clips, bones=hinges, source="model")


def load_character(
    *,
    loader,
    parent: NodePath,
    folder: Path,
    file_name: str,
    bones: BoneNameTable,
    errors: ErrorLog,
) -> CharacterRig:
    try:
        model = import_character_model(folder=folder, file_name=file_name)
    except AssetLoadFailure as e:
        errors.log_exception(context="assets.character", exc=e)
        logger.warning("Character model unavailable, using procedural robot")
        return robot_rig(build_robot(loader=loader, parent=parent))

    return rig_imported_model(model=model, parent=parent, bones=bones)


__all__ = [
    "AssetLoadFailure",
    "Environment",
    "ImportedModel",
    "import_character_model",
    "import_static_model",
    "load_character",
    "load_environment",
    "rig_imported_model",
]
