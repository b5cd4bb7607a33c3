from __future__ import annotations

from citywalk.character.bone_matching import BoneNameTable, find_bone, match_limb_bones


def test_mixamo_style_names_match_case_insensitively() -> None:
    bones = ["mixamorig:Hips", "mixamorig:LeftArm", "mixamorig:RightArm", "mixamorig:LeftLeg", "mixamorig:RightLeg"]
    match = match_limb_bones(bones)

    assert match.bones == {
        "left_arm": "mixamorig:LeftArm",
        "right_arm": "mixamorig:RightArm",
        "left_leg": "mixamorig:LeftLeg",
        "right_leg": "mixamorig:RightLeg",
    }
    assert match.missing is None


def test_blender_and_unreal_conventions_match() -> None:
    bones = ["pelvis", "upperarm_l", "upperarm_r", "Leg.L", "thigh_r"]
    match = match_limb_bones(bones)

    assert match.bones["left_arm"] == "upperarm_l"
    assert match.bones["right_arm"] == "upperarm_r"
    assert match.bones["left_leg"] == "Leg.L"
    assert match.bones["right_leg"] == "thigh_r"


def test_first_bone_in_skeleton_order_wins() -> None:
    # Both contain a left-arm fragment; skeleton order decides, not fragment order.
    bones = ["upperarm_l", "LeftArm"]
    assert find_bone(bones, BoneNameTable().left_arm) == "upperarm_l"


def test_zero_matches_is_reported_as_missing_capability() -> None:
    match = match_limb_bones(["root", "spine", "head"])

    assert match.empty is True
    assert match.missing is not None
    assert match.missing.kind == "limb_bones"
    assert "3 bone" in match.missing.detail


def test_partial_match_is_not_missing() -> None:
    match = match_limb_bones(["Spine", "L_Leg_01"])

    assert match.bones == {"left_leg": "L_Leg_01"}
    assert match.missing is None


def test_custom_table_overrides_defaults() -> None:
    table = BoneNameTable.from_dict({"left_arm": ["Bicep_Left"], "right_arm": []})
    bones = ["bicep_left", "rightarm"]
    match = match_limb_bones(bones, table)

    assert table.left_arm == ("bicep_left",)
    assert table.right_arm == BoneNameTable().right_arm
    assert match.bones["left_arm"] == "bicep_left"
    assert match.bones["right_arm"] == "rightarm"


def test_empty_fragments_never_match() -> None:
    assert find_bone(["anything"], ["", "  "]) is None
