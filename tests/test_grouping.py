import pytest

from tplname.grouping import find_matching_variant, group_templates
from tplname.naming import parse_template_filename


def test_group_templates_joins_narrow_and_wide_variants() -> None:
    groups = group_templates(
        [
            "girl_young_hhhh5_n.jpg",
            "girl_young_hhhh5_w.jpg",
            "girl_child_abc12.jpg",
        ]
    )
    assert list(groups) == ["girl_young_hhhh5", "girl_child_abc12"]

    face_group = groups["girl_young_hhhh5"]
    assert face_group.group_type == "girl_young"
    assert face_group.requires_face_type is True
    assert set(face_group.variants) == {"narrow", "wide"}
    assert face_group.missing_face_types() == []
    assert face_group.is_complete is True

    generic = groups["girl_child_abc12"]
    assert generic.requires_face_type is False
    assert set(generic.variants) == {"both"}
    assert generic.is_complete is True


def test_case_variants_land_in_one_group() -> None:
    groups = group_templates(["X_ABCDE_N.png", "x_abcde_w.png"])
    assert list(groups) == ["x_abcde"]
    assert set(groups["x_abcde"].variants) == {"narrow", "wide"}


def test_missing_wide_variant_is_reported() -> None:
    groups = group_templates(["woman_mature_abc12_n.png"])
    group = groups["woman_mature_abc12"]
    assert group.missing_face_types() == ["wide"]
    assert group.is_complete is False


def test_generic_variant_does_not_satisfy_face_type_requirement() -> None:
    group = group_templates(["man_elder_zz999.jpg"])["man_elder_zz999"]
    assert group.missing_face_types() == ["narrow", "wide"]


def test_duplicates_keep_first_variant() -> None:
    groups = group_templates(["man_young_q1w2e_n.jpg", "man_young_q1w2e_n.png"])
    group = groups["man_young_q1w2e"]
    assert group.variants["narrow"].basename == "man_young_q1w2e_n"
    assert len(group.duplicates) == 1
    assert group.to_dict()["duplicates"] == ["man_young_q1w2e_n"]


def test_invalid_names_form_their_own_groups() -> None:
    groups = group_templates(["holiday.jpg", "girl_young_hhhh5_n.jpg"])
    invalid = groups["holiday"]
    assert invalid.is_valid is False
    assert invalid.group_type == ""
    assert invalid.requires_face_type is False
    assert invalid.missing_face_types() == []


def test_to_dict_summary() -> None:
    group = group_templates(["girl_young_hhhh5_n.jpg"])["girl_young_hhhh5"]
    assert group.to_dict() == {
        "template_group_id": "girl_young_hhhh5",
        "group_type": "girl_young",
        "is_valid": True,
        "requires_face_type": True,
        "variants": {"narrow": "girl_young_hhhh5_n"},
        "missing": ["wide"],
        "duplicates": [],
    }


def test_find_matching_variant_returns_counterpart() -> None:
    groups = group_templates(["girl_young_hhhh5_n.jpg", "girl_young_hhhh5_w.jpg"])
    group = groups["girl_young_hhhh5"]
    narrow = group.variants["narrow"]

    matched = find_matching_variant(group, narrow, "wide")
    assert matched is not None
    assert matched.face_type == "wide"
    assert matched.template_group_id == narrow.template_group_id


def test_find_matching_variant_keeps_source_when_already_matching() -> None:
    group = group_templates(["girl_young_hhhh5_n.jpg"])["girl_young_hhhh5"]
    source = group.variants["narrow"]
    assert find_matching_variant(group, source, "narrow") is source
    assert find_matching_variant(group, source, "WIDE") is None


def test_find_matching_variant_generic_template_is_used_as_is() -> None:
    source = parse_template_filename("girl_child_abc12.jpg")
    group = group_templates(["girl_child_abc12.jpg"])["girl_child_abc12"]
    assert find_matching_variant(group, source, "wide") is source


def test_find_matching_variant_rejects_unknown_target() -> None:
    source = parse_template_filename("girl_young_hhhh5_n.jpg")
    group = group_templates(["girl_young_hhhh5_n.jpg"])["girl_young_hhhh5"]
    with pytest.raises(ValueError):
        find_matching_variant(group, source, "both")
