import pytest

from fbxconv.command.errors import CommandError, ErrorKind
from fbxconv.manifest.parser import (
    LineKind,
    ManifestState,
    apply_line,
    classify_line,
    manifest_path,
    parse_lines,
    read_manifest,
)


def test_classify_line_shapes():
    assert classify_line("101") is LineKind.GROUP
    assert classify_line("  42 \r") is LineKind.GROUP
    assert classify_line("mat\\shader.mtd") is LineKind.RENAME
    assert classify_line("tex/char_101_diffuse.tif") is LineKind.TEXTURE
    assert classify_line("tex/char_101_diffuse.png") is LineKind.INVALID
    assert classify_line("tex/char_101_diffuse.TIF") is LineKind.INVALID
    assert classify_line("   ") is LineKind.BLANK


def test_duplicate_texture_keeps_first():
    groups = parse_lines(
        ["101", "tex/char_101_diffuse.tif", "other/char_101_diffuse.tif"],
        "textures",
    )
    assert groups == {"101": {"diffuse": "textures/char_101_diffuse.tga"}}


def test_mtd_rename_replaces_group():
    groups = parse_lines(["101", "mat/shader.mtd", "tex/shader_normal.tif"], "textures")
    assert "101" not in groups
    assert groups["shader"] == {"normal": "textures/shader_normal.tga"}


def test_group_line_clears_rename():
    groups = parse_lines(
        ["101", "mat\\shader.mtd", "tex\\shader_n.tif", "102", "tex\\body_a.tif"],
        "C:\\textures",
    )
    assert groups == {
        "shader": {"n": "C:\\textures\\shader_n.tga"},
        "102": {"a": "C:\\textures\\body_a.tga"},
    }


def test_rename_to_same_key_keeps_group():
    groups = parse_lines(["7", "mat/7.mtd", "tex/seven_normal.tif"], "t")
    assert groups == {"7": {"normal": "t/seven_normal.tga"}}


def test_unknown_texture_type_is_skipped():
    groups = parse_lines(["5", "tex/rock_mask.tif", "tex/rock_diffuse.tif"], "t")
    assert groups == {"5": {"diffuse": "t/rock_diffuse.tga"}}


def test_reference_without_separator():
    groups = parse_lines(["5", "rock_normal.tif"], "t")
    assert groups["5"]["normal"] == "t/rock_normal.tga"


def test_blank_lines_are_ignored():
    groups = parse_lines(["", "5", "", "tex/rock_diffuse.tif", ""], "t")
    assert groups == {"5": {"diffuse": "t/rock_diffuse.tga"}}


def test_bad_extension_aborts():
    with pytest.raises(CommandError) as info:
        parse_lines(["5", "tex/rock_diffuse.png", "6"], "t")
    assert info.value.kind is ErrorKind.MANIFEST_FORMAT_ERROR
    assert info.value.context == "tex/rock_diffuse.png"


def test_custom_legal_postfixes():
    groups = parse_lines(["5", "tex/rock_mask.tif", "tex/rock_diffuse.tif"], "t", frozenset({"mask"}))
    assert groups == {"5": {"mask": "t/rock_mask.tga"}}


def test_apply_line_threads_state():
    groups = {}
    state = apply_line(ManifestState(), "12", groups, "t")
    assert state == ManifestState(last_group_key="12")

    state = apply_line(state, "m/hero.mtd", groups, "t")
    assert state.rename_target == "hero"
    assert state.active_key == "hero"
    assert groups == {"hero": {}}

    state = apply_line(state, "13", groups, "t")
    assert state == ManifestState(last_group_key="13")


def test_manifest_path_replaces_extension():
    assert manifest_path("assets/model.fbx") == "assets/model.txt"
    assert manifest_path("model") == "model.txt"


def test_read_manifest_from_file(tmp_path):
    in_file = tmp_path / "model.fbx"
    (tmp_path / "model.txt").write_text("101\nmat\\shader.mtd\ntex\\shader_normal.tif\n", encoding="utf-8")
    groups = read_manifest(str(in_file), "tex")
    assert groups == {"shader": {"normal": "tex\\shader_normal.tga"}}


def test_read_manifest_missing_file(tmp_path):
    with pytest.raises(CommandError) as info:
        read_manifest(str(tmp_path / "model.fbx"), "tex")
    assert info.value.kind is ErrorKind.MANIFEST_UNREADABLE
    assert info.value.context == str(tmp_path / "model.txt")


def test_repeated_group_starts_fresh():
    groups = parse_lines(["101", "tex/a_diffuse.tif", "102", "101", "tex/b_diffuse.tif"], "t")
    assert groups["101"] == {"diffuse": "t/b_diffuse.tga"}
    assert groups["102"] == {}


def test_repeated_mtd_name_starts_fresh():
    groups = parse_lines(
        ["1", "m/shader.mtd", "tex/a_diffuse.tif", "2", "m/shader.mtd", "tex/b_diffuse.tif"],
        "t",
    )
    assert groups == {"shader": {"diffuse": "t/b_diffuse.tga"}}


def test_texture_before_any_group_uses_empty_key():
    groups = parse_lines(["tex/rock_normal.tif", "5", "tex/rock_diffuse.tif"], "t")
    assert groups == {
        "": {"normal": "t/rock_normal.tga"},
        "5": {"diffuse": "t/rock_diffuse.tga"},
    }
