"""Tests for the command line entry point."""

import numpy as np
import pytest

from rectanchor.layout.alignment import Alignment
from rectanchor.main import main, parse_args
from rectanchor.scene.item import BoundsType
from rectanchor.scene.loader import SceneLoader

SCENE_YAML = """
name: demo
size: [1920, 1080]
items:
  logo:
    source_size: [400, 200]
    position: [960, 540]
    alignment: center
    selected: true
  background:
    source_size: [1920, 1080]
"""


@pytest.fixture
def scene_file(tmp_path):
    path = tmp_path / "demo.yaml"
    path.write_text(SCENE_YAML)
    return path


def test_parse_args_defaults():
    args = parse_args(["scene.yaml"])
    assert args.scene == "scene.yaml"
    assert args.preset is None
    assert not args.pivot
    assert not args.position
    assert args.output is None


def test_prints_scene(scene_file, capsys):
    assert main([str(scene_file)]) == 0
    out = capsys.readouterr().out
    assert "Scene 'demo' (1920x1080)" in out
    assert "* logo" in out
    assert "- background" in out
    assert "[inferred]" in out


def test_preset_keeps_item_in_place(scene_file, tmp_path, capsys):
    output = tmp_path / "out.yaml"
    assert main([str(scene_file), "--preset", "top-left", "--output", str(output)]) == 0
    assert "Saved scene to" in capsys.readouterr().out

    scene = SceneLoader().load(output)
    logo = scene.find("logo")
    assert logo.alignment == Alignment.LEFT | Alignment.TOP
    assert logo.bounds_type is BoundsType.STRETCH
    np.testing.assert_allclose(logo.position, [760.0, 440.0])
    np.testing.assert_allclose(logo.bounds, [400.0, 200.0])
    assert logo.settings.get_double("anchorMinY") == 1.0

    # Unselected items are untouched
    background = scene.find("background")
    assert background.bounds_type is BoundsType.NONE
    assert background.settings.values == {}


def test_move_and_resize(scene_file, tmp_path):
    output = tmp_path / "out.yaml"
    assert main([str(scene_file), "--move", "100,200", "--resize", "800x100",
                 "-o", str(output)]) == 0

    logo = SceneLoader().load(output).find("logo")
    np.testing.assert_allclose(logo.position, [100.0, 200.0])
    np.testing.assert_allclose(logo.scale, [2.0, 0.5])


def test_config_prefix(scene_file, tmp_path):
    config = tmp_path / "layout.yaml"
    config.write_text("settings_prefix: rt_\n")
    output = tmp_path / "out.yaml"
    assert main([str(scene_file), "-p", "stretch", "--pivot", "--position",
                 "-c", str(config), "-o", str(output)]) == 0

    logo = SceneLoader().load(output).find("logo")
    assert logo.settings.has_user_value("rt_anchorMinX")
    np.testing.assert_allclose(logo.bounds, [1920.0, 1080.0])
    np.testing.assert_allclose(logo.position, [960.0, 540.0])


def test_rename_and_hide(scene_file, tmp_path, capsys):
    output = tmp_path / "out.yaml"
    assert main([str(scene_file), "--rename", "brand", "--hide", "-o", str(output)]) == 0
    assert "* brand" in capsys.readouterr().out

    scene = SceneLoader().load(output)
    assert scene.find("logo") is None
    brand = scene.find("brand")
    assert not brand.visible
    np.testing.assert_allclose(brand.position, [960.0, 540.0])
    assert scene.find("background").visible


def test_show_and_hide_are_exclusive(scene_file):
    with pytest.raises(SystemExit):
        parse_args([str(scene_file), "--show", "--hide"])


@pytest.mark.parametrize("flag", ["--pivot", "--position"])
def test_modifiers_require_preset(scene_file, capsys, flag):
    with pytest.raises(SystemExit) as excinfo:
        main([str(scene_file), flag])
    assert excinfo.value.code == 2
    assert "--preset" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["--preset", "sideways"],
    ["--rename", "  "],
    ["--resize", "800"],
    ["--move", "a,b"],
])
def test_invalid_arguments_exit_with_error(scene_file, capsys, argv):
    assert main([str(scene_file), *argv]) == 2
    assert "error:" in capsys.readouterr().err


@pytest.mark.parametrize("text", [
    "size: [100, 100]\nitems:\n  - a\n  - b\n",
    "size: [100, 100]\nitems:\n  a: [1, 2]\n",
])
def test_malformed_scene_exits_with_error(tmp_path, capsys, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text)
    assert main([str(path)]) == 2
    assert "must be a mapping" in capsys.readouterr().err


def test_missing_scene_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.yaml")]) == 2
    assert "error:" in capsys.readouterr().err
