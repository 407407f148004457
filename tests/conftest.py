"""Shared test fixtures for rectanchor."""

import pytest

from rectanchor.core.rect_transform import RectTransform
from rectanchor.layout.alignment import Alignment
from rectanchor.scene.item import BoundsType, Scene, SceneItem


@pytest.fixture
def centered_rt():
    """Centered 200x100 layout on the 1920x1080 canvas."""
    return RectTransform(size_delta=(200, 100))


@pytest.fixture
def centered_item():
    """Item centered on the canvas with 200x100 bounds and nothing persisted."""
    return SceneItem(
        "centered",
        source_size=(400, 200),
        position=(960, 540),
        bounds=(200, 100),
        bounds_type=BoundsType.STRETCH,
        alignment=Alignment.CENTER,
    )


@pytest.fixture
def scaled_item():
    """Top-left aligned item sized by scale (400x200 source at 0.5)."""
    return SceneItem(
        "scaled",
        source_size=(400, 200),
        position=(100, 50),
        scale=(0.5, 0.5),
        alignment=Alignment.LEFT | Alignment.TOP,
    )


@pytest.fixture
def scene():
    """Canvas with a selected item, an unselected item and a group."""
    root = Scene("main", 1920, 1080)
    root.add_item(SceneItem("logo", source_size=(400, 200), position=(960, 540),
                            alignment=Alignment.CENTER, selected=True))
    root.add_item(SceneItem("background", source_size=(1920, 1080)))
    group = root.add_item(SceneItem("overlay"))
    group.add_child(SceneItem("caption", source_size=(600, 80), position=(100, 900),
                              selected=True))
    group.add_child(SceneItem("ticker", source_size=(1920, 40)))
    return root
