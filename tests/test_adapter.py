"""Tests for applying layouts to items and reconstructing them."""

import numpy as np
import pytest

from rectanchor.config import LayoutConfig
from rectanchor.core.rect_transform import FIELD_KEYS, RectTransform
from rectanchor.layout.alignment import Alignment
from rectanchor.scene.adapter import (
    apply_to_item,
    has_saved_layout,
    item_size,
    load_from_item,
    save_to_item,
)
from rectanchor.scene.item import BoundsType, SceneItem


def make_item(**kwargs):
    kwargs.setdefault("source_size", (640, 360))
    return SceneItem("item", **kwargs)


def test_apply_centered_layout(centered_rt):
    item = make_item()
    apply_to_item(centered_rt, item, 1920, 1080)

    np.testing.assert_allclose(item.position, [960.0, 540.0])
    np.testing.assert_allclose(item.bounds, [200.0, 100.0])
    assert item.bounds_type is BoundsType.STRETCH
    assert item.bounds_alignment == Alignment.CENTER
    assert item.alignment == Alignment.CENTER


def test_apply_flips_vertical_axis():
    rt = RectTransform(
        anchor_min=(0, 1), anchor_max=(0, 1), pivot=(0, 1),
        anchored_pos=(10, -20), size_delta=(200, 100),
    )
    item = make_item()
    apply_to_item(rt, item, 1920, 1080)

    # Pivot sits 20 units below the top edge
    np.testing.assert_allclose(item.position, [10.0, 20.0])
    assert item.alignment == Alignment.LEFT | Alignment.TOP


def test_apply_bottom_right_pivot():
    rt = RectTransform(anchor_min=(1, 0), anchor_max=(1, 0), pivot=(1, 0), size_delta=(300, 50))
    item = make_item()
    apply_to_item(rt, item, 1280, 720)

    np.testing.assert_allclose(item.position, [1280.0, 720.0])
    assert item.alignment == Alignment.RIGHT | Alignment.BOTTOM


def test_apply_persists_all_fields(centered_rt):
    item = make_item()
    apply_to_item(centered_rt, item, 1920, 1080)

    assert set(item.settings.values) == set(FIELD_KEYS)
    assert item.settings.get_double("sizeDeltaX") == 200.0
    assert has_saved_layout(item)


def test_apply_to_none_is_noop(centered_rt):
    apply_to_item(centered_rt, None, 1920, 1080)
    save_to_item(centered_rt, None)


def test_items_without_settings_store_still_apply(centered_rt):
    item = make_item(settings=None)
    apply_to_item(centered_rt, item, 1920, 1080)

    np.testing.assert_allclose(item.position, [960.0, 540.0])
    assert not has_saved_layout(item)


def test_settings_prefix(centered_rt):
    config = LayoutConfig(settings_prefix="rt_")
    item = make_item()
    save_to_item(centered_rt, item, config)

    assert item.settings.has_user_value("rt_anchorMinX")
    assert not item.settings.has_user_value("anchorMinX")
    assert has_saved_layout(item, config)
    assert not has_saved_layout(item)


def test_load_none_gives_default_layout():
    rt = load_from_item(None, 1920, 1080)
    assert rt.calculate_final_rect(1920, 1080).isclose(RectTransform().calculate_final_rect(1920, 1080))
    np.testing.assert_array_equal(rt.size_delta, [100.0, 100.0])


def test_load_infers_pivot_from_alignment(scaled_item):
    rt = load_from_item(scaled_item, 1920, 1080)

    np.testing.assert_array_equal(rt.anchor_min, [0.5, 0.5])
    np.testing.assert_array_equal(rt.anchor_max, [0.5, 0.5])
    np.testing.assert_array_equal(rt.pivot, [0.0, 1.0])
    np.testing.assert_allclose(rt.size_delta, [200.0, 100.0])
    np.testing.assert_allclose(rt.anchored_pos, [-860.0, 490.0])

    # Top-left corner at (100, 50) in top-origin space
    rect = rt.calculate_final_rect(1920, 1080)
    assert rect.x == pytest.approx(100.0)
    assert rect.top == pytest.approx(1080.0 - 50.0)


def test_load_without_settings_store_infers_pivot():
    item = make_item(settings=None, alignment=Alignment.RIGHT, position=(500, 500),
                     bounds=(100, 100), bounds_type=BoundsType.STRETCH)
    rt = load_from_item(item, 1000, 1000)
    np.testing.assert_array_equal(rt.pivot, [1.0, 0.5])


def test_load_reads_saved_anchors_and_pivot():
    rt = RectTransform(anchor_min=(0, 0), anchor_max=(1, 0), pivot=(0.3, 0.9),
                       anchored_pos=(5, 40), size_delta=(-100, 80))
    item = make_item()
    apply_to_item(rt, item, 1920, 1080)
    # Quantized alignment no longer matches the stored pivot
    assert item.alignment == Alignment.TOP

    loaded = load_from_item(item, 1920, 1080)
    np.testing.assert_allclose(loaded.anchor_min, [0.0, 0.0])
    np.testing.assert_allclose(loaded.anchor_max, [1.0, 0.0])
    np.testing.assert_allclose(loaded.pivot, [0.3, 0.9])


def test_load_recomputes_offsets_from_live_geometry(centered_rt):
    item = make_item()
    apply_to_item(centered_rt, item, 1920, 1080)

    # Moved and resized outside the layout system
    item.set_position((1000, 500))
    item.set_bounds((300, 100))

    loaded = load_from_item(item, 1920, 1080)
    np.testing.assert_allclose(loaded.anchored_pos, [40.0, 40.0])
    np.testing.assert_allclose(loaded.size_delta, [300.0, 100.0])
    # The stored values are stale but untouched
    assert item.settings.get_double("anchoredPosX") == 0.0


def test_live_size_uses_scale_when_bounds_disabled():
    item = make_item(source_size=(400, 300), scale=(0.5, 2.0))
    np.testing.assert_allclose(item_size(item), [200.0, 600.0])
    item.set_bounds_type(BoundsType.SCALE_INNER)
    item.set_bounds((10, 20))
    np.testing.assert_allclose(item_size(item), [10.0, 20.0])


def test_zero_sized_item_is_floored_on_load():
    item = make_item(source_size=(0, 0), position=(50, 50), alignment=Alignment.CENTER)
    rt = load_from_item(item, 100, 100)
    np.testing.assert_allclose(rt.size_delta, [1.0, 1.0])


@pytest.mark.parametrize("container", [(1920, 1080), (1280, 720), (640, 480), (1, 1), (3840, 2160)])
@pytest.mark.parametrize("anchor,pivot,anchored_pos,size_delta", [
    ((0.5, 0.5), (0.5, 0.5), (0.0, 0.0), (200.0, 100.0)),
    ((0.0, 1.0), (0.0, 1.0), (12.5, -40.0), (320.0, 180.0)),
    ((1.0, 0.0), (1.0, 0.0), (-8.0, 16.0), (64.0, 64.0)),
    ((0.25, 0.8), (0.3, 0.6), (100.0, -250.0), (33.3, 17.1)),
    ((0.5, 0.0), (0.75, 0.25), (-1000.0, 2000.0), (5.0, 900.0)),
])
def test_load_after_apply_round_trip(container, anchor, pivot, anchored_pos, size_delta):
    rt = RectTransform(anchor_min=anchor, anchor_max=anchor, pivot=pivot,
                       anchored_pos=anchored_pos, size_delta=size_delta)
    item = make_item()
    apply_to_item(rt, item, *container)
    loaded = load_from_item(item, *container)

    np.testing.assert_allclose(loaded.anchored_pos, rt.anchored_pos, rtol=0, atol=1e-3)
    np.testing.assert_allclose(loaded.size_delta, rt.size_delta, rtol=0, atol=1e-3)


def test_round_trip_with_stretch_anchors():
    rt = RectTransform(anchor_min=(0, 0.1), anchor_max=(1, 0.9), pivot=(0.5, 0.5),
                       anchored_pos=(4, -6), size_delta=(-40, -20))
    item = make_item()
    apply_to_item(rt, item, 1920, 1080)
    loaded = load_from_item(item, 1920, 1080)

    np.testing.assert_allclose(loaded.anchored_pos, rt.anchored_pos, rtol=0, atol=1e-3)
    np.testing.assert_allclose(loaded.size_delta, rt.size_delta, rtol=0, atol=1e-3)


def test_repeated_round_trips_do_not_drift():
    rt = RectTransform(anchor_min=(0.2, 0.7), anchor_max=(0.2, 0.7), pivot=(0.1, 0.9),
                       anchored_pos=(17.3, -4.1), size_delta=(123.4, 56.7))
    item = make_item()
    current = rt
    for _ in range(50):
        apply_to_item(current, item, 1366, 768)
        current = load_from_item(item, 1366, 768)

    np.testing.assert_allclose(current.anchored_pos, rt.anchored_pos, rtol=0, atol=1e-3)
    np.testing.assert_allclose(current.size_delta, rt.size_delta, rtol=0, atol=1e-3)
