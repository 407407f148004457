"""Apply RectTransforms to positionable items and reconstruct them from items.

The RectTransform lives in bottom-origin container space; the item lives in
top-origin space and positions itself by the point its alignment flags
select. Applying writes the pivot point, quantized alignment and explicit
bounds; loading inverts the same formulas from whatever geometry the item
currently has.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from ..config import LayoutConfig, resolve_config
from ..core.rect_transform import FIELD_KEYS, MIN_SIZE, RectTransform
from ..layout.alignment import Alignment, alignment_from_pivot, pivot_from_alignment
from .item import BoundsType, PositionableItem

logger = logging.getLogger(__name__)

# Presence of this field marks an item as having saved layout state
SENTINEL_KEY = "anchorMinX"

# Fields read back on load; offsets and sizes always come from live geometry
_ANCHOR_PIVOT_KEYS = FIELD_KEYS[:6]


def item_size(item: PositionableItem) -> NDArray[np.float64]:
    """Get an item's effective size in canvas units.

    Bounds when a bounds mode is active, otherwise intrinsic size x scale.
    """
    if item.get_bounds_type() != BoundsType.NONE:
        return np.asarray(item.get_bounds(), dtype=np.float64).copy()
    intrinsic = np.asarray(item.get_intrinsic_size(), dtype=np.float64)
    return intrinsic * np.asarray(item.get_scale(), dtype=np.float64)


def apply_to_item(
    rt: RectTransform,
    item: PositionableItem | None,
    container_w: float,
    container_h: float,
    config: LayoutConfig | None = None,
) -> None:
    """Apply a RectTransform to an item.

    Sets alignment from the quantized pivot, the position to the pivot point
    (Y flipped into top-origin space), switches the item to stretch bounds and
    sets the bounds to the effective size. Bounds are used instead of scale so
    the size does not depend on the source's intrinsic aspect ratio.

    The alignment only has three values per axis, so a pivot such as 0.3 is
    drawn as if it were 0.5. The position written is the exact pivot point
    either way; it is the host's anchoring of that point that is approximate.

    Args:
        rt: Layout to apply
        item: Target item; None is ignored
        container_w: Canvas width
        container_h: Canvas height
        config: Quantization thresholds and key prefix
    """
    if item is None:
        return
    config = resolve_config(config)

    rect = rt.calculate_final_rect(container_w, container_h)
    pivot_world = rect.min_corner + rect.size * rt.pivot

    # Bottom-origin -> top-origin
    foreign_y = container_h - pivot_world[1]

    align = alignment_from_pivot(float(rt.pivot[0]), float(rt.pivot[1]), config)
    item.set_alignment(align)
    item.set_position(np.array([pivot_world[0], foreign_y], dtype=np.float64))

    item.set_bounds_type(BoundsType.STRETCH)
    item.set_bounds_alignment(Alignment.CENTER)
    item.set_bounds(rect.size)

    logger.debug(
        "Applied rect (%.2f, %.2f, %.2f x %.2f) align=%d pos=(%.2f, %.2f)",
        rect.x, rect.y, rect.width, rect.height, int(align), pivot_world[0], foreign_y,
    )

    save_to_item(rt, item, config)


def save_to_item(
    rt: RectTransform,
    item: PositionableItem | None,
    config: LayoutConfig | None = None,
) -> None:
    """Persist the ten normalized fields into the item's settings store.

    Items without a settings store are left alone.
    """
    if item is None:
        return
    settings = item.get_settings()
    if settings is None:
        return
    config = resolve_config(config)

    for key, value in rt.to_dict().items():
        settings.set_double(config.key(key), value)


def has_saved_layout(item: PositionableItem | None, config: LayoutConfig | None = None) -> bool:
    """Check whether an item carries persisted layout state."""
    if item is None:
        return False
    settings = item.get_settings()
    if settings is None:
        return False
    return settings.has_user_value(resolve_config(config).key(SENTINEL_KEY))


def load_from_item(
    item: PositionableItem | None,
    container_w: float,
    container_h: float,
    config: LayoutConfig | None = None,
) -> RectTransform:
    """Reconstruct a RectTransform from an item.

    Anchors and pivot come from the item's settings when saved there;
    otherwise the anchors default to the center and the pivot is inferred
    from the item's alignment flags. anchored_pos and size_delta are always
    solved from the item's live position and size, since the item may have
    been moved or resized since the last save.

    Args:
        item: Source item; None gives the default centered 100x100 layout
        container_w: Canvas width
        container_h: Canvas height
        config: Key prefix

    Returns:
        A new RectTransform
    """
    rt = RectTransform()
    if item is None:
        return rt
    config = resolve_config(config)

    if has_saved_layout(item, config):
        settings = item.get_settings()
        values = {key: settings.get_double(config.key(key)) for key in _ANCHOR_PIVOT_KEYS}
        rt.anchor_min = np.array([values["anchorMinX"], values["anchorMinY"]], dtype=np.float64)
        rt.anchor_max = np.array([values["anchorMaxX"], values["anchorMaxY"]], dtype=np.float64)
        rt.pivot = np.array([values["pivotX"], values["pivotY"]], dtype=np.float64)
    else:
        rt.anchor_min = np.full(2, 0.5, dtype=np.float64)
        rt.anchor_max = np.full(2, 0.5, dtype=np.float64)
        rt.pivot = pivot_from_alignment(item.get_alignment())

    size = np.maximum(MIN_SIZE, item_size(item))

    pos = np.asarray(item.get_position(), dtype=np.float64)
    # Top-origin -> bottom-origin
    pivot_world = np.array([pos[0], container_h - pos[1]], dtype=np.float64)
    rect_min = pivot_world - size * rt.pivot

    box = rt.anchor_box(container_w, container_h)
    anchor_pivot = box.min_corner + box.size * rt.pivot

    rt.size_delta = size - box.size
    rt.anchored_pos = rect_min - anchor_pivot + size * rt.pivot

    logger.debug(
        "Loaded layout anchors=(%s, %s) pivot=%s anchored_pos=%s size_delta=%s",
        rt.anchor_min, rt.anchor_max, rt.pivot, rt.anchored_pos, rt.size_delta,
    )
    return rt
