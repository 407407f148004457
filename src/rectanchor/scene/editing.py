"""Direct edits of item size, position, name and visibility, and read-back for display."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from ..layout.alignment import alignment_offset, describe_alignment
from .adapter import item_size
from .item import BoundsType, PositionableItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemSummary:
    """Display values of one item in top-origin canvas units.

    x/y is the item's alignment point, left/top its top-left corner.
    """

    name: str
    x: float
    y: float
    width: float
    height: float
    left: float
    top: float
    alignment: str
    visible: bool

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "left": self.left,
            "top": self.top,
            "alignment": self.alignment,
            "visible": self.visible,
        }


def describe_item(item: PositionableItem) -> ItemSummary:
    """Read an item's current position and size."""
    pos = np.asarray(item.get_position(), dtype=np.float64)
    size = item_size(item)
    align = item.get_alignment()
    corner = pos - alignment_offset(align, float(size[0]), float(size[1]))

    return ItemSummary(
        name=item.get_name(),
        x=float(pos[0]),
        y=float(pos[1]),
        width=float(size[0]),
        height=float(size[1]),
        left=float(corner[0]),
        top=float(corner[1]),
        alignment=describe_alignment(align),
        visible=item.get_visible(),
    )


def resize_items(items: Iterable[PositionableItem], width: float, height: float) -> int:
    """Set the size of every item.

    Items in a bounds mode get new bounds; others get a scale computed from
    their intrinsic size. Items with a zero intrinsic size cannot be sized by
    scale and are skipped.

    Args:
        items: Items to resize
        width: Target width in canvas units
        height: Target height in canvas units

    Returns:
        Number of items resized
    """
    target = np.array([width, height], dtype=np.float64)
    count = 0
    for item in items:
        if item.get_bounds_type() != BoundsType.NONE:
            item.set_bounds(target)
        else:
            intrinsic = np.asarray(item.get_intrinsic_size(), dtype=np.float64)
            if np.any(intrinsic == 0):
                logger.debug("Skipping resize of %r: zero intrinsic size", item)
                continue
            item.set_scale(target / intrinsic)
        count += 1
    return count


def move_items(items: Iterable[PositionableItem], x: float, y: float) -> int:
    """Set the top-origin position of every item.

    Returns:
        Number of items moved
    """
    count = 0
    for item in items:
        item.set_position(np.array([x, y], dtype=np.float64))
        count += 1
    return count


def rename_items(items: Iterable[PositionableItem], name: str) -> int:
    """Give every item the same name.

    Raises:
        ValueError: If the name is empty

    Returns:
        Number of items renamed
    """
    name = name.strip()
    if not name:
        raise ValueError("Item name must not be empty")

    count = 0
    for item in items:
        logger.debug("Renaming %r to %r", item.get_name(), name)
        item.set_name(name)
        count += 1
    return count


def set_items_visible(items: Iterable[PositionableItem], visible: bool) -> int:
    """Show or hide every item.

    Returns:
        Number of items updated
    """
    count = 0
    for item in items:
        item.set_visible(visible)
        count += 1
    return count
