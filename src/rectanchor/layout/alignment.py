"""Alignment flags of a positionable item and their relation to the pivot.

A positionable item only knows nine alignments: {left, right, none} x
{top, bottom, none}. The pivot of a RectTransform is continuous, so mapping
one onto the other is lossy. Only the pivots 0, 0.5 and 1 survive a round
trip through the flags.
"""

from __future__ import annotations

from enum import IntFlag

import numpy as np
from numpy.typing import NDArray

from ..config import LayoutConfig, resolve_config


class Alignment(IntFlag):
    """Alignment flags of a positionable item.

    No flag on an axis means centered on that axis.
    Values match the host's bit layout so they can be stored as plain ints.
    """

    CENTER = 0
    LEFT = 1 << 0
    RIGHT = 1 << 1
    TOP = 1 << 2
    BOTTOM = 1 << 3


def alignment_from_pivot(
    pivot_x: float, pivot_y: float, config: LayoutConfig | None = None
) -> Alignment:
    """Quantize a pivot to alignment flags.

    Per axis, a pivot strictly below the low threshold gives the low edge flag
    (LEFT, BOTTOM), strictly above the high threshold the high edge flag
    (RIGHT, TOP), and anything else no flag. The vertical pivot is
    bottom-origin, so pivot_y 0 is the bottom edge.

    Args:
        pivot_x: Horizontal pivot (0 = left, 1 = right)
        pivot_y: Vertical pivot (0 = bottom, 1 = top)
        config: Threshold source; defaults to 0.25 / 0.75

    Returns:
        The combined alignment flags
    """
    config = resolve_config(config)
    align = Alignment.CENTER

    if pivot_x < config.align_low:
        align |= Alignment.LEFT
    elif pivot_x > config.align_high:
        align |= Alignment.RIGHT

    if pivot_y < config.align_low:
        align |= Alignment.BOTTOM
    elif pivot_y > config.align_high:
        align |= Alignment.TOP

    return align


def pivot_from_alignment(align: int) -> NDArray[np.float64]:
    """Infer a pivot from alignment flags.

    Inverse of alignment_from_pivot for the three representable values per axis.
    LEFT wins over RIGHT and TOP over BOTTOM if both are set.
    """
    align = Alignment(int(align) & 0xF)

    if align & Alignment.LEFT:
        pivot_x = 0.0
    elif align & Alignment.RIGHT:
        pivot_x = 1.0
    else:
        pivot_x = 0.5

    if align & Alignment.TOP:
        pivot_y = 1.0
    elif align & Alignment.BOTTOM:
        pivot_y = 0.0
    else:
        pivot_y = 0.5

    return np.array([pivot_x, pivot_y], dtype=np.float64)


def alignment_offset(align: int, width: float, height: float) -> NDArray[np.float64]:
    """Get the offset from an item's top-left corner to its alignment point.

    Foreign space is top-origin, so the offset grows downward.
    """
    align = Alignment(int(align) & 0xF)

    if align & Alignment.LEFT:
        dx = 0.0
    elif align & Alignment.RIGHT:
        dx = width
    else:
        dx = width / 2.0

    if align & Alignment.TOP:
        dy = 0.0
    elif align & Alignment.BOTTOM:
        dy = height
    else:
        dy = height / 2.0

    return np.array([dx, dy], dtype=np.float64)


def describe_alignment(align: int) -> str:
    """Human readable name such as 'top-left' or 'center'."""
    align = Alignment(int(align) & 0xF)

    if align & Alignment.TOP:
        vertical = "top"
    elif align & Alignment.BOTTOM:
        vertical = "bottom"
    else:
        vertical = ""

    if align & Alignment.LEFT:
        horizontal = "left"
    elif align & Alignment.RIGHT:
        horizontal = "right"
    else:
        horizontal = ""

    if not vertical and not horizontal:
        return "center"
    return "-".join(part for part in (vertical, horizontal) if part)


def parse_alignment(value: int | str) -> Alignment:
    """Parse alignment flags from an int or a name such as 'top-left'.

    Raises:
        ValueError: If the name contains an unknown word
    """
    if isinstance(value, int):
        return Alignment(value & 0xF)

    align = Alignment.CENTER
    words = {
        "left": Alignment.LEFT,
        "right": Alignment.RIGHT,
        "top": Alignment.TOP,
        "bottom": Alignment.BOTTOM,
        "center": Alignment.CENTER,
        "middle": Alignment.CENTER,
    }
    for word in str(value).strip().lower().replace("_", "-").split("-"):
        if word not in words:
            raise ValueError(f"Unknown alignment word {word!r} in {value!r}")
        align |= words[word]
    return align
