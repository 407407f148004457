"""Anchor presets for positioning a rect within its container."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray


class AnchorH(Enum):
    """Horizontal anchor choices."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    STRETCH = "stretch"


class AnchorV(Enum):
    """Vertical anchor choices."""

    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"
    STRETCH = "stretch"


# Mapping from anchor choice to normalized (anchor_min, anchor_max, pivot) on one axis
# X: 0=left, 1=right | Y: 0=bottom, 1=top
HORIZONTAL_VALUES: dict[AnchorH, tuple[float, float, float]] = {
    AnchorH.LEFT: (0.0, 0.0, 0.0),
    AnchorH.CENTER: (0.5, 0.5, 0.5),
    AnchorH.RIGHT: (1.0, 1.0, 1.0),
    AnchorH.STRETCH: (0.0, 1.0, 0.5),
}

VERTICAL_VALUES: dict[AnchorV, tuple[float, float, float]] = {
    AnchorV.TOP: (1.0, 1.0, 1.0),
    AnchorV.MIDDLE: (0.5, 0.5, 0.5),
    AnchorV.BOTTOM: (0.0, 0.0, 0.0),
    AnchorV.STRETCH: (0.0, 1.0, 0.5),
}

# Accepted spellings when parsing preset names
_H_ALIASES = {"left": AnchorH.LEFT, "center": AnchorH.CENTER, "centre": AnchorH.CENTER,
              "right": AnchorH.RIGHT}
_V_ALIASES = {"top": AnchorV.TOP, "middle": AnchorV.MIDDLE, "bottom": AnchorV.BOTTOM}


@dataclass(frozen=True)
class AnchorPreset:
    """Anchor and pivot values for one of the symbolic presets.

    Attributes:
        h: Horizontal choice this preset was built from
        v: Vertical choice this preset was built from
        anchor_min: Normalized anchor box min corner (bottom-origin)
        anchor_max: Normalized anchor box max corner
        pivot: Normalized pivot
    """

    h: AnchorH
    v: AnchorV
    anchor_min: tuple[float, float]
    anchor_max: tuple[float, float]
    pivot: tuple[float, float]

    @classmethod
    def from_alignment(cls, h: AnchorH | str, v: AnchorV | str) -> AnchorPreset:
        """Create the preset for a horizontal/vertical choice.

        Unrecognized values fall back to center/middle.
        """
        h = _coerce(AnchorH, h, AnchorH.CENTER)
        v = _coerce(AnchorV, v, AnchorV.MIDDLE)

        min_x, max_x, pivot_x = HORIZONTAL_VALUES[h]
        min_y, max_y, pivot_y = VERTICAL_VALUES[v]

        return cls(
            h=h,
            v=v,
            anchor_min=(min_x, min_y),
            anchor_max=(max_x, max_y),
            pivot=(pivot_x, pivot_y),
        )

    @property
    def is_stretch_x(self) -> bool:
        return self.anchor_min[0] != self.anchor_max[0]

    @property
    def is_stretch_y(self) -> bool:
        return self.anchor_min[1] != self.anchor_max[1]

    def min_array(self) -> NDArray[np.float64]:
        return np.array(self.anchor_min, dtype=np.float64)

    def max_array(self) -> NDArray[np.float64]:
        return np.array(self.anchor_max, dtype=np.float64)

    def pivot_array(self) -> NDArray[np.float64]:
        return np.array(self.pivot, dtype=np.float64)

    @property
    def name(self) -> str:
        return f"{self.v.value}-{self.h.value}"


def _coerce(enum_cls, value, fallback):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        value = value.strip().lower()
    try:
        return enum_cls(value)
    except ValueError:
        return fallback


def parse_preset(name: str) -> AnchorPreset:
    """Parse a preset name such as 'top-left', 'middle_center' or 'stretch-stretch'.

    Word order is free. A single word sets one axis and leaves the other
    centered; 'stretch' alone stretches both axes. When 'stretch' appears
    together with another word it takes the axis that word does not name.

    Args:
        name: Preset name, case-insensitive, separated by '-', '_' or spaces

    Returns:
        The matching AnchorPreset

    Raises:
        ValueError: If the name contains an unknown word or names an axis twice
    """
    tokens = name.strip().lower().replace("_", "-").replace(" ", "-").split("-")
    tokens = [t for t in tokens if t]
    if not tokens or len(tokens) > 2:
        raise ValueError(f"Invalid anchor preset name: {name!r}")

    h: AnchorH | None = None
    v: AnchorV | None = None
    stretches = 0

    for token in tokens:
        if token == "stretch":
            stretches += 1
        elif token in _H_ALIASES:
            if h is not None:
                raise ValueError(f"Anchor preset {name!r} names the horizontal axis twice")
            h = _H_ALIASES[token]
        elif token in _V_ALIASES:
            if v is not None:
                raise ValueError(f"Anchor preset {name!r} names the vertical axis twice")
            v = _V_ALIASES[token]
        else:
            raise ValueError(f"Unknown anchor preset word {token!r} in {name!r}")

    if stretches == 2 or (stretches == 1 and len(tokens) == 1):
        h, v = AnchorH.STRETCH, AnchorV.STRETCH
    elif stretches == 1:
        if h is None:
            h = AnchorH.STRETCH
        else:
            v = AnchorV.STRETCH

    return AnchorPreset.from_alignment(h or AnchorH.CENTER, v or AnchorV.MIDDLE)


def iter_presets():
    """Iterate over all sixteen presets, row by row from top to stretch."""
    for v in AnchorV:
        for h in AnchorH:
            yield AnchorPreset.from_alignment(h, v)
