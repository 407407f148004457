"""RectTransform: normalized anchor/pivot layout for a rect inside a container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Self

import numpy as np
from numpy.typing import NDArray

# Smallest width/height a rect may take
MIN_SIZE = 1.0

# Flat field names used when a RectTransform is persisted
FIELD_KEYS: tuple[str, ...] = (
    "anchorMinX",
    "anchorMinY",
    "anchorMaxX",
    "anchorMaxY",
    "pivotX",
    "pivotY",
    "anchoredPosX",
    "anchoredPosY",
    "sizeDeltaX",
    "sizeDeltaY",
)


def _vec2(value, default: tuple[float, float]) -> NDArray[np.float64]:
    if value is None:
        return np.array(default, dtype=np.float64)
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (2,):
        raise ValueError(f"Expected a 2D vector, got shape {arr.shape}")
    return arr


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in bottom-origin container space.

    (x, y) is the min corner (bottom-left), so y grows upward.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def min_corner(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y], dtype=np.float64)

    @property
    def size(self) -> NDArray[np.float64]:
        return np.array([self.width, self.height], dtype=np.float64)

    @property
    def center(self) -> NDArray[np.float64]:
        return self.min_corner + self.size * 0.5

    def isclose(self, other: Rect, tol: float = 1e-3) -> bool:
        """Check whether two rects match within an absolute tolerance."""
        return bool(
            np.allclose(
                [self.x, self.y, self.width, self.height],
                [other.x, other.y, other.width, other.height],
                rtol=0.0,
                atol=tol,
            )
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass
class RectTransform:
    """Anchor-and-pivot description of a rect inside a container.

    All state lives in bottom-origin container space (Y=0 bottom, Y=1 top).

    - anchor_min/anchor_max: normalized corners of the anchor box within the
      container. Equal on an axis means a fixed anchor point, different means
      the rect stretches with the container on that axis.
    - pivot: normalized reference point inside the rect itself.
    - anchored_pos: offset of the pivot from the anchor box's pivot point.
    - size_delta: size added to the anchor box size. On a fixed axis the
      anchor box has zero size, so this is the literal size.

    Example:
        rt = RectTransform(size_delta=(200, 100))
        rt.calculate_final_rect(1920, 1080)  # Rect(860, 490, 200, 100)
    """

    anchor_min: NDArray[np.float64] = field(
        default_factory=lambda: np.full(2, 0.5, dtype=np.float64)
    )
    anchor_max: NDArray[np.float64] = field(
        default_factory=lambda: np.full(2, 0.5, dtype=np.float64)
    )
    pivot: NDArray[np.float64] = field(
        default_factory=lambda: np.full(2, 0.5, dtype=np.float64)
    )
    anchored_pos: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(2, dtype=np.float64)
    )
    size_delta: NDArray[np.float64] = field(
        default_factory=lambda: np.full(2, 100.0, dtype=np.float64)
    )

    def __post_init__(self) -> None:
        self.anchor_min = _vec2(self.anchor_min, (0.5, 0.5))
        self.anchor_max = _vec2(self.anchor_max, (0.5, 0.5))
        self.pivot = _vec2(self.pivot, (0.5, 0.5))
        self.anchored_pos = _vec2(self.anchored_pos, (0.0, 0.0))
        self.size_delta = _vec2(self.size_delta, (100.0, 100.0))

    # ===== Core calculations =====

    def anchor_box(self, container_w: float, container_h: float) -> Rect:
        """Get the anchor box in container units.

        The size is not floored; a fixed anchor has a zero-sized box.
        """
        container = np.array([container_w, container_h], dtype=np.float64)
        box_min = container * self.anchor_min
        box_size = container * self.anchor_max - box_min
        return Rect(float(box_min[0]), float(box_min[1]), float(box_size[0]), float(box_size[1]))

    def anchor_pivot(self, container_w: float, container_h: float) -> NDArray[np.float64]:
        """Get the pivot-weighted point of the anchor box.

        This is the point anchored_pos is measured from.
        """
        box = self.anchor_box(container_w, container_h)
        return box.min_corner + box.size * self.pivot

    def calculate_final_rect(self, container_w: float, container_h: float) -> Rect:
        """Calculate the final rect in container space.

        size     = max(1, anchor box size + size_delta)
        rect_min = anchor pivot + anchored_pos - size * pivot

        Args:
            container_w: Container width
            container_h: Container height

        Returns:
            Rect with the min (bottom-left) corner and the effective size
        """
        box = self.anchor_box(container_w, container_h)
        size = np.maximum(MIN_SIZE, box.size + self.size_delta)
        anchor_pivot = box.min_corner + box.size * self.pivot
        rect_min = anchor_pivot + self.anchored_pos - size * self.pivot
        return Rect(float(rect_min[0]), float(rect_min[1]), float(size[0]), float(size[1]))

    def pivot_world(self, container_w: float, container_h: float) -> NDArray[np.float64]:
        """Get the pivot point in container space."""
        rect = self.calculate_final_rect(container_w, container_h)
        return rect.min_corner + rect.size * self.pivot

    def width(self, container_w: float) -> float:
        """Get the effective width for a container width."""
        box_w = container_w * (self.anchor_max[0] - self.anchor_min[0])
        return float(max(MIN_SIZE, box_w + self.size_delta[0]))

    def height(self, container_h: float) -> float:
        """Get the effective height for a container height."""
        box_h = container_h * (self.anchor_max[1] - self.anchor_min[1])
        return float(max(MIN_SIZE, box_h + self.size_delta[1]))

    # ===== Utility =====

    @property
    def is_stretch_x(self) -> bool:
        return bool(self.anchor_min[0] != self.anchor_max[0])

    @property
    def is_stretch_y(self) -> bool:
        return bool(self.anchor_min[1] != self.anchor_max[1])

    def copy(self) -> Self:
        """Create a deep copy of this rect transform."""
        return RectTransform(
            anchor_min=self.anchor_min.copy(),
            anchor_max=self.anchor_max.copy(),
            pivot=self.pivot.copy(),
            anchored_pos=self.anchored_pos.copy(),
            size_delta=self.size_delta.copy(),
        )

    def to_dict(self) -> dict[str, float]:
        """Flatten into the ten persisted scalar fields."""
        values = np.concatenate(
            [self.anchor_min, self.anchor_max, self.pivot, self.anchored_pos, self.size_delta]
        )
        return {key: float(value) for key, value in zip(FIELD_KEYS, values)}

    @classmethod
    def from_dict(cls, data: dict[str, float]) -> Self:
        """Build from flat persisted fields. Missing fields keep their defaults."""
        defaults = cls().to_dict()
        merged = {key: float(data.get(key, defaults[key])) for key in FIELD_KEYS}
        return cls(
            anchor_min=(merged["anchorMinX"], merged["anchorMinY"]),
            anchor_max=(merged["anchorMaxX"], merged["anchorMaxY"]),
            pivot=(merged["pivotX"], merged["pivotY"]),
            anchored_pos=(merged["anchoredPosX"], merged["anchoredPosY"]),
            size_delta=(merged["sizeDeltaX"], merged["sizeDeltaY"]),
        )
