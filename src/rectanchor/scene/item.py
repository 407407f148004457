"""Positionable item capability and an in-memory host implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from ..layout.alignment import Alignment


class BoundsType(Enum):
    """How an item's bounds size is used.

    NONE means the item is sized by scale x intrinsic size.
    """

    NONE = "none"
    STRETCH = "stretch"
    SCALE_INNER = "scale_inner"
    SCALE_OUTER = "scale_outer"


@runtime_checkable
class SettingsStore(Protocol):
    """Persisted string-keyed doubles attached to an item."""

    def get_double(self, key: str) -> float:
        ...

    def set_double(self, key: str, value: float) -> None:
        ...

    def has_user_value(self, key: str) -> bool:
        ...


@runtime_checkable
class PositionableItem(Protocol):
    """Capability interface of a foreign scene item.

    Positions are in the host's top-origin space and refer to the point
    selected by the item's alignment flags.
    """

    def get_position(self) -> NDArray[np.float64]:
        ...

    def set_position(self, pos) -> None:
        ...

    def get_scale(self) -> NDArray[np.float64]:
        ...

    def set_scale(self, scale) -> None:
        ...

    def get_bounds(self) -> NDArray[np.float64]:
        ...

    def set_bounds(self, bounds) -> None:
        ...

    def get_bounds_type(self) -> BoundsType:
        ...

    def set_bounds_type(self, bounds_type: BoundsType) -> None:
        ...

    def set_bounds_alignment(self, align: Alignment) -> None:
        ...

    def get_alignment(self) -> Alignment:
        ...

    def set_alignment(self, align: Alignment) -> None:
        ...

    def get_intrinsic_size(self) -> NDArray[np.float64]:
        ...

    def get_settings(self) -> SettingsStore | None:
        ...

    def get_name(self) -> str:
        ...

    def set_name(self, name: str) -> None:
        ...

    def get_visible(self) -> bool:
        ...

    def set_visible(self, visible: bool) -> None:
        ...


@dataclass
class ItemSettings:
    """Dict-backed settings store.

    A key only has a user value once it has been set.
    """

    values: dict[str, float] = field(default_factory=dict)

    def get_double(self, key: str) -> float:
        return float(self.values.get(key, 0.0))

    def set_double(self, key: str, value: float) -> None:
        self.values[key] = float(value)

    def has_user_value(self, key: str) -> bool:
        return key in self.values

    def to_dict(self) -> dict[str, float]:
        return dict(self.values)


def _as_vec2(value) -> NDArray[np.float64]:
    return np.asarray(value, dtype=np.float64).reshape(2).copy()


@dataclass(eq=False)
class SceneItem:
    """An item in the in-memory host scene.

    Each item shows a source of some intrinsic size, either scaled or fitted
    into explicit bounds. Group items carry children whose positions are
    relative to the same canvas.

    Example:
        logo = SceneItem("logo", source_size=(400, 200))
        logo.position = (960, 540)
        logo.scale = (0.5, 0.5)
    """

    name: str
    source_size: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(2, dtype=np.float64)
    )
    position: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(2, dtype=np.float64)
    )
    scale: NDArray[np.float64] = field(
        default_factory=lambda: np.ones(2, dtype=np.float64)
    )
    bounds: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(2, dtype=np.float64)
    )
    bounds_type: BoundsType = BoundsType.NONE
    bounds_alignment: Alignment = Alignment.CENTER
    alignment: Alignment = Alignment.LEFT | Alignment.TOP
    settings: ItemSettings | None = field(default_factory=ItemSettings)
    selected: bool = False
    visible: bool = True
    children: list[SceneItem] = field(default_factory=list)
    parent: SceneItem | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.source_size = _as_vec2(self.source_size)
        self.position = _as_vec2(self.position)
        self.scale = _as_vec2(self.scale)
        self.bounds = _as_vec2(self.bounds)
        self.bounds_type = BoundsType(self.bounds_type)
        self.bounds_alignment = Alignment(int(self.bounds_alignment))
        self.alignment = Alignment(int(self.alignment))

    # ===== PositionableItem =====

    def get_position(self) -> NDArray[np.float64]:
        return self.position.copy()

    def set_position(self, pos) -> None:
        self.position = _as_vec2(pos)

    def get_scale(self) -> NDArray[np.float64]:
        return self.scale.copy()

    def set_scale(self, scale) -> None:
        self.scale = _as_vec2(scale)

    def get_bounds(self) -> NDArray[np.float64]:
        return self.bounds.copy()

    def set_bounds(self, bounds) -> None:
        self.bounds = _as_vec2(bounds)

    def get_bounds_type(self) -> BoundsType:
        return self.bounds_type

    def set_bounds_type(self, bounds_type: BoundsType) -> None:
        self.bounds_type = BoundsType(bounds_type)

    def set_bounds_alignment(self, align: Alignment) -> None:
        self.bounds_alignment = Alignment(int(align))

    def get_alignment(self) -> Alignment:
        return self.alignment

    def set_alignment(self, align: Alignment) -> None:
        self.alignment = Alignment(int(align))

    def get_intrinsic_size(self) -> NDArray[np.float64]:
        return self.source_size.copy()

    def get_settings(self) -> ItemSettings | None:
        return self.settings

    def get_name(self) -> str:
        return self.name

    def set_name(self, name: str) -> None:
        self.name = str(name)

    def get_visible(self) -> bool:
        return self.visible

    def set_visible(self, visible: bool) -> None:
        self.visible = bool(visible)

    # ===== Hierarchy =====

    @property
    def is_group(self) -> bool:
        return bool(self.children)

    def add_child(self, item: SceneItem) -> SceneItem:
        """Add a child item to this group.

        Returns:
            The added item (for chaining)
        """
        item.parent = self
        self.children.append(item)
        return item

    def iter_items(self, include_self: bool = True) -> Iterator[SceneItem]:
        """Iterate over this item and all descendants (depth-first)."""
        if include_self:
            yield self
        for child in self.children:
            yield from child.iter_items(include_self=True)

    @property
    def depth(self) -> int:
        if self.parent is None:
            return 0
        return self.parent.depth + 1

    def __repr__(self) -> str:
        children_str = f", children={len(self.children)}" if self.children else ""
        selected_str = ", selected" if self.selected else ""
        return f"SceneItem({self.name!r}{selected_str}{children_str})"


@dataclass
class Scene:
    """A canvas of a fixed size holding top-level items."""

    name: str
    width: int
    height: int
    items: list[SceneItem] = field(default_factory=list)

    def add_item(self, item: SceneItem) -> SceneItem:
        item.parent = None
        self.items.append(item)
        return item

    def iter_items(self) -> Iterator[SceneItem]:
        """Iterate over every item, descending into groups (depth-first)."""
        for item in self.items:
            yield from item.iter_items()

    def iter_selected(self) -> Iterator[SceneItem]:
        """Iterate over selected items, descending into groups.

        A selected group is yielded itself and its selected children are
        yielded as well.
        """
        for item in self.iter_items():
            if item.selected:
                yield item

    def find(self, name: str) -> SceneItem | None:
        """Find the first item with the given name."""
        for item in self.iter_items():
            if item.name == name:
                return item
        return None

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self.width, self.height
