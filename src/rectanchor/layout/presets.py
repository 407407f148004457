"""Preset application: re-anchor, snap, reset or move items to anchor presets.

Which policy runs depends on two modifiers held when the preset is chosen:

    none              REANCHOR_PRESERVE  change anchors + pivot, item stays put
    pivot             REANCHOR_SNAP      change anchors, pivot jumps onto them
    pivot + position  FULL_RESET         anchors, pivot and size from the preset
    position          MOVE_TO_PRESET     keep anchors, move (and fill) to the preset spot
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

import numpy as np

from ..config import LayoutConfig, resolve_config
from ..core.rect_transform import MIN_SIZE, RectTransform
from ..scene.adapter import apply_to_item, load_from_item
from ..scene.item import PositionableItem
from .anchors import AnchorH, AnchorPreset, AnchorV

logger = logging.getLogger(__name__)


class PresetMode(Enum):
    """Policy used when applying an anchor preset."""

    REANCHOR_PRESERVE = "reanchor_preserve"
    REANCHOR_SNAP = "reanchor_snap"
    FULL_RESET = "full_reset"
    MOVE_TO_PRESET = "move_to_preset"

    @classmethod
    def from_modifiers(cls, pivot_mod: bool, position_mod: bool) -> PresetMode:
        """Select the policy for a modifier combination."""
        if pivot_mod and position_mod:
            return cls.FULL_RESET
        if pivot_mod:
            return cls.REANCHOR_SNAP
        if position_mod:
            return cls.MOVE_TO_PRESET
        return cls.REANCHOR_PRESERVE


def apply_preset(
    rt: RectTransform,
    preset: AnchorPreset,
    mode: PresetMode,
    container_w: float,
    container_h: float,
    config: LayoutConfig | None = None,
) -> RectTransform:
    """Apply an anchor preset to a layout under one of the four policies.

    Args:
        rt: Current layout (not modified)
        preset: Target preset
        mode: Policy to use
        container_w: Container width
        container_h: Container height
        config: Source of the fallback size for FULL_RESET

    Returns:
        New RectTransform with the preset applied
    """
    config = resolve_config(config)
    container = np.array([container_w, container_h], dtype=np.float64)
    rect = rt.calculate_final_rect(container_w, container_h)
    size = rect.size
    result = rt.copy()

    if mode is PresetMode.REANCHOR_PRESERVE:
        result.anchor_min = preset.min_array()
        result.anchor_max = preset.max_array()
        result.pivot = preset.pivot_array()

        box = result.anchor_box(container_w, container_h)
        pivot_world = rect.min_corner + size * result.pivot
        result.size_delta = size - box.size
        result.anchored_pos = pivot_world - (box.min_corner + box.size * result.pivot)

    elif mode is PresetMode.REANCHOR_SNAP:
        result.anchor_min = preset.min_array()
        result.anchor_max = preset.max_array()

        # Keep the visible size, whatever the new anchor box is
        box = result.anchor_box(container_w, container_h)
        result.size_delta = size - box.size
        result.anchored_pos = np.zeros(2, dtype=np.float64)

    elif mode is PresetMode.FULL_RESET:
        result.anchor_min = preset.min_array()
        result.anchor_max = preset.max_array()
        result.pivot = preset.pivot_array()
        result.anchored_pos = np.zeros(2, dtype=np.float64)

        stretch = (preset.is_stretch_x, preset.is_stretch_y)
        for axis in range(2):
            if stretch[axis]:
                result.size_delta[axis] = 0.0
            elif size[axis] > MIN_SIZE:
                result.size_delta[axis] = size[axis]
            else:
                result.size_delta[axis] = config.fallback_size

    elif mode is PresetMode.MOVE_TO_PRESET:
        # Solved against the current anchor box; the preset only picks the spot
        box = rt.anchor_box(container_w, container_h)
        anchor_pivot = box.min_corner + box.size * rt.pivot
        target = preset.min_array()

        stretch = (preset.is_stretch_x, preset.is_stretch_y)
        for axis in range(2):
            if stretch[axis]:
                # Fill the container: rect_min lands on the origin
                result.size_delta[axis] = container[axis] - box.size[axis]
                filled = max(MIN_SIZE, container[axis])
                result.anchored_pos[axis] = filled * rt.pivot[axis] - anchor_pivot[axis]
            else:
                target_min = (container[axis] - size[axis]) * target[axis]
                result.anchored_pos[axis] = (
                    target_min - anchor_pivot[axis] + size[axis] * rt.pivot[axis]
                )

    else:
        raise ValueError(f"Unknown preset mode: {mode!r}")

    return result


@dataclass
class BatchResult:
    """Outcome of applying a preset to several items."""

    applied: list[PositionableItem] = field(default_factory=list)
    failed: list[tuple[PositionableItem, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def __len__(self) -> int:
        return len(self.applied) + len(self.failed)


class PresetEngine:
    """Applies anchor presets to items through the adapter.

    Each item goes through its own load -> apply_preset -> apply cycle. A
    failure on one item is logged and recorded without stopping the rest.

    Example:
        engine = PresetEngine()
        result = engine.apply(scene.iter_selected(), AnchorH.LEFT, AnchorV.TOP,
                              container_w=1920, container_h=1080)
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = resolve_config(config)

    def apply_to_item(
        self,
        item: PositionableItem,
        preset: AnchorPreset,
        mode: PresetMode,
        container_w: float,
        container_h: float,
    ) -> RectTransform:
        """Run one load -> mutate -> apply cycle on a single item.

        Returns:
            The RectTransform that was applied
        """
        rt = load_from_item(item, container_w, container_h, self.config)
        updated = apply_preset(rt, preset, mode, container_w, container_h, self.config)
        apply_to_item(updated, item, container_w, container_h, self.config)
        return updated

    def apply(
        self,
        items: Iterable[PositionableItem],
        h: AnchorH | str,
        v: AnchorV | str,
        *,
        pivot_mod: bool = False,
        position_mod: bool = False,
        container_w: float,
        container_h: float,
    ) -> BatchResult:
        """Apply a preset to every item.

        Args:
            items: Items to update
            h: Horizontal preset choice
            v: Vertical preset choice
            pivot_mod: Whether the pivot modifier is held
            position_mod: Whether the position modifier is held
            container_w: Canvas width
            container_h: Canvas height

        Returns:
            BatchResult listing applied and failed items
        """
        preset = AnchorPreset.from_alignment(h, v)
        mode = PresetMode.from_modifiers(pivot_mod, position_mod)
        logger.debug("Applying preset %s with mode %s", preset.name, mode.value)

        result = BatchResult()
        for item in list(items):
            try:
                self.apply_to_item(item, preset, mode, container_w, container_h)
            except Exception as exc:
                logger.exception("Failed to apply preset %s to %r", preset.name, item)
                result.failed.append((item, exc))
            else:
                result.applied.append(item)
        return result
