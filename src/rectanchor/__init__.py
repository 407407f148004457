"""rectanchor - anchor-and-pivot layout for positionable scene items."""

from .config import LayoutConfig
from .core import Rect, RectTransform
from .layout import AnchorH, AnchorPreset, AnchorV, parse_preset
from .layout.presets import BatchResult, PresetEngine, PresetMode, apply_preset
from .scene import SceneItem, SceneLoader, apply_to_item, load_from_item

__all__ = [
    "LayoutConfig",
    "Rect",
    "RectTransform",
    "AnchorH",
    "AnchorPreset",
    "AnchorV",
    "parse_preset",
    "BatchResult",
    "PresetEngine",
    "PresetMode",
    "apply_preset",
    "SceneItem",
    "SceneLoader",
    "apply_to_item",
    "load_from_item",
]
