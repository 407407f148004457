"""Positionable items, the in-memory host and the layout adapter."""

from .adapter import apply_to_item, load_from_item, save_to_item
from .editing import (
    ItemSummary,
    describe_item,
    move_items,
    rename_items,
    resize_items,
    set_items_visible,
)
from .item import BoundsType, ItemSettings, PositionableItem, Scene, SceneItem, SettingsStore
from .loader import SceneLoader, dump_scene

__all__ = [
    "apply_to_item",
    "load_from_item",
    "save_to_item",
    "ItemSummary",
    "describe_item",
    "move_items",
    "rename_items",
    "resize_items",
    "set_items_visible",
    "BoundsType",
    "ItemSettings",
    "PositionableItem",
    "Scene",
    "SceneItem",
    "SettingsStore",
    "SceneLoader",
    "dump_scene",
]
