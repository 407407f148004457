"""YAML loader and writer for in-memory host scenes."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
import yaml

from ..layout.alignment import describe_alignment, parse_alignment
from .item import BoundsType, ItemSettings, Scene, SceneItem

# Keys accepted in an item definition
_ITEM_KEYS = {
    "source_size",
    "position",
    "scale",
    "bounds",
    "bounds_type",
    "alignment",
    "selected",
    "visible",
    "persist",
    "settings",
    "children",
}


class SceneLoader:
    """Loads host scenes from YAML files.

    YAML format:
        name: main
        size: [1920, 1080]          # canvas width, height

        items:
          logo:
            source_size: [400, 200] # intrinsic size of the shown source
            position: [960, 540]    # top-origin canvas units
            scale: [0.5, 0.5]       # used while bounds_type is none
            bounds: [200, 100]      # used while bounds_type is not none
            bounds_type: none|stretch|scale_inner|scale_outer
            alignment: top-left     # or center, bottom, right, ... or an int
            selected: true
            visible: true
            persist: true           # false: the item has no settings store
            settings:               # persisted layout fields, if any
              anchorMinX: 0.0

          overlay_group:
            children:
              caption:
                source_size: [600, 80]
    """

    def load(self, path: str | Path) -> Scene:
        """Load a scene from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Scene with its items
        """
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f)

        return self._build_scene(data, default_name=path.stem)

    def load_string(self, yaml_string: str) -> Scene:
        """Load a scene from a YAML string."""
        data = yaml.safe_load(yaml_string)
        return self._build_scene(data)

    def _build_scene(self, data: Any, default_name: str = "scene") -> Scene:
        if not isinstance(data, dict):
            raise ValueError("Scene definition must be a mapping")
        if "size" not in data:
            raise ValueError("Scene definition is missing 'size'")

        size = data["size"]
        if not isinstance(size, (list, tuple)) or len(size) != 2:
            raise ValueError(f"Scene 'size' must be [width, height], got {size!r}")
        width, height = (int(v) for v in size)
        if width < 0 or height < 0:
            raise ValueError(f"Scene 'size' must not be negative, got {size!r}")

        scene = Scene(name=data.get("name", default_name), width=width, height=height)
        items = self._mapping(data.get("items"), "Scene 'items'")
        for item_name, item_def in items.items():
            scene.add_item(self._build_item(item_name, item_def))
        return scene

    def _mapping(self, value: Any, label: str) -> dict:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError(f"{label} must be a mapping, got {type(value).__name__}")
        return value

    def _build_item(self, name: str, item_def: Any) -> SceneItem:
        item_def = self._mapping(item_def, f"Item '{name}'")
        unknown = sorted(str(key) for key in item_def if key not in _ITEM_KEYS)
        if unknown:
            raise ValueError(f"Item '{name}' has unknown keys: {', '.join(unknown)}")

        try:
            bounds_type = BoundsType(item_def.get("bounds_type", "none"))
        except ValueError:
            raise ValueError(
                f"Item '{name}' has unknown bounds_type {item_def['bounds_type']!r}"
            ) from None

        settings = None
        if item_def.get("persist", True):
            values = self._mapping(item_def.get("settings"), f"Item '{name}': 'settings'")
            try:
                settings = ItemSettings({str(k): float(v) for k, v in values.items()})
            except (TypeError, ValueError):
                raise ValueError(
                    f"Item '{name}': 'settings' values must be numbers, got {values!r}"
                ) from None

        item = SceneItem(
            name=str(name),
            source_size=self._vec2(name, item_def, "source_size", (0.0, 0.0)),
            position=self._vec2(name, item_def, "position", (0.0, 0.0)),
            scale=self._vec2(name, item_def, "scale", (1.0, 1.0)),
            bounds=self._vec2(name, item_def, "bounds", (0.0, 0.0)),
            bounds_type=bounds_type,
            alignment=parse_alignment(item_def.get("alignment", "top-left")),
            settings=settings,
            selected=bool(item_def.get("selected", False)),
            visible=bool(item_def.get("visible", True)),
        )

        children = self._mapping(item_def.get("children"), f"Item '{name}': 'children'")
        for child_name, child_def in children.items():
            item.add_child(self._build_item(child_name, child_def))

        return item

    def _vec2(self, name: str, item_def: dict[str, Any], key: str, default) -> np.ndarray:
        value = item_def.get(key, default)
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise ValueError(f"Item '{name}': '{key}' must be a pair of numbers, got {value!r}")
        return np.array(value, dtype=np.float64)


def _items_to_dict(items: list[SceneItem], owner: str) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for item in items:
        if item.name in data:
            raise ValueError(f"{owner} has more than one item named '{item.name}'")
        data[item.name] = _item_to_dict(item)
    return data


def _item_to_dict(item: SceneItem) -> dict[str, Any]:
    data: dict[str, Any] = {
        "source_size": item.source_size.tolist(),
        "position": item.position.tolist(),
        "scale": item.scale.tolist(),
        "bounds": item.bounds.tolist(),
        "bounds_type": item.bounds_type.value,
        "alignment": describe_alignment(item.alignment),
        "selected": item.selected,
        "visible": item.visible,
    }
    if item.settings is None:
        data["persist"] = False
    elif item.settings.values:
        data["settings"] = item.settings.to_dict()
    if item.children:
        data["children"] = _items_to_dict(item.children, f"Item '{item.name}'")
    return data


def dump_scene(scene: Scene, path: str | Path | None = None) -> str:
    """Serialize a scene to YAML in the format SceneLoader reads.

    Args:
        scene: Scene to write
        path: Optional file to write the YAML to

    Returns:
        The YAML text

    Raises:
        ValueError: If two items in the same group share a name, since names
            are the mapping keys of the file format
    """
    data = {
        "name": scene.name,
        "size": [scene.width, scene.height],
        "items": _items_to_dict(scene.items, f"Scene '{scene.name}'"),
    }
    text = yaml.safe_dump(data, sort_keys=False)
    if path is not None:
        Path(path).write_text(text)
    return text
