"""Command line entry point for rectanchor."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import LayoutConfig
from .layout.anchors import parse_preset
from .layout.presets import PresetEngine, PresetMode
from .scene.adapter import has_saved_layout, load_from_item
from .scene.editing import (
    describe_item,
    move_items,
    rename_items,
    resize_items,
    set_items_visible,
)
from .scene.item import Scene
from .scene.loader import SceneLoader, dump_scene

logger = logging.getLogger(__name__)


def _parse_pair(text: str, sep: str, label: str) -> tuple[float, float]:
    parts = text.lower().split(sep)
    if len(parts) != 2:
        raise ValueError(f"{label} must look like A{sep}B, got {text!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        raise ValueError(f"{label} must contain two numbers, got {text!r}") from None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="rectanchor - anchor-and-pivot layout for scene items",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Modifiers for --preset:\n"
            "  (none)               re-anchor, keep the item where it is\n"
            "  --pivot              re-anchor, snap the pivot onto the anchors\n"
            "  --pivot --position   reset anchors, pivot and size to the preset\n"
            "  --position           keep anchors, move the item to the preset spot"
        ),
    )
    parser.add_argument("scene", metavar="SCENE", help="Scene YAML file")
    parser.add_argument(
        "-p", "--preset",
        metavar="NAME",
        help="Anchor preset to apply to selected items (e.g. top-left, stretch-bottom)",
    )
    parser.add_argument(
        "--pivot",
        action="store_true",
        help="Hold the pivot modifier while applying the preset",
    )
    parser.add_argument(
        "--position",
        action="store_true",
        help="Hold the position modifier while applying the preset",
    )
    parser.add_argument(
        "--resize",
        metavar="WxH",
        help="Set the size of selected items",
    )
    parser.add_argument(
        "--move",
        metavar="X,Y",
        help="Set the position of selected items (top-origin canvas units)",
    )
    parser.add_argument(
        "--rename",
        metavar="NAME",
        help="Rename selected items",
    )
    visibility = parser.add_mutually_exclusive_group()
    visibility.add_argument(
        "--show",
        dest="visible",
        action="store_const",
        const=True,
        help="Make selected items visible",
    )
    visibility.add_argument(
        "--hide",
        dest="visible",
        action="store_const",
        const=False,
        help="Hide selected items",
    )
    parser.add_argument(
        "-o", "--output",
        metavar="PATH",
        help="Write the updated scene to this YAML file",
    )
    parser.add_argument(
        "-c", "--config",
        metavar="PATH",
        help="Layout config YAML file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)
    if (args.pivot or args.position) and not args.preset:
        parser.error("--pivot and --position only apply together with --preset")
    return args


def print_scene(scene: Scene, config: LayoutConfig) -> None:
    """Print every item with its display values and layout."""
    print(f"Scene '{scene.name}' ({scene.width}x{scene.height})")
    print("=" * 40)
    for item in scene.iter_items():
        summary = describe_item(item)
        rt = load_from_item(item, scene.width, scene.height, config)
        indent = "  " * item.depth
        marker = "*" if item.selected else "-"
        saved = "saved" if has_saved_layout(item, config) else "inferred"
        print(
            f"{indent}{marker} {summary.name}: pos=({summary.x:.1f}, {summary.y:.1f}) "
            f"size={summary.width:.1f}x{summary.height:.1f} align={summary.alignment}"
            f"{'' if summary.visible else ' (hidden)'}"
        )
        print(
            f"{indent}    anchors=({rt.anchor_min[0]:g}, {rt.anchor_min[1]:g})-"
            f"({rt.anchor_max[0]:g}, {rt.anchor_max[1]:g}) "
            f"pivot=({rt.pivot[0]:g}, {rt.pivot[1]:g}) "
            f"anchored_pos=({rt.anchored_pos[0]:.1f}, {rt.anchored_pos[1]:.1f}) "
            f"size_delta=({rt.size_delta[0]:.1f}, {rt.size_delta[1]:.1f}) [{saved}]"
        )


def run(args: argparse.Namespace) -> int:
    """Load the scene, apply the requested edits and report."""
    config = LayoutConfig.from_yaml(args.config) if args.config else LayoutConfig.default()
    if not args.verbose:
        logging.getLogger().setLevel(config.log_level)

    scene = SceneLoader().load(args.scene)
    selected = list(scene.iter_selected())

    if args.move:
        x, y = _parse_pair(args.move, ",", "--move")
        moved = move_items(selected, x, y)
        logger.info("Moved %d item(s) to (%g, %g)", moved, x, y)

    if args.resize:
        width, height = _parse_pair(args.resize, "x", "--resize")
        resized = resize_items(selected, width, height)
        logger.info("Resized %d item(s) to %gx%g", resized, width, height)

    if args.rename is not None:
        renamed = rename_items(selected, args.rename)
        logger.info("Renamed %d item(s) to %r", renamed, args.rename.strip())

    if args.visible is not None:
        changed = set_items_visible(selected, args.visible)
        logger.info("%s %d item(s)", "Showed" if args.visible else "Hid", changed)

    if args.preset:
        preset = parse_preset(args.preset)
        mode = PresetMode.from_modifiers(args.pivot, args.position)
        engine = PresetEngine(config)
        result = engine.apply(
            selected,
            preset.h,
            preset.v,
            pivot_mod=args.pivot,
            position_mod=args.position,
            container_w=scene.width,
            container_h=scene.height,
        )
        logger.info(
            "Applied preset %s (%s) to %d item(s), %d failed",
            preset.name, mode.value, len(result.applied), len(result.failed),
        )

    print_scene(scene, config)

    if args.output:
        output_path = Path(args.output)
        dump_scene(scene, output_path)
        print(f"\nSaved scene to {output_path}")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the rectanchor command line tool."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )

    try:
        return run(args)
    except (ValueError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
