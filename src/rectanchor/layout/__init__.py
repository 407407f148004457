"""Anchor presets and alignment quantization."""

from .alignment import Alignment, alignment_from_pivot, pivot_from_alignment
from .anchors import AnchorH, AnchorPreset, AnchorV, parse_preset

__all__ = [
    "Alignment",
    "alignment_from_pivot",
    "pivot_from_alignment",
    "AnchorH",
    "AnchorPreset",
    "AnchorV",
    "parse_preset",
]
