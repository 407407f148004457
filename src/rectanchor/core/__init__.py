"""Core layout model components."""

from .rect_transform import FIELD_KEYS, MIN_SIZE, Rect, RectTransform

__all__ = ["FIELD_KEYS", "MIN_SIZE", "Rect", "RectTransform"]
