"""Configuration for layout application.

Holds the tunable constants of the transform core. Supports loading from
YAML or using the defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .core.rect_transform import MIN_SIZE


@dataclass
class LayoutConfig:
    """Tunable constants for the adapter and the preset engine.

    Attributes:
        align_low: Pivot values below this quantize to the left/bottom flag
        align_high: Pivot values above this quantize to the right/top flag
        fallback_size: Size used by a full preset reset when the current
            size on a fixed axis is degenerate
        settings_prefix: Prefix prepended to every persisted field key
        log_level: Logging level name used by the command line entry point
    """

    align_low: float = 0.25
    align_high: float = 0.75
    fallback_size: float = 100.0
    settings_prefix: str = ""
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.align_low = float(self.align_low)
        self.align_high = float(self.align_high)
        self.fallback_size = float(self.fallback_size)
        if not 0.0 <= self.align_low <= self.align_high <= 1.0:
            raise ValueError(
                f"Alignment thresholds must satisfy 0 <= low <= high <= 1, "
                f"got low={self.align_low}, high={self.align_high}"
            )
        if self.fallback_size < MIN_SIZE:
            raise ValueError(
                f"fallback_size must be at least {MIN_SIZE}, got {self.fallback_size}"
            )
        self.log_level = str(self.log_level).upper()
        if self.log_level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log_level {self.log_level!r}")

    def key(self, name: str) -> str:
        """Get the persisted settings key for a field name."""
        return f"{self.settings_prefix}{name}"

    @classmethod
    def default(cls) -> LayoutConfig:
        """Return configuration with the default constants."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> LayoutConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown layout config keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> LayoutConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Populated LayoutConfig instance
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Layout config must be a mapping, got {type(data).__name__}")

        return cls.from_dict(data)


def resolve_config(config: LayoutConfig | None) -> LayoutConfig:
    """Return the given config, or the defaults when it is None."""
    return config if config is not None else LayoutConfig.default()
