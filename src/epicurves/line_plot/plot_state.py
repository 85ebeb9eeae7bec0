"""Plot state for the deterministic line plot.

This module defines the ScaleMode enum and the LinePlotState dataclass: the
caller-owned UI state (visible metrics, axis scale, humanized numbers) that is
snapshotted and passed into every recomputation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from epicurves.line_plot.metric_catalog import ALL_METRIC_KEYS, METRICS
from epicurves.utils.logging import get_logger

logger = get_logger(__name__)


class ScaleMode(Enum):
    """Value-axis scale."""
    LINEAR = "linear"
    LOG = "log"


def default_enabled() -> frozenset[str]:
    """Every catalog metric starts visible."""
    return ALL_METRIC_KEYS


@dataclass(frozen=True)
class LinePlotState:
    """Configuration state for one line plot.

    Instances are immutable; the with_* methods return updated copies so a
    recomputation always sees a consistent snapshot.
    """
    enabled: frozenset[str] = field(default_factory=default_enabled)
    scale: ScaleMode = ScaleMode.LINEAR
    humanized: bool = False  # forwarded untouched to number formatting

    @property
    def log_scale(self) -> bool:
        return self.scale is ScaleMode.LOG

    def with_toggled(self, key: str) -> "LinePlotState":
        """Return a copy with `key` added to or removed from the enabled set."""
        if key in self.enabled:
            enabled = self.enabled - {key}
        else:
            enabled = self.enabled | {key}
        return replace(self, enabled=frozenset(enabled))

    def with_scale(self, scale: ScaleMode) -> "LinePlotState":
        return replace(self, scale=scale)

    def with_humanized(self, humanized: bool) -> "LinePlotState":
        return replace(self, humanized=bool(humanized))

    def to_dict(self) -> dict[str, Any]:
        """Serialize LinePlotState to dictionary.

        Returns:
            JSON-friendly dict; enabled keys are sorted for stable output.
        """
        return {
            "enabled": sorted(self.enabled),
            "scale": self.scale.value,
            "humanized": self.humanized,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LinePlotState":
        """Deserialize LinePlotState from dictionary.

        Unknown metric keys are dropped with a warning. A missing "enabled"
        entry means every metric is visible.

        Args:
            data: Dictionary containing LinePlotState fields.

        Returns:
            LinePlotState instance created from dictionary data.

        Raises:
            ValueError: If "scale" is not a known ScaleMode value.
        """
        scale_val = data.get("scale", ScaleMode.LINEAR.value)
        try:
            scale = ScaleMode(scale_val)
        except ValueError:
            raise ValueError(
                f"Unknown scale {scale_val!r}; expected one of {[s.value for s in ScaleMode]}"
            ) from None

        raw_enabled = data.get("enabled")
        if raw_enabled is None:
            enabled = default_enabled()
        else:
            keys = []
            for key in raw_enabled:
                if key in METRICS:
                    keys.append(key)
                else:
                    logger.warning(f"Ignoring unknown metric key {key!r} in plot state")
            enabled = frozenset(keys)

        return cls(
            enabled=enabled,
            scale=scale,
            humanized=bool(data.get("humanized", False)),
        )
