"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


DEFAULT_MAX_DISAPPEARED = 30
DEFAULT_MAX_DISTANCE = 100.0
DEFAULT_COOLDOWN_MS = 1000
# Vertical line through the middle of the frame
DEFAULT_LINE_RATIO = 0.5

# Line definition: either ratio [[x1,y1],[x2,y2]] or single float for a vertical line
LineDefinition = Union[float, List[List[float]]]


@dataclass
class TrackingConfig:
    """Centroid tracker configuration."""
    max_disappeared: int = DEFAULT_MAX_DISAPPEARED
    max_distance: float = DEFAULT_MAX_DISTANCE

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TrackingConfig":
        return cls(
            max_disappeared=int(d.get("max_disappeared", DEFAULT_MAX_DISAPPEARED)),
            max_distance=float(d.get("max_distance", DEFAULT_MAX_DISTANCE)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_disappeared": self.max_disappeared,
            "max_distance": self.max_distance,
        }


@dataclass
class CountingConfig:
    """Line crossing configuration."""
    line: LineDefinition = DEFAULT_LINE_RATIO
    cooldown_ms: int = DEFAULT_COOLDOWN_MS

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CountingConfig":
        line = d.get("line")
        return cls(
            line=DEFAULT_LINE_RATIO if line is None else line,
            cooldown_ms=int(d.get("cooldown_ms", DEFAULT_COOLDOWN_MS)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "cooldown_ms": self.cooldown_ms,
        }


@dataclass
class Config:
    """
    Complete engine configuration.

    This is a typed representation of the YAML config structure.
    """
    tracking: TrackingConfig = field(default_factory=TrackingConfig)
    counting: CountingConfig = field(default_factory=CountingConfig)
    log_path: str = "logs/engine.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            tracking=TrackingConfig.from_dict(d.get("tracking") or {}),
            counting=CountingConfig.from_dict(d.get("counting") or {}),
            log_path=d.get("log_path", "logs/engine.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary."""
        return {
            "tracking": self.tracking.to_dict(),
            "counting": self.counting.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
