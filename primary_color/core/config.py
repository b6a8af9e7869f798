"""
Engine Configuration - Tunable constants of the quantization pipeline

Defaults reproduce the reference behaviour (30^3 grid, 0.6 / 0.4 sampling
thresholds, 0.2 distinctness, 0.5 avoid distance). Configurations can be
stored as YAML:

    resolution: 30
    bright_threshold: 0.6
    dark_threshold: 0.4
    distinct_threshold: 0.2
    avoid_distance: 0.5
"""

import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Pipeline constants shared by every stage"""
    resolution: int = 30
    bright_threshold: float = 0.6
    dark_threshold: float = 0.4
    distinct_threshold: float = 0.2
    avoid_distance: float = 0.5

    def __post_init__(self):
        if isinstance(self.resolution, bool) or not isinstance(self.resolution, int):
            raise ValueError(f"Resolution must be an integer, got {self.resolution!r}")
        if self.resolution < 2:
            raise ValueError(f"Resolution must be at least 2, got {self.resolution}")
        for name in ('bright_threshold', 'dark_threshold'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within 0-1, got {value}")
        for name in ('distinct_threshold', 'avoid_distance'):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")

    @property
    def bucket_count(self) -> int:
        return self.resolution ** 3

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EngineConfig':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in fields(cls)}
        unknown = set(data) - valid_fields
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", sorted(unknown))
        return cls(**{k: v for k, v in data.items() if k in valid_fields})

    @classmethod
    def from_yaml(cls, path: str | Path) -> 'EngineConfig':
        """Load a configuration file"""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        return cls.from_dict(data)

    def save(self, path: str | Path) -> Path:
        """Write the configuration as YAML"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        return path


DEFAULT_CONFIG = EngineConfig()
