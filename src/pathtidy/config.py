"""
Configuration management for pathtidy.

Loads YAML configuration with defaults for every simplification stage.
"""

import math
import os
from dataclasses import asdict, dataclass, field
from typing import Optional

import yaml


@dataclass
class SimplifyConfig:
    """Thresholds for U-turn and zig-zag collapsing."""
    angle_tolerance_deg: float = 5.0
    max_width: float = 5.0
    collapse_uturns: bool = True
    collapse_zigzags: bool = True

    @property
    def angle_eps(self):
        """Angle tolerance in radians, as the geometry functions expect it."""
        return math.radians(self.angle_tolerance_deg)


@dataclass
class DedupConfig:
    """Configuration for duplicate path elimination."""
    enabled: bool = True
    epsilon: float = 0.01


@dataclass
class OutputConfig:
    """Configuration for emitted path data and SVG."""
    precision: Optional[int] = None  # None keeps full float precision
    stroke_width: float = 1.0
    stroke_color: str = "black"
    margin: float = 2.0


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: Optional[str] = None
    json_output: bool = False


@dataclass
class PipelineConfig:
    """Complete pipeline configuration."""
    simplify: SimplifyConfig = field(default_factory=SimplifyConfig)
    dedup: DedupConfig = field(default_factory=DedupConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)
    strict: bool = False


SECTIONS = ("simplify", "dedup", "output", "tracing")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = PipelineConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass; unknown keys are ignored."""
    for section_name in SECTIONS:
        section_data = yaml_data.get(section_name)
        if not isinstance(section_data, dict):
            continue
        section = getattr(config, section_name)
        for key, value in section_data.items():
            if hasattr(section, key):
                setattr(section, key, value)

    if "strict" in yaml_data:
        config.strict = bool(yaml_data["strict"])

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    config = PipelineConfig()

    yaml_data = {name: asdict(getattr(config, name)) for name in SECTIONS}
    yaml_data["strict"] = config.strict

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
