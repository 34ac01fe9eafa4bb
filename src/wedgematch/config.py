"""
Configuration management for the wedge matcher.

Loads YAML configuration with defaults for every stage. The defaults
reproduce the thresholds the matcher was tuned with.
"""

import os
from dataclasses import asdict, dataclass, field

import yaml


@dataclass
class ClassifierConfig:
    """Configuration for line/curve classification."""
    threshold: float = 1.0  # second singular value below this -> line


@dataclass
class ReducerConfig:
    """Configuration for the constrained 4-means point reduction."""
    max_iterations: int = 1000


@dataclass
class MatchingConfig:
    """Configuration for triple search, validation and the pass loop."""
    parallel_tolerance: float = 1e-6
    end_cluster_radius: float = 0.2  # squared distance between unit vectors
    max_passes: int = 1000


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class MatcherConfig:
    """Complete matcher configuration."""
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    reducer: ReducerConfig = field(default_factory=ReducerConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


SECTIONS = ("classifier", "reducer", "matching", "tracing")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = MatcherConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section in SECTIONS:
        values = yaml_data.get(section)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    config = MatcherConfig()

    yaml_data = {section: asdict(getattr(config, section)) for section in SECTIONS}
    # file_path is a per-run setting
    yaml_data["tracing"].pop("file_path")

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
