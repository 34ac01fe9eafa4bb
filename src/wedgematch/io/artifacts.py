"""
File helpers for matcher runs.

Reads path maps from JSON and writes results, configs and reports.
"""

import json
import os

from wedgematch.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def save_json(data, path, indent=2):
    """
    Save a dictionary or Pydantic model to JSON.

    Pydantic models are dumped in JSON mode, so sets become lists.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}")


def load_path_map(path):
    """
    Load a path map from a JSON object of id -> [[x, y], ...].

    Raises:
        ValueError: if the top level is not an object
    """
    tracer = get_tracer()

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object of paths in {path}, got {type(data).__name__}")

    tracer.event(f"Loaded {len(data)} paths from {path}")

    return data
