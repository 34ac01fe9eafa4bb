"""
Line/curve classification of extracted paths.

A path whose points barely spread in a second direction is a line; anything
else is treated as a curve candidate for wedge matching.
"""

import numpy as np

from wedgematch.geometry import as_points, squared_distance
from wedgematch.tracer import get_tracer, trace


def shape_variance(points):
    """
    Second-largest singular value of the mean-centered point matrix.

    Paths with one or two points have no second direction and score 0.0.
    """
    pts = as_points(points)
    if len(pts) <= 2:
        return 0.0

    centered = pts - pts.mean(axis=0)
    singular_values = np.linalg.svd(centered, compute_uv=False)
    if len(singular_values) < 2:
        return 0.0
    return float(singular_values[1])


@trace(label="classify_paths")
def classify_paths(paths, threshold):
    """
    Split a path map into curves and lines.

    Args:
        paths: dict of path id -> [[x, y], ...]
        threshold: paths whose shape variance is below this are lines

    Returns:
        (curve_map, line_map), both preserving the input order
    """
    tracer = get_tracer()

    curve_map = {}
    line_map = {}

    for path_id, points in paths.items():
        if shape_variance(points) < threshold:
            line_map[path_id] = points
        else:
            curve_map[path_id] = points

    tracer.event(f"Classified {len(paths)} paths: {len(curve_map)} curves, {len(line_map)} lines")

    return curve_map, line_map


def furthest_from_first(points):
    """Point of the sequence farthest from its first point (first one on ties)."""
    pts = as_points(points)
    distances = [squared_distance(pts[0], p) for p in pts]
    return pts[int(np.argmax(distances))]


def collapse_line(points):
    """Reduce a line path to the segment from its first to its farthest point."""
    pts = as_points(points)
    return [pts[0].tolist(), furthest_from_first(pts).tolist()]


def collapse_lines(line_map):
    """Collapse every path of a line map; the input map is left untouched."""
    return {path_id: collapse_line(points) for path_id, points in line_map.items() if len(points) > 0}
