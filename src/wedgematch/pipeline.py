"""
Main orchestrator for the wedge matcher.

find_wedges runs the two matching strategies over a curve map;
run_pipeline adds input validation, line/curve classification and result
checks around it.
"""

import numpy as np

from wedgematch.classify import classify_paths, collapse_lines
from wedgematch.config import MatcherConfig
from wedgematch.curves.reduce import NUM_CONTROL_POINTS, reduce_curves
from wedgematch.curves.reference import reference_points
from wedgematch.matching.strategies import PreparedCurve, first_strategy, second_strategy
from wedgematch.models import MatchResult, PipelineResult
from wedgematch.tracer import get_tracer, trace
from wedgematch.validate.rules import run_validation


def validate_path_map(paths):
    """
    Check a path map for structural problems.

    Returns a list of error messages; empty if the map is usable.
    """
    errors = []

    if not isinstance(paths, dict):
        return [f"Path map must be a dict, got {type(paths).__name__}"]

    for path_id, points in paths.items():
        try:
            arr = np.asarray(points, dtype=float)
        except (TypeError, ValueError):
            errors.append(f"Path {path_id!r} has non-numeric coordinates")
            continue
        if arr.size == 0:
            errors.append(f"Path {path_id!r} has no points")
        elif arr.ndim != 2 or arr.shape[1] != 2:
            errors.append(f"Path {path_id!r} points must be [x, y] pairs")
        elif not np.all(np.isfinite(arr)):
            errors.append(f"Path {path_id!r} has non-finite coordinates")

    return errors


@trace(label="prepare_curves")
def prepare_curves(curve_map, config):
    """
    Reduce every curve and attach its reference point.

    Curves left with fewer than four points have no pair of end tangents
    and are skipped; they can never be consumed.
    """
    tracer = get_tracer()

    reduced = reduce_curves(curve_map, config.reducer.max_iterations)

    usable = {
        path_id: control
        for path_id, control in reduced.items()
        if len(control) >= NUM_CONTROL_POINTS
    }
    references = reference_points(list(usable.values()), config.matching.parallel_tolerance)

    prepared = {
        path_id: PreparedCurve(path_id=path_id, control=control, reference=reference)
        for (path_id, control), reference in zip(usable.items(), references)
    }

    skipped = len(reduced) - len(prepared)
    if skipped:
        tracer.event(f"Skipped {skipped} curves with fewer than {NUM_CONTROL_POINTS} points", level="WARN")

    return prepared


@trace(label="find_wedges")
def find_wedges(curve_map, config=None):
    """
    Find wedges in a curve map.

    Args:
        curve_map: dict of path id -> [[x, y], ...]; not modified
        config: MatcherConfig (optional)

    Returns:
        MatchResult with strategy-1 wedges followed by strategy-2 wedges
    """
    tracer = get_tracer()

    if config is None:
        config = MatcherConfig()

    prepared = prepare_curves(curve_map, config)

    with tracer.span("strategy1", module="pipeline"):
        wedges, consumed, max_dist, remaining, passes = first_strategy(prepared, config)

    with tracer.span("strategy2", module="pipeline"):
        rescan_wedges, rescan_consumed = second_strategy(remaining, max_dist, config)

    result = MatchResult(
        wedges=wedges + rescan_wedges,
        consumed=consumed | rescan_consumed,
        max_dist=max_dist,
        passes=passes,
    )

    tracer.event(f"Found {len(result.wedges)} wedges consuming {len(result.consumed)} of {len(curve_map)} curves")

    return result


@trace(label="run_pipeline")
def run_pipeline(paths, config=None):
    """
    Classify a path map and match wedges among its curves.

    Raises:
        ValueError: if the path map is malformed
    """
    tracer = get_tracer()

    if config is None:
        config = MatcherConfig()

    errors = validate_path_map(paths)
    if errors:
        for error in errors:
            tracer.event(error, level="ERROR")
        raise ValueError(f"Input validation failed: {errors}")

    curve_map, line_map = classify_paths(paths, config.classifier.threshold)
    match = find_wedges(curve_map, config)

    result = PipelineResult(
        curve_ids=list(curve_map),
        line_ids=list(line_map),
        lines=collapse_lines(line_map),
        match=match,
        unmatched=[path_id for path_id in curve_map if path_id not in match.consumed],
    )
    result.validation = run_validation(result, curve_map)

    return result
