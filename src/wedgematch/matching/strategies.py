"""
The two wedge-finding strategies.

Strategy 1 repeatedly accepts mutual-nearest-neighbour triples until a pass
finds nothing new; the widest reference spread it accepted becomes the
distance threshold for strategy 2, which rescans the leftover curves once.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from wedgematch.geometry import squared_distance
from wedgematch.matching.merge import merge_ends
from wedgematch.matching.orient import orient_curves
from wedgematch.matching.triples import distance_triples, mutual_nearest_triples
from wedgematch.matching.wedge_check import is_valid_wedge
from wedgematch.models import MatchStrategy, Wedge, generate_wedge_id
from wedgematch.tracer import get_tracer, trace


@dataclass(frozen=True)
class PreparedCurve:
    """A reduced curve with its reference point."""
    path_id: Any
    control: np.ndarray
    reference: np.ndarray


def reference_spread(references):
    """Largest squared distance between cyclically consecutive reference points."""
    n = len(references)
    return max(squared_distance(references[i], references[(i + 1) % n]) for i in range(n))


def build_wedge(members, radius, strategy):
    """
    Orient, check and merge one candidate triple.

    Returns:
        (Wedge, reference spread), or None if the triple is not a wedge
    """
    oriented, _ = orient_curves([m.control for m in members])
    if not is_valid_wedge(oriented, radius):
        return None

    references = [m.reference for m in members]
    merged = merge_ends(oriented, references)
    path_ids = [m.path_id for m in members]

    wedge = Wedge(
        wedge_id=generate_wedge_id(path_ids),
        path_ids=path_ids,
        curves=[curve.tolist() for curve in merged],
        strategy=strategy,
    )
    return wedge, reference_spread(references)


def _accept_triples(prepared, triples, radius, strategy):
    """
    Run candidate index triples through build_wedge.

    Candidates touching an identifier already accepted here are skipped.
    """
    tracer = get_tracer()

    wedges = []
    consumed = set()
    spread = 0.0

    for triple in triples:
        members = [prepared[i] for i in triple]
        if any(m.path_id in consumed for m in members):
            continue

        built = build_wedge(members, radius, strategy)
        if built is None:
            tracer.event("Rejected triple", level="DEBUG", ids=[m.path_id for m in members])
            continue

        wedge, wedge_spread = built
        wedges.append(wedge)
        consumed.update(wedge.path_ids)
        spread = max(spread, wedge_spread)

    return wedges, consumed, spread


@trace(label="first_strategy")
def first_strategy(prepared, config):
    """
    Mutual-nearest-neighbour matching, repeated to a fixpoint.

    Args:
        prepared: dict of path id -> PreparedCurve
        config: MatcherConfig

    Returns:
        (wedges, consumed ids, max_dist, remaining prepared dict, passes run)
    """
    tracer = get_tracer()
    radius = config.matching.end_cluster_radius

    remaining = dict(prepared)
    wedges = []
    consumed = set()
    max_dist = 0.0
    passes = 0

    while passes < config.matching.max_passes:
        passes += 1
        members = list(remaining.values())
        references = np.array([m.reference for m in members]).reshape(-1, 2)
        triples = mutual_nearest_triples(references)

        found, used, spread = _accept_triples(
            members, triples, radius, MatchStrategy.MUTUAL_NEAREST
        )
        tracer.event(
            f"Pass {passes}: {len(triples)} candidates, {len(found)} wedges",
            remaining=len(remaining),
        )
        if not found:
            break

        wedges.extend(found)
        consumed |= used
        max_dist = max(max_dist, spread)
        remaining = {k: v for k, v in remaining.items() if k not in used}
    else:
        tracer.event(f"Stopped after {passes} passes without reaching a fixpoint", level="WARN")

    return wedges, consumed, max_dist, remaining, passes


@trace(label="second_strategy")
def second_strategy(prepared, max_dist, config):
    """
    Distance-threshold rescan of curves strategy 1 left over.

    Returns:
        (wedges, consumed ids)
    """
    tracer = get_tracer()

    members = list(prepared.values())
    references = np.array([m.reference for m in members]).reshape(-1, 2)
    triples = distance_triples(references, max_dist)

    wedges, consumed, _ = _accept_triples(
        members, triples, config.matching.end_cluster_radius, MatchStrategy.DISTANCE_RESCAN
    )
    tracer.event(f"Rescan: {len(triples)} candidates, {len(wedges)} wedges", max_dist=max_dist)

    return wedges, consumed
