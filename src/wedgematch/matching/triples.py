"""
Candidate triples over reference points.

Two proposal rules: mutual nearest neighbours, used until nothing more is
found, and a distance-threshold rescan over what is left.
"""

from collections import Counter
from itertools import combinations

import numpy as np

from wedgematch.geometry import pairwise_distances


def nearest_sets(references, k=3):
    """
    Indices of the k nearest reference points of every point, itself included.

    Ties are broken by index.
    """
    distances = pairwise_distances(references)
    return [
        frozenset(int(j) for j in np.argsort(row, kind="stable")[:k])
        for row in distances
    ]


def mutual_nearest_triples(references, k=3):
    """
    Nearest sets named by exactly k points.

    With distinct reference points those k points are the set's own members.
    Coincident points can make an outsider name the set too, which vetoes it.

    Returns:
        sorted list of sorted index tuples; members of different triples
        never overlap
    """
    if len(references) < k:
        return []

    counts = Counter(nearest_sets(references, k))

    return sorted(
        tuple(sorted(candidate))
        for candidate, count in counts.items()
        if count == k
    )


def distance_triples(references, max_dist):
    """
    Every 3-combination within the near set of some reference point.

    A point's near set holds all points (itself included) with squared
    distance strictly below max_dist, sorted by index.

    Returns:
        sorted list of unique sorted index tuples
    """
    if len(references) < 3:
        return []

    distances = pairwise_distances(references)
    triples = set()
    for row in distances:
        near = [int(j) for j in np.flatnonzero(row < max_dist)]
        triples.update(combinations(near, 3))

    return sorted(triples)
