"""
Acceptance test for oriented triples.

Two signatures of a wedge outline are checked: adjacent strokes meet at a
proper angle, and the six stroke ends pair up into three distinct corners
as seen from the middle of the outline.
"""

from itertools import combinations

import numpy as np

from wedgematch.geometry import average, squared_distance, unit


def end_slopes(curve):
    """Unit directions leaving the curve at its start and at its end."""
    p0, p1, p2, p3 = curve[0], curve[1], curve[-2], curve[-1]
    return unit(np.subtract(p0, p1)), unit(np.subtract(p3, p2))


def junction_cosines(curves):
    """
    Cosine at each junction of the cycle.

    Compares the outgoing slope at the end of curve i with the slope leaving
    curve i+1 backwards from its start.
    """
    slopes = [end_slopes(curve) for curve in curves]
    n = len(slopes)
    return [float(np.dot(slopes[i][1], slopes[(i + 1) % n][0])) for i in range(n)]


def curve_ends(curves):
    """Start and end point of every curve, in cycle order."""
    ends = []
    for curve in curves:
        ends.append(np.asarray(curve[0], dtype=float))
        ends.append(np.asarray(curve[-1], dtype=float))
    return ends


def similar_end_pairs(curves, radius=0.2):
    """
    Number of end pairs that point the same way from the ends' centroid.

    Each end is replaced by the unit vector from it towards the centroid of
    all ends; pairs closer than radius (squared) count as similar.
    """
    ends = curve_ends(curves)
    center = average(ends)
    directions = [unit(center - end) for end in ends]
    return sum(
        1 for a, b in combinations(directions, 2)
        if squared_distance(a, b) < radius
    )


def is_valid_wedge(curves, radius=0.2):
    """
    Whether three oriented curves outline a wedge.

    At least one junction cosine must lie strictly between 0 and 1, and
    exactly three end pairs must be similar.
    """
    cosines = junction_cosines(curves)
    if not any(0 < c < 1 for c in cosines):
        return False
    return similar_end_pairs(curves, radius) == 3
