"""
Direction assignment for a candidate triple.

Curves in a triple sit at fixed cycle positions 0, 1, 2; only the direction
each one is traversed in is chosen, by brute force over all 8 options.
"""

from itertools import product

from wedgematch.geometry import squared_distance


def connection_cost(curves):
    """Sum of squared gaps between the end of each curve and the start of the next."""
    n = len(curves)
    return sum(
        squared_distance(curves[i][-1], curves[(i + 1) % n][0])
        for i in range(n)
    )


def orientations(curves):
    """
    Yield (flags, oriented curves) for every forward/reversed assignment.

    flags[i] is True where curve i is reversed. The all-forward assignment
    comes first.
    """
    for flags in product((False, True), repeat=len(curves)):
        oriented = [curve[::-1] if flip else curve for curve, flip in zip(curves, flags)]
        yield flags, oriented


def orient_curves(curves):
    """
    Orient curves to minimize the total connection cost.

    Returns:
        (oriented curves, reversed flags); the first minimum wins ties
    """
    best_flags, best = min(orientations(curves), key=lambda item: connection_cost(item[1]))
    return best, best_flags
