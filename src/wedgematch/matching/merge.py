"""
Welding an oriented triple into one closed contour.
"""

import numpy as np

from wedgematch.geometry import average, squared_distance


def merge_ends(curves, references):
    """
    Snap every junction of the cycle to a single shared point.

    For junction i the end of curve i and the start of curve i+1 compete;
    the one closer to the centroid of the reference points wins and replaces
    the other. Junctions are processed in order 0, 1, 2 on the curves as
    updated so far. The input curves are not modified.

    Returns:
        list of (n, 2) arrays forming a closed loop
    """
    merged = [np.array(curve, dtype=float) for curve in curves]
    midpoint = average(references)
    n = len(merged)

    for i in range(n):
        j = (i + 1) % n
        end = merged[i][-1]
        start = merged[j][0]
        if squared_distance(midpoint, start) < squared_distance(midpoint, end):
            merged[i][-1] = start
        else:
            merged[j][0] = end

    return merged
