"""
Reference points for reduced curves.

A curve's two end tangents, extended to full lines, cross near the corner
the stroke bends around. That crossing stands in for the curve when
measuring how close curves are to each other.
"""

import numpy as np

from wedgematch.geometry import intersection


def reference_point(curve, tolerance=1e-6):
    """Crossing of the p0-p1 and p2-p3 tangent lines of a four point curve."""
    p0, p1, p2, p3 = curve
    return intersection(p0, p1, p2, p3, tolerance=tolerance)


def reference_points(curves, tolerance=1e-6):
    """Reference point of every curve, stacked into an (n, 2) array."""
    if len(curves) == 0:
        return np.zeros((0, 2))
    return np.vstack([reference_point(curve, tolerance) for curve in curves])
