"""
Geometry kernel for the wedge matcher.

All distances are squared Euclidean distances; nothing in the matcher needs
the square root. Points are numpy float arrays, paths are (n, 2) arrays.
"""

import numpy as np


def as_points(points):
    """Convert a point sequence to a float (n, d) array."""
    if len(points) == 0:
        return np.zeros((0, 2))
    return np.asarray(points, dtype=float).reshape(len(points), -1)


def squared_distance(p, q):
    """Sum of squared per-coordinate differences."""
    diff = np.asarray(p, dtype=float) - np.asarray(q, dtype=float)
    return float(np.dot(diff, diff))


def pairwise_distances(points):
    """
    Squared distances between every pair of points.

    Returns an (n, n) matrix with a zero diagonal.
    """
    pts = as_points(points)
    diff = pts[:, None, :] - pts[None, :, :]
    return np.einsum("ijk,ijk->ij", diff, diff)


def average(points):
    """
    Coordinate-wise mean of a point sequence.

    Returns None for an empty sequence; callers decide what an undefined
    centroid means for them.
    """
    if len(points) < 1:
        return None
    return as_points(points).mean(axis=0)


def path_length(points):
    """Sum of squared distances between consecutive points."""
    pts = as_points(points)
    if len(pts) < 2:
        return 0.0
    steps = np.diff(pts, axis=0)
    return float(np.einsum("ij,ij->", steps, steps))


def unit(v):
    """Unit vector in the direction of v. A zero vector stays zero."""
    v = np.asarray(v, dtype=float)
    norm = np.linalg.norm(v)
    if norm == 0:
        return np.zeros_like(v)
    return v / norm


def cross(a, b):
    """z-component of the cross product of two 2-D vectors."""
    return a[0] * b[1] - a[1] * b[0]


def intersection(p1, p2, p3, p4, tolerance=1e-6):
    """
    Intersection of the line through p1, p2 with the line through p3, p4.

    Falls back to the average of the four points when the lines are
    (near-)parallel, or when the intersection lies farther from that average
    than the path length of the chain p1-p2-p3-p4.
    """
    pts = as_points([p1, p2, p3, p4])
    avg = pts.mean(axis=0)

    d1 = pts[0] - pts[1]
    d2 = pts[2] - pts[3]
    det = cross(d2, d1)
    if abs(det) <= tolerance:
        return avg

    offset = pts[2] - pts[0]
    point = pts[2] - d2 * (cross(offset, d1) / det)

    if squared_distance(point, avg) < path_length(pts):
        return point
    return avg
