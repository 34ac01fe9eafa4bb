"""
Point reduction for oversampled curves.

A curve arriving with more than four points is collapsed to a four point
control polygon with a 4-means pass whose outer centroids stay pinned to the
curve's start and to the point farthest from it.
"""

from itertools import permutations

import numpy as np

from wedgematch.geometry import as_points, path_length, pairwise_distances
from wedgematch.tracer import get_tracer, trace

NUM_CONTROL_POINTS = 4


def initial_centroids(points):
    """First three points plus the point farthest from the first."""
    pts = as_points(points)
    distances = pairwise_distances(pts)[0]
    farthest = pts[int(np.argmax(distances))]
    return np.vstack([pts[:3], farthest[None, :]])


def assign_labels(points, centroids):
    """Index of the nearest centroid for every point (lowest index on ties)."""
    diff = points[:, None, :] - centroids[None, :, :]
    distances = np.einsum("ijk,ijk->ij", diff, diff)
    return np.argmin(distances, axis=1)


def pinned_kmeans(points, max_iterations=1000):
    """
    4-means with the first and last centroid fixed.

    Only the two middle centroids move. A middle centroid that loses all its
    points keeps its position. Stops when the labels no longer change or
    after max_iterations updates; either way the current centroids are
    returned.

    Returns:
        (centroids, iterations, converged)
    """
    pts = as_points(points)
    centroids = initial_centroids(pts)
    labels = np.full(len(pts), -1)

    for iteration in range(max_iterations + 1):
        new_labels = assign_labels(pts, centroids)
        if np.array_equal(new_labels, labels):
            return centroids, iteration, True
        if iteration == max_iterations:
            break

        labels = new_labels
        centroids = centroids.copy()
        for k in (1, 2):
            members = pts[labels == k]
            if len(members):
                centroids[k] = members.mean(axis=0)

    return centroids, max_iterations, False


def order_points(points):
    """Permutation of the points with the shortest open path."""
    pts = as_points(points)
    best = min(permutations(range(len(pts))), key=lambda order: path_length(pts[list(order)]))
    return pts[list(best)]


def reduce_curve(points, max_iterations=1000):
    """
    Reduce a curve to its four point control polygon.

    Curves with four or fewer points are returned as they are.
    """
    if len(points) <= NUM_CONTROL_POINTS:
        return points

    centroids, iterations, converged = pinned_kmeans(points, max_iterations)
    if not converged:
        get_tracer().event(
            f"Point reduction stopped after {iterations} iterations without converging",
            level="WARN",
        )
    return order_points(centroids)


@trace(label="reduce_curves")
def reduce_curves(curve_map, max_iterations=1000):
    """Reduce every curve of a curve map into a new dict of (n, 2) arrays."""
    tracer = get_tracer()

    reduced = {
        path_id: as_points(reduce_curve(points, max_iterations))
        for path_id, points in curve_map.items()
    }

    oversampled = sum(1 for points in curve_map.values() if len(points) > NUM_CONTROL_POINTS)
    tracer.event(f"Reduced {oversampled} of {len(curve_map)} curves to control polygons")

    return reduced
