"""Pytest fixtures for wedge matcher tests."""

import os
import tempfile

import numpy as np
import pytest


SQRT3 = np.sqrt(3.0)


def _side(p, q, inward, bulge, along=0.3):
    """Four point curve from p to q whose control points bulge inward."""
    d = q - p
    c1 = p + along * d + bulge * inward
    c2 = q - along * d + bulge * inward
    return [p.tolist(), c1.tolist(), c2.tolist(), q.tolist()]


def _wedge(scale=1.0, offset=(0.0, 0.0), prefix="w"):
    """
    Three sides of an equilateral triangle with concave sides.

    Side length is 10 * scale. Sides run v0 -> v1 -> v2 -> v0 and are keyed
    f"{prefix}_a", f"{prefix}_b", f"{prefix}_c".
    """
    origin = np.array(offset, dtype=float)
    vertices = [
        origin + scale * np.array([0.0, 0.0]),
        origin + scale * np.array([10.0, 0.0]),
        origin + scale * np.array([5.0, 5.0 * SQRT3]),
    ]
    centroid = sum(vertices) / 3.0

    sides = {}
    for name, i in zip("abc", range(3)):
        p, q = vertices[i], vertices[(i + 1) % 3]
        mid = (p + q) / 2.0
        inward = (centroid - mid) / np.linalg.norm(centroid - mid)
        sides[f"{prefix}_{name}"] = _side(p, q, inward, bulge=scale)
    return sides


def _arch(apex):
    """Small arch whose end tangents cross exactly at apex."""
    apex = np.array(apex, dtype=float)
    offsets = np.array([[-0.3, -0.3], [-0.1, -0.1], [0.1, -0.1], [0.3, -0.3]])
    return (apex + offsets).tolist()


def wedge_spread(scale=1.0):
    """Squared distance between reference points of a wedge built by _wedge."""
    inradius = 5.0 / SQRT3
    apex_offset = 5.0 / 3.0
    return 3.0 * (scale * (inradius - apex_offset)) ** 2


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def make_wedge():
    """Factory for wedge outlines as path maps."""
    return _wedge


@pytest.fixture
def make_arch():
    """Factory for small arch curves with a known reference point."""
    return _arch


@pytest.fixture
def spread_of():
    """Expected reference spread of a wedge by scale."""
    return wedge_spread


@pytest.fixture
def single_wedge():
    """One wedge outline."""
    return _wedge(prefix="w")


@pytest.fixture
def rescan_scene():
    """
    Curve map where only the rescan pass can find the second wedge.

    big_* is a clean wedge. small_* is a smaller wedge whose bottom reference
    point has a distractor arch just outside it, so the bottom side does not
    list its siblings as nearest neighbours. far is isolated.
    """
    curves = {}
    curves.update(_wedge(scale=1.0, offset=(100.0, 0.0), prefix="big"))
    curves.update(_wedge(scale=0.9, offset=(0.0, 0.0), prefix="small"))

    # Reference point of small_a is (4.5, 1.5); the wedge centre lies above it
    curves["distractor"] = _arch((4.5, 0.5))
    curves["far"] = _arch((300.0, 300.0))
    return curves


@pytest.fixture
def progressive_scene():
    """
    Two wedges where the larger one only becomes mutual-nearest in pass 2.

    The reference point of side "large_c" sits 3 units from that of
    "small_b", closer than its own partners (about 4.23 apart), so the large
    triple is contended until the small wedge has been consumed.
    """
    curves = _wedge(scale=1.0, prefix="small")
    curves.update(_wedge(scale=2.0, offset=(1.1698, -3.4969), prefix="large"))
    return curves


@pytest.fixture
def radial_strokes():
    """Three strokes 120 degrees apart, the first repeating its start point."""
    first = np.array([[0.0, 0.0], [0.0, 0.0], [1.0, 0.05], [2.0, 0.0]])
    curves = {}
    for name, angle in zip("abc", (0.0, 2 * np.pi / 3, 4 * np.pi / 3)):
        rotation = np.array([
            [np.cos(angle), -np.sin(angle)],
            [np.sin(angle), np.cos(angle)],
        ])
        curves[f"radial_{name}"] = (first @ rotation.T).tolist()
    return curves


@pytest.fixture
def default_config():
    """Create default matcher configuration."""
    from wedgematch.config import MatcherConfig
    return MatcherConfig()


@pytest.fixture
def paths_file(temp_dir, single_wedge):
    """JSON path map with one wedge and two lines."""
    import json

    paths = dict(single_wedge)
    paths["line_1"] = [[0.0, -20.0], [10.0, -20.0]]
    paths["line_2"] = [[0.0, -30.0], [4.0, -30.01], [10.0, -30.0]]

    path = os.path.join(temp_dir, "paths.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(paths, f)
    return path
