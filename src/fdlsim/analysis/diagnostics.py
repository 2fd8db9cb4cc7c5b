"""
Diagnostics computed from a body set or a Simulation snapshot.

All functions accept either a sequence of Body objects or the dict
returned by Simulation.snapshot().
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Union

import numpy as np
from scipy.spatial.distance import pdist, squareform

from fdlsim.core.body import total_kinetic_energy

if TYPE_CHECKING:
    from fdlsim.core.body import Body

BodiesOrSnapshot = Union[Sequence["Body"], dict]


def _arrays(source: BodiesOrSnapshot) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return (positions, velocities, radii) arrays."""
    if isinstance(source, dict):
        return source["positions"], source["velocities"], source["radii"]

    n = len(source)
    positions = np.array([b.position for b in source], dtype=np.float64).reshape(n, 2)
    velocities = np.array([b.velocity for b in source], dtype=np.float64).reshape(n, 2)
    radii = np.array([b.radius for b in source], dtype=np.float64)
    return positions, velocities, radii


@dataclass
class OverlapStats:
    """Residual overlap between disks."""

    n_overlapping: int  # Number of unordered pairs still intersecting
    max_penetration: float  # Largest (r_i + r_j - d_ij), 0 if none
    min_gap: float  # Smallest (d_ij - r_i - r_j); negative means overlap


def all_finite(source: BodiesOrSnapshot) -> bool:
    """True when every position and velocity coordinate is finite."""
    positions, velocities, _ = _arrays(source)
    return bool(np.all(np.isfinite(positions)) and np.all(np.isfinite(velocities)))


def kinetic_energy(source: BodiesOrSnapshot) -> float:
    """Total ½·m·v² with the radius as mass."""
    _, velocities, radii = _arrays(source)
    return total_kinetic_energy(radii, velocities)


def centroid(source: BodiesOrSnapshot) -> np.ndarray:
    """Radius-weighted center of the whole set (zero vector if empty)."""
    positions, _, radii = _arrays(source)
    total = radii.sum()
    if total == 0:
        return np.zeros(2)
    return (positions * radii[:, None]).sum(axis=0) / total


def pairwise_distances(source: BodiesOrSnapshot) -> np.ndarray:
    """Square matrix of center-to-center distances."""
    positions, _, _ = _arrays(source)
    if len(positions) < 2:
        return np.zeros((len(positions), len(positions)))
    return squareform(pdist(positions))


def overlap_statistics(source: BodiesOrSnapshot) -> OverlapStats:
    """
    Measure how much overlap survives resolution.

    A single resolution pass leaves some overlap in crowded clusters;
    this quantifies it.
    """
    positions, _, radii = _arrays(source)
    n = len(radii)
    if n < 2:
        return OverlapStats(n_overlapping=0, max_penetration=0.0, min_gap=float("inf"))

    distances = pdist(positions)
    i, j = np.triu_indices(n, k=1)
    gaps = distances - (radii[i] + radii[j])

    overlapping = gaps < 0
    max_penetration = float(-gaps[overlapping].min()) if overlapping.any() else 0.0
    return OverlapStats(
        n_overlapping=int(overlapping.sum()),
        max_penetration=max_penetration,
        min_gap=float(gaps.min()),
    )
