"""
Flat spatial aggregator: one level of Barnes-Hut style approximation.

Given a reference region (center, size), each body decides how to see
"everything else":
- Far (size / distance < θ): a single representative body, the first
  element of the set
- Near: one synthetic body at the radius-weighted centroid of all other
  bodies, with radius equal to the region size

This does NOT recurse. The recursive version lives in quadtree.py.
"""

from __future__ import annotations
from typing import Sequence

import numpy as np

from fdlsim.core.body import Body
from fdlsim.core.forces import G, compute_force


THETA = 0.5  # Opening angle threshold


def center_of_mass(
    bodies: Sequence[Body],
    exclude: Body | None = None,
) -> tuple[np.ndarray, float]:
    """
    Radius-weighted centroid of a body set.

    Args:
        bodies: Bodies to aggregate
        exclude: Body left out of the sum (usually the one receiving force)

    Returns:
        (centroid, total_mass). The centroid is the zero vector when the
        total mass is zero.
    """
    weighted = np.zeros(2)
    total_mass = 0.0
    for other in bodies:
        if other is exclude:
            continue
        weighted += other.mass * other.position
        total_mass += other.mass

    if total_mass == 0.0:
        return np.zeros(2), 0.0
    return weighted / total_mass, total_mass


def apply_flat_aggregate(
    body: Body,
    bodies: Sequence[Body],
    center: np.ndarray,
    size: float,
    g: float = G,
    theta: float = THETA,
    min_distance: float = 0.0,
) -> None:
    """
    Add the aggregate contribution of the rest of the set to body.force.

    Args:
        body: Body receiving the force
        bodies: Full body set (may contain body itself)
        center: Reference point of the region, shape (2,)
        size: Region size; also the mass of the synthetic centroid body
        g: Coupling constant
        theta: Opening angle threshold
        min_distance: Distance clamp passed to the force law (0 disables it)
    """
    if not bodies:
        return

    offset = np.asarray(center, dtype=np.float64) - body.position
    distance = float(np.hypot(offset[0], offset[1]))

    if distance > 0.0 and size / distance < theta:
        representative = bodies[0]
        if representative is not body:
            body.force += compute_force(body, representative, g, min_distance)
        return

    centroid, total_mass = center_of_mass(bodies, exclude=body)
    if total_mass == 0.0 or size <= 0.0:
        return

    synthetic = Body(position=centroid, radius=size)
    body.force += compute_force(body, synthetic, g, min_distance)
