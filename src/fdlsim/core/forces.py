"""
Force model: the inverse-square coupling between two bodies.

The force on a from b points from a toward b and has magnitude

    F = G · r_a · r_b / d²

where the radii play the role of masses. The law is symmetric, so
force(a, b) == -force(b, a) for any two distinct positions.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    from fdlsim.core.body import Body


G = 0.1  # Coupling constant


def compute_force(
    a: "Body",
    b: "Body",
    g: float = G,
    min_distance: float = 0.0,
) -> np.ndarray:
    """
    Force exerted on body a by body b.

    Args:
        a: Body receiving the force
        b: Body exerting the force
        g: Coupling constant
        min_distance: Lower clamp on the distance used in the magnitude
            term (0 disables the clamp)

    Returns:
        Force vector, shape (2,). Zero when the centers coincide.
    """
    direction = b.position - a.position
    distance = float(np.hypot(direction[0], direction[1]))

    # Coincident centers: no defined direction, the pair is skipped
    if distance == 0.0:
        return np.zeros(2)

    effective = max(distance, min_distance)
    magnitude = g * a.mass * b.mass / effective**2
    return direction / distance * magnitude


def accumulate_pairwise(
    body: "Body",
    bodies: Sequence["Body"],
    g: float = G,
    min_distance: float = 0.0,
) -> None:
    """
    Add the exact force from every other body into body.force.

    Each body sums over all others, so across a full pass every
    unordered pair is evaluated twice, once from each side.
    """
    for other in bodies:
        if other is not body:
            body.force += compute_force(body, other, g, min_distance)
