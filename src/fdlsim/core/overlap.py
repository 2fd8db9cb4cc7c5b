"""
Overlap resolution between disks.

Two bodies overlap when the distance between their centers is smaller
than the sum of their radii. Resolution moves each of them by half the
penetration depth along the line joining the centers, so an isolated
pair ends up exactly touching.

One pass visits every unordered pair once, in index order. Corrections
are applied immediately and are NOT solved simultaneously, so crowded
regions can keep some residual overlap after a pass.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    from fdlsim.core.body import Body


# Separation axis used for coincident centers when no rng is supplied
FALLBACK_DIRECTION = np.array([1.0, 0.0])


def bodies_overlap(a: "Body", b: "Body") -> bool:
    """Whether the two disks intersect (touching does not count)."""
    return a.distance_to(b) < a.radius + b.radius


def _random_unit_vector(rng: np.random.Generator) -> np.ndarray:
    angle = rng.uniform(0.0, 2.0 * np.pi)
    return np.array([np.cos(angle), np.sin(angle)])


def resolve_overlap(
    a: "Body",
    b: "Body",
    rng: np.random.Generator | None = None,
) -> None:
    """
    Push a and b apart so that their disks just touch.

    Args:
        a, b: Overlapping bodies; positions are mutated in place
        rng: Source of a random separation direction when the centers
            coincide; FALLBACK_DIRECTION is used when None
    """
    direction = a.position - b.position
    distance = float(np.hypot(direction[0], direction[1]))
    amount = (a.radius + b.radius - distance) / 2.0

    if distance == 0.0:
        unit = FALLBACK_DIRECTION.copy() if rng is None else _random_unit_vector(rng)
    else:
        unit = direction / distance

    a.position += unit * amount
    b.position -= unit * amount


def resolve_all_overlaps(
    bodies: Sequence["Body"],
    rng: np.random.Generator | None = None,
) -> int:
    """
    Run one resolution pass over every unordered pair.

    Returns:
        Number of pairs that were overlapping when visited
    """
    n_resolved = 0
    for i in range(len(bodies)):
        for j in range(i + 1, len(bodies)):
            a, b = bodies[i], bodies[j]
            if bodies_overlap(a, b):
                resolve_overlap(a, b, rng)
                n_resolved += 1
    return n_resolved
