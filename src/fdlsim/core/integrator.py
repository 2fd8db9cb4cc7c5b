"""
Semi-implicit Euler integrator.

Velocity is updated first from the accumulated force, then position
from the NEW velocity. The force accumulator is cleared afterwards so
the next frame starts from zero.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from fdlsim.core.body import Body


def integrate(body: "Body", dt: float) -> None:
    """Advance one body by dt and reset its force accumulator."""
    body.velocity += body.force * dt
    body.position += body.velocity * dt
    body.force.fill(0.0)


def integrate_all(bodies: Sequence["Body"], dt: float) -> None:
    """Advance every body by dt."""
    for body in bodies:
        integrate(body, dt)
