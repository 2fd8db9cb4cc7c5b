"""
Body: a mass-bearing disk that the engine moves around.

A body stores ONLY engine primitives:
- position, velocity (mutated every frame)
- force accumulator (summed during a frame, cleared after integration)
- radius (collision extent AND the "mass" in the force law)

The color is carried along for whoever draws the bodies; the engine
never reads it.
"""

from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from fdlsim.core.graph import random_color


@dataclass(eq=False)
class Body:
    """
    One simulated point mass.

    Vectors are float64 arrays of shape (2,) and are mutated in place.
    The radius is fixed at creation. Bodies compare by identity.
    """

    position: np.ndarray
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    force: np.ndarray = field(default_factory=lambda: np.zeros(2))
    radius: float = 10.0
    color: tuple[int, int, int] = (255, 255, 255)

    def __post_init__(self):
        self.position = np.array(self.position, dtype=np.float64).reshape(2)
        self.velocity = np.array(self.velocity, dtype=np.float64).reshape(2)
        self.force = np.array(self.force, dtype=np.float64).reshape(2)
        self.radius = float(self.radius)
        if not self.radius > 0:
            raise ValueError(f"radius must be positive, got {self.radius}")

    @property
    def mass(self) -> float:
        """Mass term of the force law (the radius)."""
        return self.radius

    @property
    def speed(self) -> float:
        """Current speed."""
        return float(np.hypot(self.velocity[0], self.velocity[1]))

    def distance_to(self, other: "Body") -> float:
        """Euclidean distance between the two centers."""
        dx, dy = other.position - self.position
        return float(np.hypot(dx, dy))


@dataclass
class BodySetConfig:
    """Configuration for the initial body set."""

    n_bodies: int = 50  # Number of bodies, fixed for the whole run
    width: float = 800.0  # World extent for random placement
    height: float = 600.0
    radius: float = 10.0  # Shared radius of every body

    def __post_init__(self):
        if self.n_bodies < 0:
            raise ValueError(f"n_bodies must be non-negative, got {self.n_bodies}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"world bounds must be positive, got {self.width}x{self.height}"
            )
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")


def create_bodies(
    config: BodySetConfig,
    rng: np.random.Generator | None = None,
) -> list[Body]:
    """
    Place bodies uniformly at random inside the world bounds.

    Every body starts at rest with an empty force accumulator.

    Args:
        config: Count, bounds and radius
        rng: Random source; a fresh unseeded generator when None

    Returns:
        The body set, in creation order
    """
    if rng is None:
        rng = np.random.default_rng()

    bodies = []
    for _ in range(config.n_bodies):
        position = rng.uniform((0.0, 0.0), (config.width, config.height))
        bodies.append(
            Body(position=position, radius=config.radius, color=random_color(rng))
        )
    return bodies


def total_kinetic_energy(radii: np.ndarray, velocities: np.ndarray) -> float:
    """Total ½·m·v² over parallel arrays, with the radius as mass."""
    if len(radii) == 0:
        return 0.0
    return float(0.5 * np.sum(radii * np.sum(velocities**2, axis=1)))
