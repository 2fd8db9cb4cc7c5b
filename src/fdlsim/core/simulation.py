"""
Simulation: the frame loop that ties the engine together.

One frame is three strictly sequential phases over the whole body set:

    1. force accumulation   (pairwise sums and/or aggregate approximation)
    2. integration          (semi-implicit Euler, fixed dt)
    3. overlap resolution   (one pass over every unordered pair)

Phase 1 depends on force_mode:
- "reference":  exact pairwise sums, THEN the flat aggregate term for
                every body. Both paths run, so distant mass is counted
                twice. This reproduces the layout dynamics the engine was
                tuned with.
- "exact":      exact pairwise sums only.
- "barnes_hut": recursive quad-tree approximation only.

The aggregate terms need a reference region (center, size), normally the
viewport the bodies are shown in. When the caller does not supply one,
the world rectangle is used: its center, and its width as the size.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Literal

import numpy as np

from fdlsim.core.body import Body, BodySetConfig, create_bodies, total_kinetic_energy
from fdlsim.core.forces import accumulate_pairwise
from fdlsim.core.aggregator import apply_flat_aggregate
from fdlsim.core.quadtree import apply_tree_forces
from fdlsim.core.integrator import integrate_all
from fdlsim.core.overlap import resolve_all_overlaps
from fdlsim.core.graph import Connection, build_complete_graph, edge_segments

logger = logging.getLogger(__name__)

FORCE_MODES = ("reference", "exact", "barnes_hut")


@dataclass
class SimulationConfig:
    """Configuration for a layout simulation."""

    # Initial body set
    n_bodies: int = 50
    width: float = 800.0  # World bounds for random placement
    height: float = 600.0
    radius: float = 10.0  # Radius (and mass) of every body

    # Physics
    g: float = 0.1  # Coupling constant
    theta: float = 0.5  # Opening angle threshold
    dt: float = 0.1  # Fixed time step
    force_mode: Literal["reference", "exact", "barnes_hut"] = "reference"
    min_distance: float = 0.0  # Distance clamp in the force law, every mode (0 = off)

    seed: int | None = None  # None draws fresh OS entropy

    def __post_init__(self):
        if self.force_mode not in FORCE_MODES:
            raise ValueError(
                f"Unknown force_mode: {self.force_mode!r} (expected one of {FORCE_MODES})"
            )
        if self.dt < 0:
            raise ValueError(f"dt must be non-negative, got {self.dt}")
        if self.theta <= 0:
            raise ValueError(f"theta must be positive, got {self.theta}")
        if self.min_distance < 0:
            raise ValueError(f"min_distance must be non-negative, got {self.min_distance}")

    def body_set_config(self) -> BodySetConfig:
        """The part of this config that describes initial placement."""
        return BodySetConfig(
            n_bodies=self.n_bodies,
            width=self.width,
            height=self.height,
            radius=self.radius,
        )


@dataclass
class Simulation:
    """
    Owns the body set and advances it one frame at a time.

    The body list is mutated in place; nothing else holds state across
    frames. Construct with from_config() for random placement, or pass
    a hand-built body list directly.
    """

    bodies: list[Body]
    config: SimulationConfig = field(default_factory=SimulationConfig)
    rng: np.random.Generator | None = field(default=None)

    # Simulation state
    frame: int = field(default=0, init=False)
    overlaps_resolved: int = field(default=0, init=False)

    _connections: list[Connection] | None = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if self.rng is None:
            self.rng = np.random.default_rng(self.config.seed)

    @classmethod
    def from_config(cls, config: SimulationConfig | None = None) -> "Simulation":
        """Create a simulation with randomly placed bodies."""
        if config is None:
            config = SimulationConfig()
        rng = np.random.default_rng(config.seed)
        bodies = create_bodies(config.body_set_config(), rng)
        logger.debug(
            "Placed %d bodies in %gx%g (seed=%s)",
            len(bodies), config.width, config.height, config.seed,
        )
        return cls(bodies=bodies, config=config, rng=rng)

    @property
    def default_center(self) -> np.ndarray:
        return np.array([self.config.width / 2, self.config.height / 2])

    @property
    def default_size(self) -> float:
        return self.config.width

    def step(self, center: np.ndarray | None = None, size: float | None = None) -> int:
        """
        Advance the simulation by one frame.

        Args:
            center: Reference point for the aggregate approximation
            size: Reference region size for the aggregate approximation

        Returns:
            Number of overlapping pairs corrected this frame
        """
        if center is None:
            center = self.default_center
        if size is None:
            size = self.default_size

        self._accumulate_forces(np.asarray(center, dtype=np.float64), float(size))
        integrate_all(self.bodies, self.config.dt)
        n_resolved = resolve_all_overlaps(self.bodies, self.rng)

        self.frame += 1
        self.overlaps_resolved += n_resolved
        return n_resolved

    def _accumulate_forces(self, center: np.ndarray, size: float):
        cfg = self.config
        mode = cfg.force_mode

        if mode in ("reference", "exact"):
            for body in self.bodies:
                accumulate_pairwise(body, self.bodies, cfg.g, cfg.min_distance)

        if mode == "reference":
            for body in self.bodies:
                apply_flat_aggregate(
                    body, self.bodies, center, size, cfg.g, cfg.theta, cfg.min_distance
                )
        elif mode == "barnes_hut":
            apply_tree_forces(self.bodies, cfg.g, cfg.theta, cfg.min_distance)

    def run(
        self,
        n_frames: int,
        center: np.ndarray | None = None,
        size: float | None = None,
    ) -> dict:
        """
        Run the simulation for n frames with a fixed reference region.

        Args:
            n_frames: Number of frames to run
            center, size: Reference region (world rectangle when None)

        Returns:
            Statistics dictionary
        """
        resolved = 0
        for _ in range(n_frames):
            resolved += self.step(center, size)

        speeds = [body.speed for body in self.bodies]
        stats = {
            "n_frames": n_frames,
            "frame": self.frame,
            "overlaps_resolved": resolved,
            "kinetic_energy": self.kinetic_energy(),
            "max_speed": max(speeds, default=0.0),
        }
        logger.debug(
            "Ran %d frames (now at %d): %d overlaps resolved, max speed %.4g",
            n_frames, self.frame, resolved, stats["max_speed"],
        )
        return stats

    def kinetic_energy(self) -> float:
        """Total ½·m·v² with the radius as mass."""
        snap = self.snapshot()
        return total_kinetic_energy(snap["radii"], snap["velocities"])

    def snapshot(self) -> dict[str, np.ndarray]:
        """
        Copy of the per-body state for rendering or analysis.

        Returns:
            Dict with positions (n, 2), velocities (n, 2), radii (n,)
            and colors (n, 3)
        """
        n = len(self.bodies)
        return {
            "positions": np.array([b.position for b in self.bodies]).reshape(n, 2),
            "velocities": np.array([b.velocity for b in self.bodies]).reshape(n, 2),
            "radii": np.array([b.radius for b in self.bodies], dtype=np.float64),
            "colors": np.array([b.color for b in self.bodies], dtype=np.int64).reshape(n, 3),
        }

    @property
    def connections(self) -> list[Connection]:
        """Complete graph over the bodies, built on first access."""
        if self._connections is None:
            # Child stream: edge colors never shift the physics rng
            color_rng = self.rng.spawn(1)[0]
            self._connections = build_complete_graph(len(self.bodies), color_rng)
        return self._connections

    def edge_segments(self) -> np.ndarray:
        """Current endpoint positions of every connection, shape (m, 2, 2)."""
        return edge_segments(self.bodies, self.connections)
