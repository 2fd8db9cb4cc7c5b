"""
Connections: the complete graph drawn between bodies.

This is presentation data derived once at startup. The physics never
reads it; every body interacts with every other body regardless of
which connections exist.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    from fdlsim.core.body import Body


@dataclass(frozen=True)
class Connection:
    """An unordered pair of body indices with a display color."""

    source: int  # Always the smaller index
    target: int
    color: tuple[int, int, int] = (255, 255, 255)


def random_color(rng: np.random.Generator) -> tuple[int, int, int]:
    """Random RGB color with 8-bit channels."""
    r, g, b = rng.integers(0, 256, size=3)
    return int(r), int(g), int(b)


def build_complete_graph(
    n_bodies: int,
    rng: np.random.Generator | None = None,
) -> list[Connection]:
    """
    Connect every unordered pair of bodies once.

    Args:
        n_bodies: Size of the body set
        rng: Random source for edge colors; a fresh generator when None

    Returns:
        n·(n-1)/2 connections ordered by (source, target)
    """
    if rng is None:
        rng = np.random.default_rng()

    return [
        Connection(source=i, target=j, color=random_color(rng))
        for i in range(n_bodies)
        for j in range(i + 1, n_bodies)
    ]


def edge_segments(
    bodies: Sequence["Body"],
    connections: Sequence[Connection],
) -> np.ndarray:
    """
    Endpoint positions of each connection, for line drawing.

    Returns:
        Array of shape (n_connections, 2, 2): [edge, endpoint, xy]
    """
    segments = np.empty((len(connections), 2, 2), dtype=np.float64)
    for k, conn in enumerate(connections):
        segments[k, 0] = bodies[conn.source].position
        segments[k, 1] = bodies[conn.target].position
    return segments
