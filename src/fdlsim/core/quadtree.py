"""
Recursive Barnes-Hut quad-tree.

Generalizes the flat aggregator: instead of one global decision per
body, every tree node carries its own aggregate mass (sum of radii) and
radius-weighted center of mass, and the opening-angle test is applied
per node:

    width / distance < θ  →  treat the whole node as one body
    otherwise             →  recurse into the four children

Leaves hold a small bucket of bodies whose forces are summed exactly.
Bodies sharing a position end up in the same bucket once MAX_DEPTH is
reached, which keeps subdivision finite.
"""

from __future__ import annotations
from typing import Sequence

import numpy as np

from fdlsim.core.body import Body
from fdlsim.core.forces import G, compute_force
from fdlsim.core.aggregator import THETA


MAX_DEPTH = 32


class QuadTreeNode:
    """
    One square cell of the tree.

    A node is either a leaf (bodies in `bodies`, no children) or an
    internal node (four children: NW, NE, SW, SE).
    """

    def __init__(self, x_min: float, x_max: float, y_min: float, y_max: float, depth: int = 0):
        self.x_min = x_min
        self.x_max = x_max
        self.y_min = y_min
        self.y_max = y_max
        self.depth = depth
        self.bodies: list[Body] = []
        self.children: list[QuadTreeNode] = []
        self.mass = 0.0
        self.com = np.zeros(2)

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def contains(self, point: np.ndarray) -> bool:
        """Whether a point lies inside this cell (bounds inclusive)."""
        x, y = point
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    def insert(self, body: Body) -> None:
        """Insert a body, subdividing a leaf that already holds one."""
        # Running mass-weighted center of mass
        new_mass = self.mass + body.mass
        self.com = (self.com * self.mass + body.position * body.mass) / new_mass
        self.mass = new_mass

        if self.is_leaf:
            if not self.bodies or self.depth >= MAX_DEPTH:
                self.bodies.append(body)
                return
            self._subdivide()
            existing, self.bodies = self.bodies, []
            for other in existing:
                self._child_for(other).insert(other)

        self._child_for(body).insert(body)

    def _subdivide(self):
        mx = (self.x_min + self.x_max) / 2
        my = (self.y_min + self.y_max) / 2
        d = self.depth + 1
        self.children = [
            QuadTreeNode(self.x_min, mx, self.y_min, my, d),  # NW
            QuadTreeNode(mx, self.x_max, self.y_min, my, d),  # NE
            QuadTreeNode(self.x_min, mx, my, self.y_max, d),  # SW
            QuadTreeNode(mx, self.x_max, my, self.y_max, d),  # SE
        ]

    def _child_for(self, body: Body) -> "QuadTreeNode":
        mx = (self.x_min + self.x_max) / 2
        my = (self.y_min + self.y_max) / 2
        idx = 0
        if body.position[0] > mx:
            idx += 1
        if body.position[1] > my:
            idx += 2
        return self.children[idx]

    def force_on(
        self, body: Body, g: float, theta: float, min_distance: float = 0.0
    ) -> np.ndarray:
        """Force exerted on body by everything stored below this node."""
        if self.mass == 0.0:
            return np.zeros(2)

        if self.is_leaf:
            total = np.zeros(2)
            for other in self.bodies:
                if other is not body:
                    total += compute_force(body, other, g, min_distance)
            return total

        offset = self.com - body.position
        distance = float(np.hypot(offset[0], offset[1]))

        # A node containing the body is always opened, so the body never
        # attracts itself through an aggregate
        if (
            distance > 0.0
            and not self.contains(body.position)
            and self.width / distance < theta
        ):
            return compute_force(
                body, Body(position=self.com, radius=self.mass), g, min_distance
            )

        total = np.zeros(2)
        for child in self.children:
            total += child.force_on(body, g, theta, min_distance)
        return total


class QuadTree:
    """Barnes-Hut tree over a fixed snapshot of body positions."""

    def __init__(self, root: QuadTreeNode | None):
        self.root = root

    @classmethod
    def build(cls, bodies: Sequence[Body]) -> "QuadTree":
        """
        Build a square tree enclosing every body.

        Returns a tree with no root for an empty body set.
        """
        if not bodies:
            return cls(None)

        positions = np.array([b.position for b in bodies])
        lo = positions.min(axis=0)
        hi = positions.max(axis=0)
        cx, cy = (lo + hi) / 2
        half = max(hi[0] - lo[0], hi[1] - lo[1]) / 2 + 1e-5

        root = QuadTreeNode(cx - half, cx + half, cy - half, cy + half)
        for body in bodies:
            root.insert(body)
        return cls(root)

    @property
    def total_mass(self) -> float:
        return 0.0 if self.root is None else self.root.mass

    def force_on(
        self,
        body: Body,
        g: float = G,
        theta: float = THETA,
        min_distance: float = 0.0,
    ) -> np.ndarray:
        """Approximate force on body from every other body in the tree."""
        if self.root is None:
            return np.zeros(2)
        return self.root.force_on(body, g, theta, min_distance)


def apply_tree_forces(
    bodies: Sequence[Body],
    g: float = G,
    theta: float = THETA,
    min_distance: float = 0.0,
) -> QuadTree:
    """
    Build a tree over the current positions and add the approximate
    force into every body's accumulator.

    Forces are computed for all bodies before any accumulator is read
    again, so the result does not depend on body order.

    Returns:
        The tree that was used (handy for inspection)
    """
    tree = QuadTree.build(bodies)
    forces = [tree.force_on(body, g, theta, min_distance) for body in bodies]
    for body, force in zip(bodies, forces):
        body.force += force
    return tree
