"""
Core engine primitives.

This layer knows NOTHING about drawing, windows or colors on screen.
It only knows:
- Bodies with position, velocity, force accumulator and radius
- The pairwise force law and its aggregate approximations
- Time integration
- Overlap resolution between disks

Three force modes are available on the Simulation:
- "reference": exact pairwise sums PLUS the flat aggregate contribution
- "exact": exact pairwise sums only, O(n²)
- "barnes_hut": recursive quad-tree approximation, O(n log n)
"""

from fdlsim.core.body import Body, BodySetConfig, create_bodies, total_kinetic_energy
from fdlsim.core.forces import G, compute_force, accumulate_pairwise
from fdlsim.core.aggregator import THETA, apply_flat_aggregate, center_of_mass
from fdlsim.core.quadtree import QuadTree, QuadTreeNode, apply_tree_forces
from fdlsim.core.integrator import integrate, integrate_all
from fdlsim.core.overlap import bodies_overlap, resolve_overlap, resolve_all_overlaps
from fdlsim.core.graph import Connection, build_complete_graph, edge_segments, random_color
from fdlsim.core.simulation import Simulation, SimulationConfig

__all__ = [
    "Body",
    "BodySetConfig",
    "create_bodies",
    "total_kinetic_energy",
    "G",
    "compute_force",
    "accumulate_pairwise",
    "THETA",
    "apply_flat_aggregate",
    "center_of_mass",
    "QuadTree",
    "QuadTreeNode",
    "apply_tree_forces",
    "integrate",
    "integrate_all",
    "bodies_overlap",
    "resolve_overlap",
    "resolve_all_overlaps",
    "Connection",
    "build_complete_graph",
    "edge_segments",
    "random_color",
    "Simulation",
    "SimulationConfig",
]
