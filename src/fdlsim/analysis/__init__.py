"""
Analysis layer: read-only diagnostics over the body set.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- all_finite: check that no position or velocity has blown up
- kinetic_energy: total ½·m·v² with the radius as mass
- overlap_statistics: residual overlap left after resolution
- centroid: radius-weighted center of the whole set
"""

from fdlsim.analysis.diagnostics import (
    OverlapStats,
    all_finite,
    centroid,
    kinetic_energy,
    overlap_statistics,
    pairwise_distances,
)

__all__ = [
    "OverlapStats",
    "all_finite",
    "centroid",
    "kinetic_energy",
    "overlap_statistics",
    "pairwise_distances",
]
