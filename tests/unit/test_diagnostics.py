"""Unit tests for the analysis diagnostics."""

import numpy as np
import pytest

from fdlsim.core.body import Body
from fdlsim.core.simulation import Simulation
from fdlsim.analysis import (
    all_finite,
    centroid,
    kinetic_energy,
    overlap_statistics,
    pairwise_distances,
)


class TestAllFinite:
    """Tests for all_finite."""

    def test_finite(self, two_bodies):
        assert all_finite(two_bodies)

    def test_nan_position(self, two_bodies):
        two_bodies[1].position[0] = np.nan
        assert not all_finite(two_bodies)

    def test_inf_velocity(self, two_bodies):
        two_bodies[0].velocity[1] = np.inf
        assert not all_finite(two_bodies)

    def test_snapshot_input(self, small_config):
        sim = Simulation.from_config(small_config)
        assert all_finite(sim.snapshot())


class TestKineticEnergy:
    """Tests for kinetic_energy."""

    def test_at_rest(self, two_bodies):
        assert kinetic_energy(two_bodies) == 0.0

    def test_value(self):
        bodies = [Body(position=(0, 0), velocity=(3, 4), radius=2.0)]
        assert kinetic_energy(bodies) == pytest.approx(0.5 * 2.0 * 25.0)

    def test_matches_simulation(self, small_config):
        sim = Simulation.from_config(small_config)
        sim.run(5)
        assert kinetic_energy(sim.snapshot()) == pytest.approx(sim.kinetic_energy())

    def test_empty(self):
        assert kinetic_energy([]) == 0.0


class TestCentroid:
    """Tests for centroid."""

    def test_weighted(self):
        bodies = [Body(position=(0, 0), radius=1.0), Body(position=(4, 0), radius=3.0)]
        assert np.allclose(centroid(bodies), [3.0, 0.0])

    def test_empty(self):
        assert np.all(centroid([]) == 0.0)


class TestOverlapStatistics:
    """Tests for overlap_statistics and pairwise_distances."""

    def test_pairwise_distances(self, two_bodies):
        d = pairwise_distances(two_bodies)
        assert d.shape == (2, 2)
        assert d[0, 1] == pytest.approx(100.0)
        assert d[0, 0] == 0.0

    def test_no_overlap(self, two_bodies):
        stats = overlap_statistics(two_bodies)
        assert stats.n_overlapping == 0
        assert stats.max_penetration == 0.0
        assert stats.min_gap == pytest.approx(80.0)

    def test_overlap_measured(self):
        bodies = [Body(position=(0, 0)), Body(position=(15, 0)), Body(position=(500, 0))]
        stats = overlap_statistics(bodies)
        assert stats.n_overlapping == 1
        assert stats.max_penetration == pytest.approx(5.0)
        assert stats.min_gap == pytest.approx(-5.0)

    def test_small_sets(self):
        assert overlap_statistics([]).n_overlapping == 0
        assert overlap_statistics([Body(position=(0, 0))]).min_gap == float("inf")
        assert pairwise_distances([Body(position=(0, 0))]).shape == (1, 1)
