"""Unit tests for the flat spatial aggregator."""

import numpy as np
import pytest

from fdlsim.core.body import Body
from fdlsim.core.aggregator import THETA, apply_flat_aggregate, center_of_mass


class TestCenterOfMass:
    """Tests for center_of_mass."""

    def test_radius_weighted(self):
        bodies = [
            Body(position=(0, 0), radius=1.0),
            Body(position=(4, 0), radius=3.0),
        ]
        com, mass = center_of_mass(bodies)
        assert np.allclose(com, [3.0, 0.0])
        assert mass == 4.0

    def test_exclude(self):
        a = Body(position=(0, 0), radius=1.0)
        b = Body(position=(10, 10), radius=2.0)
        com, mass = center_of_mass([a, b], exclude=a)
        assert np.allclose(com, [10.0, 10.0])
        assert mass == 2.0

    def test_empty(self):
        com, mass = center_of_mass([])
        assert np.all(com == 0.0)
        assert mass == 0.0


class TestFarCase:
    """size / distance < θ: the first body stands in for the rest."""

    def test_default_theta(self):
        assert THETA == 0.5

    def test_uses_first_body(self):
        body = Body(position=(0, 0), radius=10.0)
        first = Body(position=(10, 0), radius=10.0)
        ignored = Body(position=(0, 50), radius=10.0)

        # 100 / 1000 = 0.1 < 0.5
        apply_flat_aggregate(body, [first, body, ignored], center=(1000, 0), size=100)

        # 0.1 * 10 * 10 / 10² = 0.1 toward first
        assert np.allclose(body.force, [0.1, 0.0])

    def test_first_body_is_self(self):
        body = Body(position=(0, 0))
        other = Body(position=(10, 0))
        apply_flat_aggregate(body, [body, other], center=(1000, 0), size=100)
        assert np.all(body.force == 0.0)


class TestNearCase:
    """Otherwise: one synthetic body at the centroid of the others."""

    def test_synthetic_centroid_body(self):
        body = Body(position=(0, 0), radius=10.0)
        others = [
            Body(position=(10, 0), radius=10.0),
            Body(position=(30, 0), radius=10.0),
        ]

        # Centroid of others is (20, 0); synthetic radius = size = 50
        apply_flat_aggregate(body, [body] + others, center=(0, 0), size=50)

        expected = 0.1 * 10.0 * 50.0 / 20.0**2
        assert np.allclose(body.force, [expected, 0.0])

    def test_boundary_is_near(self):
        # size / distance == θ exactly is not "far"
        body = Body(position=(0, 0), radius=10.0)
        first = Body(position=(0, 100), radius=10.0)
        second = Body(position=(0, -100), radius=10.0)
        apply_flat_aggregate(body, [first, body, second], center=(200, 0), size=100)

        # Near case: centroid of the two others is the body itself
        assert np.all(body.force == 0.0)

    def test_adds_to_existing_force(self):
        body = Body(position=(0, 0), radius=10.0)
        other = Body(position=(10, 0), radius=10.0)
        body.force[:] = (0.0, 2.0)
        apply_flat_aggregate(body, [body, other], center=(0, 0), size=10)
        assert body.force[1] == 2.0
        assert body.force[0] > 0.0


class TestDistanceClamp:
    """min_distance is passed through to the force law."""

    def test_near_case(self):
        body = Body(position=(0, 0), radius=1.0)
        other = Body(position=(0.5, 0), radius=1.0)
        apply_flat_aggregate(body, [body, other], center=(0, 0), size=10, min_distance=2.0)
        assert np.allclose(body.force, [0.1 * 1 * 10 / 4, 0.0])

    def test_far_case(self):
        body = Body(position=(0, 0), radius=1.0)
        first = Body(position=(0.5, 0), radius=1.0)
        apply_flat_aggregate(body, [first, body], center=(1000, 0), size=1, min_distance=2.0)
        assert np.allclose(body.force, [0.025, 0.0])


class TestDegenerateSets:
    """The aggregator must never fault on tiny sets."""

    @pytest.mark.parametrize("center", [(0, 0), (5000, 0)])
    def test_empty_set(self, center):
        body = Body(position=(0, 0))
        apply_flat_aggregate(body, [], center=center, size=100)
        assert np.all(body.force == 0.0)

    @pytest.mark.parametrize("center", [(0, 0), (5000, 0)])
    def test_single_element_set(self, center):
        body = Body(position=(0, 0))
        apply_flat_aggregate(body, [body], center=center, size=100)
        assert np.all(np.isfinite(body.force))
        assert np.all(body.force == 0.0)

    def test_body_at_centroid(self):
        body = Body(position=(5, 5))
        twin = Body(position=(5, 5))
        apply_flat_aggregate(body, [body, twin], center=(5, 5), size=100)
        assert np.all(np.isfinite(body.force))
