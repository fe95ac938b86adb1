import numpy as np
import pytest

from force_field import ForceField, snapshot_peers
from scene_config import build_scene_config
from vector_math import magnitude, vec


def at_rest_center(shape):
    """A center point equal to the shape's position, so the center term vanishes."""
    return shape.position.copy()


class TestPointerTerm:
    def test_pointer_absent_leaves_only_center_term(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0)
        center = vec(400.0, 300.0)

        force = field.compute_force(shape, [shape], None, center)

        assert np.allclose(force, (center - shape.position) * config['center_pull'])

    def test_pointer_outside_radius_has_no_effect(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0)
        far_pointer = vec(100.0 + config['pointer_radius'] + 1.0, 100.0)

        assert np.allclose(field.pointer_force(shape, far_pointer), [0.0, 0.0])

    def test_repulsion_points_away_with_linear_falloff(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(110.0, 100.0)
        pointer = vec(100.0, 100.0)

        force = field.compute_force(shape, [shape], pointer, at_rest_center(shape))

        # Main term: 1.5 * density 1.0 * (150 - 10) / 150; core term: 0.5 * (30 - 10) / 30
        expected = 1.5 * (140.0 / 150.0) + 0.5 * (20.0 / 30.0)
        assert force[0] == pytest.approx(expected)
        assert force[1] == pytest.approx(0.0)

    def test_density_scales_the_main_term(self, config, make_shape):
        field = ForceField(build_scene_config({'pointer_core_force': 0.0}))
        light = make_shape(110.0, 100.0, density=0.5)
        heavy = make_shape(110.0, 100.0, density=1.0)
        pointer = vec(100.0, 100.0)

        light_force = field.pointer_force(light, pointer)
        heavy_force = field.pointer_force(heavy, pointer)

        assert light_force[0] == pytest.approx(heavy_force[0] * 0.5)

    def test_attract_mode_pulls_but_core_still_repels(self, make_shape):
        field = ForceField(build_scene_config({'pointer_mode': 'attract'}))
        shape = make_shape(110.0, 100.0)
        pointer = vec(100.0, 100.0)

        force = field.pointer_force(shape, pointer)

        expected = -1.5 * (140.0 / 150.0) + 0.5 * (20.0 / 30.0)
        assert force[0] == pytest.approx(expected)

    def test_core_repulsion_dominates_right_next_to_the_pointer(self, make_shape):
        field = ForceField(build_scene_config({'pointer_mode': 'attract', 'pointer_force': 0.0}))
        shape = make_shape(101.0, 100.0)
        force = field.pointer_force(shape, vec(100.0, 100.0))
        assert force[0] > 0.0

    def test_each_term_is_clamped(self, make_shape):
        field = ForceField(build_scene_config({'pointer_force': 100.0}))
        shape = make_shape(110.0, 100.0)

        force = field.pointer_force(shape, vec(100.0, 100.0))

        assert force[0] == pytest.approx(2.0 + 0.5 * (20.0 / 30.0))

    def test_pointer_on_top_of_shape_does_not_divide_by_zero(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0)

        force = field.compute_force(shape, [shape], shape.position.copy(), vec(400.0, 300.0))

        assert np.all(np.isfinite(force))


class TestPeerTerm:
    def test_overlapping_peers_repel(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0, size=20.0)
        other = make_shape(110.0, 100.0, size=20.0)

        force = field.peer_force(shape, [shape, other])

        # min separation = 10 + 10 + 10 = 30; strength = lerp(1.6, 0.08, 10 / 30)
        expected = 1.6 + (0.08 - 1.6) * (10.0 / 30.0)
        assert force[0] == pytest.approx(-expected, rel=1e-6)
        assert force[1] == pytest.approx(0.0, abs=1e-9)

    def test_closer_pairs_repel_harder(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0)
        near = field.peer_force(shape, [make_shape(103.0, 100.0)])
        far = field.peer_force(shape, [make_shape(125.0, 100.0)])
        assert magnitude(near) > magnitude(far) > 0.0

    def test_separated_peers_do_not_interact(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0, size=20.0)
        # Inside the 50px interaction radius but beyond the 30px minimum separation
        other = make_shape(140.0, 100.0, size=20.0)
        assert np.allclose(field.peer_force(shape, [other]), [0.0, 0.0])

    def test_large_shapes_still_limited_by_interaction_radius(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0, size=80.0)
        other = make_shape(160.0, 100.0, size=80.0)
        # 60px apart: within the 90px separation but outside the 50px radius
        assert np.allclose(field.peer_force(shape, [other]), [0.0, 0.0])

    def test_self_and_missing_peers_are_skipped(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0)
        other = make_shape(110.0, 100.0)

        with_gaps = field.peer_force(shape, [None, shape, other, None])
        clean = field.peer_force(shape, [other])

        assert np.allclose(with_gaps, clean)
        assert np.allclose(field.peer_force(shape, [shape, None]), [0.0, 0.0])

    def test_coincident_peers_stay_finite(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0)
        twin = make_shape(100.0, 100.0)
        assert np.all(np.isfinite(field.peer_force(shape, [twin])))

    def test_peer_contributions_sum(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0)
        left = make_shape(90.0, 100.0)
        right = make_shape(110.0, 100.0)
        # Symmetric neighbours cancel out
        assert np.allclose(field.peer_force(shape, [left, right]), [0.0, 0.0], atol=1e-9)

    def test_shared_snapshot_matches_a_direct_scan(self, config, make_shape):
        field = ForceField(config)
        shapes = [make_shape(100.0, 100.0), make_shape(112.0, 104.0), make_shape(95.0, 120.0), None]
        snapshot = snapshot_peers(shapes)

        assert len(snapshot.entities) == 3
        assert snapshot.positions.shape == (3, 2)
        for index, shape in enumerate(snapshot.entities):
            shared = field.peer_force(shape, shapes, snapshot, index)
            direct = field.peer_force(shape, shapes)
            assert np.allclose(shared, direct)
            assert magnitude(shared) > 0.0

    def test_snapshot_row_of_the_shape_itself_is_skipped(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0)
        other = make_shape(110.0, 100.0)
        assert np.allclose(field.peer_force(shape, [shape], snapshot_peers([shape]), 0), [0.0, 0.0])

        snapshot = snapshot_peers([shape, other])
        assert np.allclose(field.peer_force(shape, [], snapshot, 0), field.peer_force(shape, [other]))


class TestCenterTerm:
    def test_pulls_toward_center(self, config, make_shape):
        field = ForceField(config)
        shape = make_shape(100.0, 100.0)
        force = field.center_force(shape, vec(300.0, 100.0))
        assert force[0] == pytest.approx(200.0 * config['center_pull'])
        assert force[1] == pytest.approx(0.0)

    def test_is_clamped(self, make_shape):
        field = ForceField(build_scene_config({'center_pull': 1.0}))
        shape = make_shape(0.0, 0.0)
        force = field.center_force(shape, vec(1000.0, 0.0))
        assert magnitude(force) == pytest.approx(2.0)


def test_rescale_sets_pointer_radius_from_viewport(config):
    field = ForceField(config)
    field.rescale(1000.0, 500.0, 0.2)
    assert field.pointer_radius == pytest.approx(100.0)
