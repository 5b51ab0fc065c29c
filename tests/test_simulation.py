import logging

import numpy as np
import pytest

from boundary import Container
from particle import ParticleSystem
from simulation import Simulation, integrate_positions, resolve_collisions

PARAMS = {
    "collision_distance": 5.0,
    "move_interval": 0.01,
    "stats_interval": 1.0,
}


def make_simulation(positions, velocities, width=800, height=400, **overrides):
    particles = ParticleSystem.from_arrays(positions, velocities)
    params = dict(PARAMS, **overrides)
    return Simulation(particles, Container(width, height), params)


# --- Motion integrator ---

def test_integration_moves_by_velocity_times_elapsed():
    positions = np.array([[0.0, 0.0], [10.0, -10.0]])
    velocities = np.array([[5.0, 2.0], [-1.0, 4.0]])
    hits, repaired = integrate_positions(positions, velocities, 2.0, 400.0, 200.0)
    assert (hits, repaired) == (0, 0)
    np.testing.assert_allclose(positions, [[10.0, 4.0], [8.0, -2.0]])
    np.testing.assert_array_equal(velocities, [[5.0, 2.0], [-1.0, 4.0]])


def test_single_axis_overshoot_is_one_hit():
    positions = np.array([[399.0, 0.0]])
    velocities = np.array([[50.0, 3.0]])
    hits, _ = integrate_positions(positions, velocities, 1.0, 400.0, 200.0)
    assert hits == 1
    np.testing.assert_array_equal(velocities, [[-50.0, 3.0]])


def test_both_axes_overshoot_is_two_hits():
    positions = np.array([[390.0, -190.0]])
    velocities = np.array([[20.0, -20.0]])
    hits, _ = integrate_positions(positions, velocities, 1.0, 400.0, 200.0)
    assert hits == 2
    np.testing.assert_array_equal(velocities, [[-20.0, 20.0]])


def test_touching_the_wall_is_not_a_hit():
    positions = np.array([[390.0, 190.0]])
    velocities = np.array([[10.0, 10.0]])
    hits, _ = integrate_positions(positions, velocities, 1.0, 400.0, 200.0)
    assert hits == 0
    np.testing.assert_array_equal(positions, [[400.0, 200.0]])
    np.testing.assert_array_equal(velocities, [[10.0, 10.0]])


def test_non_finite_state_is_reset():
    positions = np.array([[np.nan, 0.0], [1.0, 1.0]])
    velocities = np.array([[1.0, 1.0], [np.inf, 0.0]])
    hits, repaired = integrate_positions(positions, velocities, 1.0, 400.0, 200.0)
    assert hits == 0
    assert repaired == 2
    np.testing.assert_array_equal(positions, np.zeros((2, 2)))
    np.testing.assert_array_equal(velocities, np.zeros((2, 2)))


def test_wall_bounce_scenario():
    sim = make_simulation([[399.0, 0.0]], [[50.0, 0.0]])

    assert sim.integrate(1.0) == 1
    assert sim.particles.positions[0, 0] == 449.0
    assert sim.particles.velocities[0, 0] == -50.0
    assert sim.hit_count == 1

    assert sim.integrate(1.0) == 0
    assert sim.particles.positions[0, 0] == 399.0
    assert sim.hit_count == 1


def test_integrate_logs_repaired_molecules(caplog):
    sim = make_simulation([[0.0, 0.0]], [[np.nan, 0.0]])
    with caplog.at_level(logging.WARNING):
        sim.integrate(0.01)
    assert "non-finite" in caplog.text


# --- Collision resolver ---

def test_pair_beyond_distance_is_untouched():
    positions = np.array([[0.0, 0.0], [5.0, 0.0], [100.0, 100.0]])
    velocities = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
    expected = velocities.copy()
    assert resolve_collisions(positions, velocities, 25.0) == 0
    np.testing.assert_array_equal(velocities, expected)


def test_close_pair_swaps_negated_velocities():
    positions = np.array([[0.0, 0.0], [3.0, 4.0]])
    velocities = np.array([[1.0, 2.0], [7.0, -3.0]])
    # distance 5.0 is not < 5.0, so use a slightly larger threshold
    assert resolve_collisions(positions, velocities, 5.5 ** 2) == 1
    np.testing.assert_array_equal(velocities, [[-7.0, 3.0], [-1.0, -2.0]])


def test_head_on_collision_scenario():
    sim = make_simulation([[0.0, 0.0], [3.0, 0.0]], [[10.0, 0.0], [-10.0, 0.0]])
    assert sim.resolve_collisions() == 1
    np.testing.assert_array_equal(sim.particles.velocities, [[10.0, 0.0], [-10.0, 0.0]])
    np.testing.assert_array_equal(sim.particles.positions, [[0.0, 0.0], [3.0, 0.0]])


def test_overlapping_pair_is_resolved_again_next_call():
    sim = make_simulation([[0.0, 0.0], [1.0, 0.0]], [[1.0, 0.0], [0.0, 0.0]])
    sim.resolve_collisions()
    np.testing.assert_array_equal(sim.particles.velocities, [[-0.0, -0.0], [-1.0, -0.0]])
    sim.resolve_collisions()
    np.testing.assert_array_equal(sim.particles.velocities, [[1.0, 0.0], [0.0, 0.0]])


def test_every_unordered_pair_visited_once():
    # Three molecules all within range of each other.
    positions = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
    velocities = np.array([[1.0, 0.0], [0.0, 1.0], [2.0, 2.0]])
    assert resolve_collisions(positions, velocities, 25.0) == 3


def test_zero_collision_distance_never_resolves():
    sim = make_simulation([[0.0, 0.0], [0.0, 0.0]], [[1.0, 0.0], [2.0, 0.0]], collision_distance=0.0)
    assert sim.resolve_collisions() == 0


def test_negative_collision_distance_is_rejected():
    with pytest.raises(ValueError):
        make_simulation([[0.0, 0.0]], [[0.0, 0.0]], collision_distance=-1.0)


# --- Step orchestration ---

def test_zero_particles_step_is_noop():
    sim = make_simulation(np.empty((0, 2)), np.empty((0, 2)))
    for _ in range(5):
        sim.step(0.5)
    assert sim.hit_count == 0
    assert sim.step_count == 5


def test_move_is_gated_by_timer_but_collisions_are_not():
    sim = make_simulation([[0.0, 0.0], [2.0, 0.0]], [[100.0, 0.0], [0.0, 0.0]], move_interval=0.1)
    sim.step(0.05)
    # not moved yet, but the close pair was resolved
    np.testing.assert_array_equal(sim.particles.positions, [[0.0, 0.0], [2.0, 0.0]])
    assert sim.last_collision_count == 1
    np.testing.assert_array_equal(sim.particles.velocities, [[-0.0, -0.0], [-100.0, -0.0]])


def test_step_integrates_with_accumulated_time():
    sim = make_simulation([[0.0, 0.0]], [[10.0, 0.0]], move_interval=0.1)
    sim.step(0.06)
    sim.step(0.06)
    assert sim.particles.positions[0, 0] == pytest.approx(1.2)


def test_step_reports_and_resets_hit_counter():
    sim = make_simulation([[399.0, 0.0]], [[50.0, 0.0]])
    report = sim.step(1.0)
    assert report is not None
    assert report.hits == 1
    assert report.metric == 1 * 800.0 * 400.0
    assert sim.hit_count == 0
    # overshoot is pulled back onto the wall, the reflection is kept
    assert sim.particles.positions[0, 0] == 400.0
    assert sim.particles.velocities[0, 0] == -50.0


def test_step_leaves_every_molecule_inside_container():
    sim = make_simulation(
        [[399.0, 0.0], [-395.0, 195.0], [0.0, -199.0], [10.0, 10.0]],
        [[50.0, 0.0], [-30.0, 40.0], [0.0, -500.0], [1.0, 1.0]]
    )
    for _ in range(3):
        sim.step(1.0)
        assert np.all(np.abs(sim.particles.positions[:, 0]) <= 400.0)
        assert np.all(np.abs(sim.particles.positions[:, 1]) <= 200.0)


def test_clamp_after_step_keeps_hits_and_bounces_back():
    sim = make_simulation([[399.0, 0.0]], [[50.0, 0.0]], stats_interval=10.0)
    sim.step(1.0)
    assert sim.hit_count == 1
    sim.step(1.0)
    # moved back inside from the wall, no second hit
    assert sim.particles.positions[0, 0] == 350.0
    assert sim.hit_count == 1


# --- Resize ---

def test_resize_clamps_without_touching_velocities_or_hits():
    sim = make_simulation([[350.0, 150.0], [-10.0, -190.0]], [[5.0, 5.0], [1.0, -1.0]])
    assert sim.handle_resize(600, 300)
    np.testing.assert_array_equal(sim.particles.positions, [[300.0, 150.0], [-10.0, -150.0]])
    np.testing.assert_array_equal(sim.particles.velocities, [[5.0, 5.0], [1.0, -1.0]])
    assert sim.hit_count == 0


def test_degenerate_resize_keeps_positions():
    sim = make_simulation([[350.0, 150.0]], [[5.0, 5.0]])
    assert not sim.handle_resize(0, 0)
    np.testing.assert_array_equal(sim.particles.positions, [[350.0, 150.0]])
    assert (sim.container.width, sim.container.height) == (800.0, 400.0)
