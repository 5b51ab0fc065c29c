# simulation.py
"""
Handles the core simulation logic.

This module defines the Simulation class, which advances the molecule
gas by one update cycle: it moves every molecule on the fixed-rate move
timer, reflects molecules that crossed a wall, resolves pairwise
collisions and feeds the wall hits to the statistics aggregator.
"""
import logging
import numpy as np
from typing import Dict, Any, Optional
from numba import jit

from particle import ParticleSystem
from boundary import Container, clamp_positions
from stats import StatsAggregator, StatsReport
from timer import RepeatingTimer
from constants import (
    DEFAULT_COLLISION_DISTANCE, DEFAULT_MOVE_INTERVAL, DEFAULT_STATS_INTERVAL
)

# --- Data Contracts ---
#
# integrate_positions(positions, velocities, elapsed, half_width, half_height) -> (int, int):
#   - Inputs:
#     - positions, velocities: float64 arrays of shape (N, 2), mutated in place.
#     - elapsed: float, seconds accumulated by the move timer.
#     - half_width, half_height: float, current half-extents of the container.
#   - Outputs: (number of wall hits, number of molecules with non-finite
#     state that were reset).
#   - Invariants: A molecule exactly on a wall is not a hit. Overshooting
#     both axes counts as two hits.
#
# resolve_collisions(positions, velocities, collision_distance_sq) -> int:
#   - Inputs:
#     - velocities: float64 array of shape (N, 2), mutated in place.
#     - collision_distance_sq: float, squared collision distance.
#   - Outputs: Number of pairs that were resolved.
#   - Invariants: Each unordered pair is visited exactly once. Positions
#     are never changed.
#
# class Simulation:
#   - __init__(self, particles: ParticleSystem, container: Container, params: Dict[str, Any]):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "collision_distance": float
#         - "move_interval": float
#         - "stats_interval": float
#     - Raises ValueError on an invalid collision distance or interval.
#
#   - step(self, dt: float) -> Optional[StatsReport]:
#     - Side Effects: Integrates positions (when the move timer fires),
#       resolves collisions, updates statistics, clamps positions into
#       the container.
#     - Invariants: Every position lies inside the half-extents when the
#       step returns.
#     - Outputs: The StatsReport emitted during this step, if any.
#
#   - handle_resize(self, width: float, height: float) -> bool:
#     - Side Effects: Resizes the container and clamps all positions
#       into it. Velocities and hit counts are untouched.

@jit(nopython=True)
def integrate_positions(positions, velocities, elapsed, half_width, half_height):
    """
    Numba-jitted position update with wall reflection.

    Molecules whose state became NaN or infinite are put back at the
    origin at rest, so that the reflection tests below always compare
    real numbers.
    """
    hits = 0
    repaired = 0
    particle_count = positions.shape[0]
    for i in range(particle_count):
        positions[i, 0] += velocities[i, 0] * elapsed
        positions[i, 1] += velocities[i, 1] * elapsed

        if not (np.isfinite(positions[i, 0]) and np.isfinite(positions[i, 1])
                and np.isfinite(velocities[i, 0]) and np.isfinite(velocities[i, 1])):
            positions[i, 0] = 0.0
            positions[i, 1] = 0.0
            velocities[i, 0] = 0.0
            velocities[i, 1] = 0.0
            repaired += 1
            continue

        if abs(positions[i, 1]) > half_height:
            velocities[i, 1] = -velocities[i, 1]
            hits += 1
        if abs(positions[i, 0]) > half_width:
            velocities[i, 0] = -velocities[i, 0]
            hits += 1
    return hits, repaired


@jit(nopython=True)
def resolve_collisions(positions, velocities, collision_distance_sq):
    """
    Numba-jitted exhaustive pair scan.

    Two molecules closer than the collision distance exchange their
    velocities, each one negated. Nothing pushes them apart, so a pair
    can be resolved again on the next call.
    """
    resolved = 0
    particle_count = positions.shape[0]
    for i in range(particle_count):
        for j in range(i + 1, particle_count):
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            if dx * dx + dy * dy < collision_distance_sq:
                v1x = velocities[i, 0]
                v1y = velocities[i, 1]
                v2x = velocities[j, 0]
                v2y = velocities[j, 1]
                velocities[j, 0] = -v1x
                velocities[j, 1] = -v1y
                velocities[i, 0] = -v2x
                velocities[i, 1] = -v2y
                resolved += 1
    return resolved


class Simulation:
    """
    Owns the per-cycle update of the molecule gas.
    """
    def __init__(self, particles: ParticleSystem, container: Container, params: Dict[str, Any]):
        """
        Initializes the simulation environment.

        Args:
            particles (ParticleSystem): The molecules to simulate.
            container (Container): The box the molecules bounce in.
            params (Dict[str, Any]): Simulation parameters from config.
        """
        self.particles = particles
        self.container = container
        self.collision_distance = float(params.get('collision_distance', DEFAULT_COLLISION_DISTANCE))
        if not np.isfinite(self.collision_distance) or self.collision_distance < 0:
            msg = (
                f"Configuration error: collision_distance must be a non-negative number, "
                f"got {self.collision_distance}."
            )
            logging.critical(msg)
            raise ValueError(msg)
        # Compare squared distances to avoid a sqrt per pair.
        self.collision_distance_sq = self.collision_distance ** 2

        self.move_timer = RepeatingTimer(params.get('move_interval', DEFAULT_MOVE_INTERVAL))
        self.stats = StatsAggregator(params.get('stats_interval', DEFAULT_STATS_INTERVAL))

        self.step_count = 0
        self.sim_time = 0.0
        self.last_collision_count = 0

        logging.info("Simulation logic initialized and configuration validated.")
        logging.info(
            f"Collision distance {self.collision_distance:.2f}, "
            f"move interval {self.move_timer.interval}s, "
            f"stats interval {self.stats.timer.interval}s."
        )

    @property
    def hit_count(self) -> int:
        return self.stats.hit_count

    def integrate(self, elapsed: float) -> int:
        """
        Moves every molecule by `elapsed` seconds and reflects it off the walls.

        Returns the number of wall hits; they are also added to the
        statistics hit counter.
        """
        half_width, half_height = self.container.half_extents
        hits, repaired = integrate_positions(
            self.particles.positions, self.particles.velocities,
            float(elapsed), half_width, half_height
        )
        if repaired:
            logging.warning(f"Reset {repaired} molecules with non-finite position or velocity.")
        self.stats.record_hits(hits)
        return hits

    def resolve_collisions(self) -> int:
        """Swaps the velocities of every pair closer than the collision distance."""
        self.last_collision_count = resolve_collisions(
            self.particles.positions, self.particles.velocities,
            self.collision_distance_sq
        )
        return self.last_collision_count

    def step(self, dt: float) -> Optional[StatsReport]:
        """
        Executes one update cycle of `dt` seconds.
        """
        # 1. Move on the fixed-rate timer, using the time the timer accumulated
        if self.move_timer.accumulate(dt):
            self.integrate(self.move_timer.last_period)

        # 2. Collisions run every cycle, independent of the move timer
        self.resolve_collisions()

        # 3. Statistics with the current container size
        report = self.stats.update(dt, self.container.width, self.container.height)

        # 4. Pull overshooting molecules back onto the walls; velocities keep
        # the reflection from step 1
        clamp_positions(self.particles.positions, *self.container.half_extents)

        self.step_count += 1
        self.sim_time += dt
        return report

    def handle_resize(self, width: float, height: float) -> bool:
        """
        Applies a window resize and pulls every molecule back inside.
        """
        if not self.container.resize(width, height):
            return False
        half_width, half_height = self.container.half_extents
        moved = clamp_positions(self.particles.positions, half_width, half_height)
        logging.info(
            f"Container resized to {self.container.width:g}x{self.container.height:g}; "
            f"clamped {moved} molecules."
        )
        return True

