# particle.py
"""
Manages the state of all molecules in the simulation.

This module defines the ParticleSystem class, which is responsible for
initializing and storing molecule data (position, velocity, mass) in
NumPy arrays. The array index is the identity of a molecule.
"""
import logging
import numpy as np
from typing import Dict, Any

from constants import DEFAULT_MAX_INITIAL_VELOCITY, DEFAULT_PARTICLE_MASS

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, params: Dict[str, Any], width: float, height: float):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "seed": int or None
#         - "particle_count": int
#         - "max_initial_velocity": float (optional)
#         - "particle_mass": float (optional)
#       - width: float, width of the container.
#       - height: float, height of the container.
#     - Outputs: None
#     - Side Effects: Initializes internal NumPy arrays for particle state.
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64,
#         every row inside [-width/2, width/2) x [-height/2, height/2).
#       - self.velocities is a NumPy array of shape (N, 2) of dtype float64,
#         every component inside [0, max_initial_velocity).
#       - self.masses is a NumPy array of shape (N,) of dtype float64.
#       - N never changes after construction.

class ParticleSystem:
    """
    A container for all molecules, managing their state via NumPy arrays.
    """
    def __init__(self, params: Dict[str, Any], width: float, height: float):
        """
        Initializes the particle system.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
            width (float): The width of the container.
            height (float): The height of the container.
        """
        self.particle_count = int(params['particle_count'])
        self.seed = params.get('seed')
        self.max_initial_velocity = float(params.get('max_initial_velocity', DEFAULT_MAX_INITIAL_VELOCITY))
        mass = float(params.get('particle_mass', DEFAULT_PARTICLE_MASS))

        # A dedicated RNG from the seed drives every random draw in this module.
        self.rng = np.random.default_rng(self.seed)

        half_width = width / 2.0
        half_height = height / 2.0
        self.positions = self.rng.uniform(
            low=[-half_width, -half_height],
            high=[half_width, half_height],
            size=(self.particle_count, 2)
        )
        self.velocities = self.rng.uniform(
            low=0.0,
            high=self.max_initial_velocity,
            size=(self.particle_count, 2)
        )
        # Carried for completeness; no computation reads it.
        self.masses = np.full(self.particle_count, mass, dtype=np.float64)

        logging.info(f"ParticleSystem initialized with {self.particle_count} molecules.")
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Velocities shape: {self.velocities.shape}, "
            f"Masses shape: {self.masses.shape}"
        )

    @classmethod
    def from_arrays(cls, positions, velocities, masses=None) -> "ParticleSystem":
        """
        Builds a particle system from explicit state arrays.

        Used to set up exact scenarios. The arrays are copied as float64.
        """
        positions = np.array(positions, dtype=np.float64).reshape(-1, 2)
        velocities = np.array(velocities, dtype=np.float64).reshape(-1, 2)
        if positions.shape != velocities.shape:
            raise ValueError(
                f"Positions shape {positions.shape} does not match "
                f"velocities shape {velocities.shape}."
            )

        system = cls.__new__(cls)
        system.particle_count = positions.shape[0]
        system.seed = None
        system.max_initial_velocity = DEFAULT_MAX_INITIAL_VELOCITY
        system.rng = np.random.default_rng()
        system.positions = positions
        system.velocities = velocities
        if masses is None:
            system.masses = np.full(system.particle_count, DEFAULT_PARTICLE_MASS, dtype=np.float64)
        else:
            system.masses = np.array(masses, dtype=np.float64).reshape(system.particle_count)
        return system

    def __len__(self) -> int:
        return self.particle_count
