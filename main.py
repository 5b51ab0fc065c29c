# main.py
"""
Main entry point for the Gaz molecule simulation.

This script orchestrates the entire simulation lifecycle:
1. Loads and validates configuration from `config.json`.
2. Initializes the logging system.
3. Sets up the container, the molecules and the simulation.
4. Runs the main loop, in a window or headless.
5. Handles clean shutdown.
"""
import logging
import sys
from utils import setup_logging, load_config, validate_config
import numpy as np
import cProfile
import pstats
import io

from constants import (
    DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_LOG_THROTTLE_STEPS, DEFAULT_FIXED_DT
)

def main(config_path: str = 'config.json') -> int:
    """
    The main function to run the simulation.

    Returns the process exit code.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return 1

    setup_logging(config)

    logging.info("--- Gaz Simulation Starting ---")

    try:
        validate_config(config)
    except ValueError:
        logging.info("--- Gaz Simulation Aborted ---")
        return 1

    sim_params = config['simulation_parameters']
    run_params = config.get('run_control', {})
    window_params = config.get('window', {})

    from boundary import Container
    from particle import ParticleSystem
    from simulation import Simulation

    # --- Component Initialization ---
    width = window_params.get('width', DEFAULT_WIDTH)
    height = window_params.get('height', DEFAULT_HEIGHT)
    container = Container(width, height)
    particles = ParticleSystem(sim_params, container.width, container.height)
    sim = Simulation(particles, container, sim_params)

    headless = run_params.get('headless', False)
    fixed_dt = run_params.get('fixed_dt', DEFAULT_FIXED_DT)
    visualizer = None
    if not headless:
        from visualization import Visualizer
        visualizer = Visualizer(width, height, particles.particle_count, sim_params.get('seed'))

    log_throttle = run_params.get('log_throttle_steps', DEFAULT_LOG_THROTTLE_STEPS)
    # 0 means run until the window is closed
    max_steps = run_params.get('max_steps', 0)
    if headless and max_steps == 0:
        logging.warning("Headless run without max_steps; it will run until interrupted.")

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    running = True
    if profiler:
        profiler.enable()
    try:
        while running:
            if visualizer:
                # The visualizer reports QUIT/ESC and window resizes.
                if not visualizer.handle_events():
                    break
                dt = visualizer.tick()
            else:
                dt = fixed_dt

            sim.step(dt)

            if visualizer:
                size = visualizer.consume_resize()
                if size is not None:
                    sim.handle_resize(*size)
                visualizer.draw(sim)

            # Hot loops must throttle logs
            if sim.step_count % log_throttle == 0:
                logging.info(f"Simulation step {sim.step_count}, t={sim.sim_time:.2f}s")
                if particles.particle_count:
                    avg_speed = np.mean(np.linalg.norm(particles.velocities, axis=1))
                    logging.debug(
                        f"Step {sim.step_count} | Average Speed: {avg_speed:.4f} | "
                        f"Colliding pairs: {sim.last_collision_count}"
                    )

            if max_steps and sim.step_count >= max_steps:
                logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
                running = False
    except KeyboardInterrupt:
        logging.info("Interrupted by user.")
    finally:
        if profiler:
            profiler.disable()
        if visualizer:
            visualizer.close()

    logging.info(
        f"Simulation loop finished after {sim.step_count} steps "
        f"and {sim.stats.report_count} stats reports."
    )

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Gaz Simulation Shutting Down ---")
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
