# utils.py
"""
Utility functions for the simulation framework.

This module provides helper functions, such as logging setup and
configuration loading, that are used across different parts of the
application but do not belong to a specific domain like physics or
rendering.
"""
import logging
import logging.handlers
import json
import math
import os
from typing import Dict, Any

from constants import STATS_LOGGER

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#   - Invariants: After this function runs, the logging system is
#     initialized and ready for use throughout the application. The
#     stats report logger is pinned to INFO.
#
# validate_config(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: The dictionary returned by load_config.
#   - Outputs: None
#   - Side Effects: Logs a CRITICAL message and raises ValueError on the
#     first invalid value found.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/simulation.log')

    # Ensure the log directory exists
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # The periodic stats line is the program's main output.
    logging.getLogger(STATS_LOGGER).setLevel(logging.INFO)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")

def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        return config
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

def _fail(msg: str) -> None:
    logging.critical(msg)
    raise ValueError(msg)

def _require_number(section: Dict[str, Any], key: str, minimum: float, strict: bool) -> None:
    if key not in section:
        return
    value = section[key]
    # bool is an int subclass but never a meaningful number here
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        _fail(f"Configuration error: '{key}' must be a number, got {value!r}.")
    if value < minimum or (strict and value == minimum):
        bound = "greater than" if strict else "at least"
        _fail(f"Configuration error: '{key}' must be {bound} {minimum}, got {value}.")

def validate_config(config: Dict[str, Any]) -> None:
    """
    Checks the configuration for values the simulation cannot run with.

    Optional keys may be missing; they fall back to the defaults in
    constants.py.
    """
    sim_params = config.get('simulation_parameters')
    if not isinstance(sim_params, dict):
        _fail("Configuration error: missing 'simulation_parameters' section.")
    if 'particle_count' not in sim_params:
        _fail("Configuration error: 'simulation_parameters' must define 'particle_count'.")

    count = sim_params['particle_count']
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        _fail(f"Configuration error: 'particle_count' must be a non-negative integer, got {count!r}.")

    seed = sim_params.get('seed')
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        _fail(f"Configuration error: 'seed' must be an integer or null, got {seed!r}.")

    _require_number(sim_params, 'collision_distance', 0.0, strict=False)
    _require_number(sim_params, 'move_interval', 0.0, strict=True)
    _require_number(sim_params, 'stats_interval', 0.0, strict=True)
    _require_number(sim_params, 'max_initial_velocity', 0.0, strict=False)
    _require_number(sim_params, 'particle_mass', 0.0, strict=True)

    window = config.get('window', {})
    _require_number(window, 'width', 0.0, strict=True)
    _require_number(window, 'height', 0.0, strict=True)

    run_params = config.get('run_control', {})
    _require_number(run_params, 'max_steps', 0.0, strict=False)
    _require_number(run_params, 'log_throttle_steps', 0.0, strict=True)
    _require_number(run_params, 'fixed_dt', 0.0, strict=True)

    logging.debug("Configuration validated.")
