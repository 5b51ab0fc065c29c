# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They are fundamental to the application's framework, such as rendering
properties, the default window size, or fallback physics settings used
when the configuration file leaves a value out.
"""

# Visualization settings
WINDOW_TITLE = "Gaz"
FPS = 60
BACKGROUND_COLOR = (24, 24, 24) # Dark Gray
PARTICLE_RADIUS = 5

# Default container (window) size in world units.
DEFAULT_WIDTH = 800.0
DEFAULT_HEIGHT = 400.0

# --- Simulation Defaults ---
DEFAULT_PARTICLE_COUNT = 1000
DEFAULT_COLLISION_DISTANCE = 5.0
# Seconds between two position integrations.
DEFAULT_MOVE_INTERVAL = 0.01
# Seconds between two statistics reports.
DEFAULT_STATS_INTERVAL = 1.0
# Initial velocities are drawn from [0, DEFAULT_MAX_INITIAL_VELOCITY) per axis.
DEFAULT_MAX_INITIAL_VELOCITY = 200.0
DEFAULT_PARTICLE_MASS = 1.0

# --- Run Control Defaults ---
DEFAULT_LOG_THROTTLE_STEPS = 100
# Frame time used when running without a window.
DEFAULT_FIXED_DT = 1.0 / FPS

# --- Logging ---
# Stats reports go through their own logger, kept at INFO so a quieter
# root level does not hide them.
STATS_LOGGER = "gaz.stats"
