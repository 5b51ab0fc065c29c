# timer.py
"""
A small repeating timer used to gate periodic simulation actions.

The frame loop feeds the elapsed frame time into each timer. A timer
fires at most once per evaluation, when its accumulated time reaches the
configured interval, and then starts accumulating again from zero.
"""
import math

# --- Data Contracts ---
#
# class RepeatingTimer:
#   - __init__(self, interval: float):
#     - Inputs:
#       - interval: float, seconds between two fires. Must be > 0.
#     - Side Effects: None.
#
#   - accumulate(self, dt: float) -> bool:
#     - Inputs:
#       - dt: float, elapsed seconds since the previous call. Must be
#         finite and >= 0.
#     - Outputs:
#       - bool: True if the timer fired during this call.
#     - Side Effects: Updates `elapsed`. On fire, stores the accumulated
#       time in `last_period` and resets `elapsed` to 0.
#     - Invariants: `just_fired` is True for exactly one evaluation per fire.

class RepeatingTimer:
    """
    Accumulates elapsed time and fires once per interval.
    """
    def __init__(self, interval: float):
        interval = float(interval)
        if not math.isfinite(interval) or interval <= 0:
            raise ValueError(f"Timer interval must be a positive number, got {interval}.")
        self.interval = interval
        self.elapsed = 0.0
        self.last_period = 0.0
        self.just_fired = False

    def accumulate(self, dt: float) -> bool:
        """
        Adds `dt` seconds and reports whether the timer fired.

        The time accumulated up to the fire is kept in `last_period`, so
        callers can scale their action by the real time that passed
        rather than by the nominal interval.
        """
        dt = float(dt)
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"Elapsed time must be a finite, non-negative number, got {dt}.")

        self.elapsed += dt
        if self.elapsed >= self.interval:
            self.last_period = self.elapsed
            self.elapsed = 0.0
            self.just_fired = True
        else:
            self.just_fired = False
        return self.just_fired

    def reset(self) -> None:
        """Drops any accumulated time."""
        self.elapsed = 0.0
        self.just_fired = False

    def __repr__(self) -> str:
        return f"RepeatingTimer(interval={self.interval}, elapsed={self.elapsed:.4f})"
