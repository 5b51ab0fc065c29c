# visualization.py
"""
Handles the visualization of the molecule gas using Pygame.

The simulation uses world coordinates centred on the origin with y
pointing up; Pygame draws from the top-left corner with y pointing down.
"""
import logging
import pygame
import numpy as np
from typing import Optional, Tuple

from constants import BACKGROUND_COLOR, FPS, PARTICLE_RADIUS, WINDOW_TITLE

# Forward reference for type hinting to avoid circular import
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from simulation import Simulation


# --- Data Contracts ---
#
# world_to_screen(positions: np.ndarray, width: float, height: float) -> np.ndarray:
#   - Outputs: int array of shape (N, 2) with pixel coordinates.
#
# class Visualizer:
#   - __init__(self, width: int, height: int, particle_count: int, seed: Optional[int] = None):
#     - Side Effects: Initializes Pygame and creates a resizable window.
#
#   - handle_events(self) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Stores the latest reported window size, to be read
#       once with consume_resize().
#
#   - draw(self, simulation: "Simulation") -> None:
#     - Side Effects: Renders every molecule. Reads particle state only.

def world_to_screen(positions: np.ndarray, width: float, height: float) -> np.ndarray:
    """Maps centred, y-up world coordinates to Pygame pixel coordinates."""
    screen = np.empty_like(positions)
    screen[:, 0] = positions[:, 0] + width / 2.0
    screen[:, 1] = height / 2.0 - positions[:, 1]
    return screen.astype(np.int32)

def random_colors(count: int, rng: np.random.Generator) -> list:
    """One random opaque colour per molecule."""
    channels = rng.integers(0, 256, size=(count, 3))
    return [pygame.Color(int(r), int(g), int(b)) for r, g, b in channels]


class Visualizer:
    """
    Renders the molecules and reports window events back to the simulation.
    """
    def __init__(self, width: int, height: int, particle_count: int, seed: Optional[int] = None):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()
        self.screen = pygame.display.set_mode((int(width), int(height)), pygame.RESIZABLE)
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        # Colours are presentation state; the simulation never reads them.
        self.colors = random_colors(particle_count, np.random.default_rng(seed))
        self.pending_resize: Optional[Tuple[int, int]] = None

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def tick(self) -> float:
        """Waits for the next frame and returns the elapsed time in seconds."""
        return self.clock.tick(FPS) / 1000.0

    def handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

            if event.type == pygame.VIDEORESIZE:
                # Only the last size of the frame matters.
                self.pending_resize = (event.w, event.h)
                logging.debug(f"Window resize reported: {event.w}x{event.h}")
        return True

    def consume_resize(self) -> Optional[Tuple[int, int]]:
        """Returns the latest reported window size once, or None."""
        size, self.pending_resize = self.pending_resize, None
        return size

    def draw(self, simulation: "Simulation"):
        """
        Draws all molecules at their current positions.
        """
        width, height = self.screen.get_size()
        self.screen.fill(BACKGROUND_COLOR)

        points = world_to_screen(simulation.particles.positions, width, height)
        for color, (x, y) in zip(self.colors, points):
            pygame.draw.circle(self.screen, color, (int(x), int(y)), PARTICLE_RADIUS)

        pygame.display.flip()

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
