"""
Pygame Renderer for the Particle Simulation

Draws particle positions from the unit square into a pygame surface.
The renderer only ever receives positions, never velocities or identities.

Features:
1. Unit-square to pixel mapping with y pointing up
2. Particles drawn as small filled squares
3. Info text overlay (step count, step time)

Usage:
    from pygame_renderer import Renderer

    renderer = Renderer(window_width=800, window_height=800)

    # In render loop:
    canvas = renderer.create_canvas()
    renderer.draw_particles(canvas, sim.positions())
    renderer.draw_info_text(canvas, [("Step: 10", renderer.GREY)])
"""

import numpy as np
import pygame
from typing import List, Tuple


class Renderer:
    """
    Pygame renderer for particle simulation visualization.

    All methods work with pygame surfaces and numpy arrays.
    """

    # ========================================================================
    # COLOR CONSTANTS
    # ========================================================================

    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    GREY = (100, 100, 100)

    PARTICLE_FILL = WHITE

    # ========================================================================
    # INITIALIZATION
    # ========================================================================

    def __init__(
        self,
        window_width: int = 800,
        window_height: int = 800,
        particle_size: int = 2,
        font_size_small: int = 18,
    ):
        """
        Initialize the renderer.

        Args:
            window_width: Window width in pixels
            window_height: Window height in pixels
            particle_size: Side of the square drawn per particle, in pixels
            font_size_small: Font size for info text
        """
        self.window_width = window_width
        self.window_height = window_height
        self.particle_size = particle_size

        # Fonts (initialized lazily)
        self._font_small = None
        self._font_size_small = font_size_small

    @property
    def font_small(self):
        """Lazy small font initialization."""
        if self._font_small is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font_small = pygame.font.Font(None, self._font_size_small)
        return self._font_small

    # ========================================================================
    # COORDINATE CONVERSION
    # ========================================================================

    def world_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        """Convert unit-square coordinates to screen coordinates."""
        return (int(x * self.window_width), int((1.0 - y) * self.window_height))

    def world_to_screen_array(self, positions: np.ndarray) -> np.ndarray:
        """
        Convert array of unit-square positions to screen coordinates.

        Args:
            positions: Array of shape (N, 2) with [x, y] in [0, 1]

        Returns:
            Array of shape (N, 2) with [screen_x, screen_y] pixel coordinates
        """
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 2)
        screen = np.zeros_like(positions, dtype=np.int32)
        screen[:, 0] = (positions[:, 0] * self.window_width).astype(int)
        screen[:, 1] = ((1.0 - positions[:, 1]) * self.window_height).astype(int)
        return screen

    # ========================================================================
    # CANVAS CREATION
    # ========================================================================

    def create_canvas(self, background_color=None) -> pygame.Surface:
        """
        Create a new canvas (pygame Surface) with background color.

        Args:
            background_color: RGB tuple or None for black

        Returns:
            pygame.Surface
        """
        canvas = pygame.Surface((self.window_width, self.window_height))
        canvas.fill(background_color or self.BLACK)
        return canvas

    # ========================================================================
    # PARTICLE RENDERING
    # ========================================================================

    def draw_particles(
        self,
        canvas: pygame.Surface,
        positions: np.ndarray,
        fill_color=None,
    ):
        """
        Draw particles as small filled squares.

        Args:
            canvas: pygame Surface to draw on
            positions: Array of shape (N, 2) with particle positions in [0, 1]
            fill_color: Particle color (default: white)
        """
        fill_color = fill_color or self.PARTICLE_FILL

        if len(positions) == 0:
            return

        finite = np.all(np.isfinite(positions), axis=1)
        for sx, sy in self.world_to_screen_array(np.asarray(positions)[finite]):
            pygame.draw.rect(canvas, fill_color, (int(sx), int(sy), self.particle_size, self.particle_size))

    # ========================================================================
    # UI TEXT
    # ========================================================================

    def draw_info_text(
        self,
        canvas: pygame.Surface,
        lines: List[Tuple[str, Tuple[int, int, int]]],
        position: Tuple[int, int] = (10, 10),
        line_spacing: int = 17,
    ):
        """
        Draw multiple lines of info text.

        Args:
            canvas: pygame Surface to draw on
            lines: List of (text, color) tuples
            position: Top-left position
            line_spacing: Vertical spacing between lines
        """
        x, y = position

        for i, (text, color) in enumerate(lines):
            text_surface = self.font_small.render(text, True, color)
            canvas.blit(text_surface, (x, y + i * line_spacing))
