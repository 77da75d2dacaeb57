#!/usr/bin/env python3
"""
Tests for Renderer

Draws onto off-screen surfaces with the dummy SDL video driver, so no
window is needed.

Usage:
    pytest pygame_renderer/test_renderer.py
"""

import os
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from pygame_renderer import Renderer


@pytest.fixture
def renderer():
    pygame.init()
    yield Renderer(window_width=800, window_height=800)
    pygame.quit()


def test_world_to_screen(renderer):
    assert renderer.world_to_screen(0.5, 0.5) == (400, 400)
    assert renderer.world_to_screen(0.0, 0.0) == (0, 800)
    assert renderer.world_to_screen(0.25, 0.75) == (200, 200)


def test_world_to_screen_array_matches_scalar(renderer):
    positions = np.array([[0.5, 0.5], [0.05, 0.95], [0.95, 0.05]], dtype=np.float32)
    screen = renderer.world_to_screen_array(positions)

    assert screen.shape == (3, 2)
    for (x, y), (sx, sy) in zip(positions, screen):
        assert renderer.world_to_screen(float(x), float(y)) == (sx, sy)


def test_canvas_is_black(renderer):
    canvas = renderer.create_canvas()
    assert canvas.get_size() == (800, 800)
    assert canvas.get_at((10, 10))[:3] == Renderer.BLACK


def test_draw_particles(renderer):
    canvas = renderer.create_canvas()
    renderer.draw_particles(canvas, np.array([[0.5, 0.5]], dtype=np.float32))

    assert canvas.get_at((400, 400))[:3] == Renderer.WHITE
    assert canvas.get_at((401, 401))[:3] == Renderer.WHITE
    assert canvas.get_at((403, 403))[:3] == Renderer.BLACK


def test_draw_particles_skips_non_finite(renderer):
    canvas = renderer.create_canvas()
    positions = np.array([[np.nan, 0.5], [0.25, np.inf], [0.25, 0.25]], dtype=np.float32)
    renderer.draw_particles(canvas, positions)

    assert canvas.get_at((200, 600))[:3] == Renderer.WHITE


def test_draw_no_particles(renderer):
    canvas = renderer.create_canvas()
    renderer.draw_particles(canvas, np.zeros((0, 2), dtype=np.float32))
    assert canvas.get_at((400, 400))[:3] == Renderer.BLACK


def test_draw_info_text(renderer):
    canvas = renderer.create_canvas()
    renderer.draw_info_text(canvas, [("Step: 1", Renderer.WHITE), ("Solver: sequential", Renderer.GREY)])

    pixels = pygame.surfarray.array3d(canvas)
    assert pixels[:200, :50].any()
    assert not pixels[:, 100:].any()


if __name__ == "__main__":
    exit(pytest.main([__file__, "-q"]))
