"""
Pygame Renderer for the Particle Simulation.

This module provides the rendering used by demo.py.

Main classes:
- Renderer: pygame-based rendering of particle positions
"""

from .renderer import Renderer

__all__ = ['Renderer']
