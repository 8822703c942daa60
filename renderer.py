# renderer.py

"""
pygame Rendering

Turns the draw requests produced by emitters into pixels. The simulation uses
a centered, y-up coordinate system; pygame surfaces are top-left, y-down.

Data Contract:
- Inputs: an SRCALPHA pygame.Surface, draw requests, and the simulation Bounds.
- Outputs: None.
- Side Effects: Draws onto the surface; capture_frame writes a PNG.
- Invariants: Requests with a non-positive size or alpha are skipped rather
  than treated as errors (a particle's last tick can go slightly negative).
"""

import colorsys
import logging
import math
import os

import pygame

import constants
from emitter import ArrowDrawRequest, Bounds
from particle import ParticleDrawRequest

logger = logging.getLogger(constants.LOGGER_NAME)

ARROW_HEAD_LENGTH = 3.0  # Pixels
ARROW_HEAD_ANGLE = math.radians(150)


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def to_screen(point, bounds: Bounds):
    """Maps a simulation point to integer pixel coordinates."""
    return (int(round(point[0] - bounds.left)), int(round(bounds.top - point[1])))


def hsla_to_rgba(color):
    """HSLA (hue in degrees, the rest 0-1) to a 0-255 RGBA tuple."""
    hue = (color.hue / 360.0) % 1.0
    r, g, b = colorsys.hls_to_rgb(hue, _clamp01(color.lightness), _clamp01(color.saturation))
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(_clamp01(color.alpha) * 255)))


def draw_particle(surface: pygame.Surface, request: ParticleDrawRequest, bounds: Bounds):
    radius = request.diameter / 2.0
    if radius <= 0 or request.fill_color.alpha <= 0:
        return
    center = to_screen(request.center, bounds)
    pygame.draw.circle(surface, hsla_to_rgba(request.fill_color), center, radius)
    if request.stroke_weight > 0:
        width = max(1, int(round(request.stroke_weight)))
        pygame.draw.circle(surface, hsla_to_rgba(request.stroke_color), center, radius, width)


def draw_arrow(surface: pygame.Surface, request: ArrowDrawRequest, bounds: Bounds):
    if request.color.alpha <= 0:
        return
    color = hsla_to_rgba(request.color)
    width = max(1, int(round(request.weight)))
    start = to_screen(request.start, bounds)
    end = to_screen(request.end, bounds)
    pygame.draw.line(surface, color, start, end, width)

    # Arrow head, built in screen space
    heading = math.atan2(end[1] - start[1], end[0] - start[0])
    for side in (-1, 1):
        angle = heading + side * ARROW_HEAD_ANGLE
        tip = (end[0] + math.cos(angle) * ARROW_HEAD_LENGTH, end[1] + math.sin(angle) * ARROW_HEAD_LENGTH)
        pygame.draw.line(surface, color, end, tip, width)


def draw(surface: pygame.Surface, requests, bounds: Bounds):
    """Draws a mixed list of particle and arrow requests in order."""
    for request in requests:
        if isinstance(request, ParticleDrawRequest):
            draw_particle(surface, request, bounds)
        elif isinstance(request, ArrowDrawRequest):
            draw_arrow(surface, request, bounds)


def capture_frame(surface: pygame.Surface, directory: str, prefix: str, frame: int) -> str:
    """
    Saves the surface as <directory>/<prefix><frame>.png.

    - Outputs: The path written.
    - Side Effects: Creates directory if needed.
    """
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, f"{prefix}{frame:05d}.png")
    pygame.image.save(surface, path)
    logger.info(f"Captured frame {frame} to {path}")
    return path
