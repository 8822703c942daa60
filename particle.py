# particle.py

from collections import namedtuple

import numpy as np

import constants
from color_picker import HSLA

# What the rendering collaborator needs to draw one particle.
# Colors are HSLA; diameter and alphas may dip to <= 0 on the final tick.
ParticleDrawRequest = namedtuple(
    'ParticleDrawRequest',
    ['center', 'diameter', 'fill_color', 'stroke_color', 'stroke_weight']
)


class Particle:
    """
    Represents a single emitted particle.

    Data Contract:
    - Inputs: position and velocity (2-vectors), an HSLA color, radius, stroke
      weight and life span.
    - Outputs: A draw request per frame via display().
    - Side Effects: update() mutates position, velocity and life span.
    - Invariants: life_span never increases; init_life_span never changes.
      Acceleration is never reset: a force passed to apply_force() keeps
      acting on every later tick until it is cancelled by an opposite force.
      Use apply_impulse() for a one-shot kick.
    """
    def __init__(self, position, velocity, color: HSLA, radius: float, life_span: float,
                 stroke_weight: float = 2.0):
        self.position = np.array(position, dtype=float)
        self.velocity = np.array(velocity, dtype=float)
        self.acceleration = np.zeros(2, dtype=float)
        self.color = color
        self.radius = radius
        self.stroke_weight = stroke_weight
        self.life_span = float(life_span)
        self.init_life_span = float(life_span)

    def apply_force(self, force):
        """Adds force to the (persistent) acceleration."""
        self.acceleration += force

    def apply_impulse(self, impulse):
        """Adds impulse to the velocity once; nothing is carried to later ticks."""
        self.velocity += impulse

    def update(self, impulse=None):
        """
        Advances one tick.
        v_new = v_old + impulse + a
        p_new = p_old + v_new
        """
        if impulse is not None:
            self.velocity += impulse
        self.velocity += self.acceleration
        self.position += self.velocity
        self.life_span -= constants.LIFE_SPAN_DECAY

    def is_dead(self) -> bool:
        return self.life_span < 0.0

    @property
    def life_ratio(self) -> float:
        if self.init_life_span <= 0.0:
            return 0.0
        return self.life_span / self.init_life_span

    def display(self) -> ParticleDrawRequest:
        """
        Describes the particle for the renderer: it shrinks and fades as it ages.
        """
        ratio = self.life_ratio
        return ParticleDrawRequest(
            center=(float(self.position[0]), float(self.position[1])),
            diameter=self.radius * ratio,
            fill_color=self.color._replace(alpha=ratio),
            stroke_color=HSLA(0.0, 0.0, 0.0, ratio),
            stroke_weight=self.stroke_weight,
        )

    def __repr__(self):
        return (f"Particle(pos=({self.position[0]:.2f}, {self.position[1]:.2f}), "
                f"vel=({self.velocity[0]:.2f}, {self.velocity[1]:.2f}), "
                f"life_span={self.life_span}/{self.init_life_span})")
