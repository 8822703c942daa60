# emitter.py

import logging
import math
from collections import namedtuple
from typing import List, Optional

import numpy as np

import constants
from color_picker import ColorPicker, HSLA, default_color_picker
from config import Config, EmitterConfig
from mover import Mover
from noise_field import NoiseField
from particle import Particle, ParticleDrawRequest

logger = logging.getLogger(constants.LOGGER_NAME)

# Extents of the simulation area. The origin is the center, y points up.
Bounds = namedtuple('Bounds', ['top', 'bottom', 'left', 'right'])

ArrowDrawRequest = namedtuple('ArrowDrawRequest', ['start', 'end', 'weight', 'color'])


class Emitter:
    """
    Spawns flights of particles and runs their physics.

    Data Contract:
    - Inputs:
        - name (str): Identity, used in logs.
        - params (EmitterConfig): Fully-resolved spawn and turbulence parameters.
        - bounds (Bounds): The addressable simulation area.
        - color_picker (ColorPicker): Exclusively owned by this emitter.
        - mover (Mover | None): Moves the origin over time when present.
        - noise_field (NoiseField | None): Adds turbulence when present.
        - rng: Source of spawn jitter; anything with random() and uniform().
    - Outputs: Draw requests via display() and noise_arrows().
    - Side Effects: emit() grows the pool, update() moves and evicts particles.
    - Invariants: A particle copies radius, stroke weight and life span at
      spawn time; nothing done to the emitter afterwards changes it.
      Pausing only suppresses emission, live particles keep updating.
    """
    def __init__(self, name: str, params: EmitterConfig, bounds: Bounds, color_picker: ColorPicker,
                 mover: Optional[Mover] = None, noise_field: Optional[NoiseField] = None, rng=None):
        self.name = name
        self.bounds = bounds
        self.color_picker = color_picker
        self.mover = mover
        self.noise_field = noise_field
        self.rng = rng if rng is not None else np.random.default_rng()

        self.origin = np.array(params.origin, dtype=float)
        self.position = self.origin.copy()
        self.flight_size = params.flight_size
        self.radius = params.radius
        self.stroke_weight = params.stroke_weight
        self.life_span = params.life_span
        self.randomize_position = params.randomize_position
        self.randomize_velocity = params.randomize_velocity
        self.initial_velocity = np.array(params.initial_velocity, dtype=float)
        self.noise_scale = params.noise_scale
        self.noise_strength = params.noise_strength
        self.visualize_noise_field = params.visualize_noise_field

        self.paused = False
        self.particles: List[Particle] = []
        self._arrows = None

    @classmethod
    def from_config(cls, name: str, config: Config, bounds: Bounds, rng=None) -> "Emitter":
        """
        Builds the emitter called name from the run configuration.

        A color picker name that is not configured falls back to
        default_color_picker(); a mover name that is not configured leaves the
        emitter without a mover, fixed at its origin. Neither is an error.
        """
        rng = rng if rng is not None else np.random.default_rng()
        params = config.emitters[name]

        if params.color_picker in config.color_pickers:
            color_picker = ColorPicker.from_config(config.color_pickers[params.color_picker], rng=rng)
        else:
            logger.warning(f"Emitter '{name}': color picker '{params.color_picker}' not configured, using default picker.")
            color_picker = default_color_picker(rng=rng)

        mover = None
        if params.mover is not None:
            if params.mover in config.movers:
                mover = Mover.from_config(params.mover, config.movers[params.mover])
            else:
                logger.warning(f"Emitter '{name}': mover '{params.mover}' not configured, emitter stays at its origin.")

        noise_field = None
        if params.noise_field:
            seed = config.seed if config.seed is not None else int(rng.random() * (2**31 - 1))
            noise_field = NoiseField(seed)

        emitter = cls(name, params, bounds, color_picker, mover=mover, noise_field=noise_field, rng=rng)
        logger.info(f"Emitter '{name}' created: {color_picker!r}, mover={mover!r}, noise={noise_field is not None}")
        return emitter

    def __len__(self):
        return len(self.particles)

    def toggle_pause(self):
        self.paused = not self.paused
        logger.info(f"Emitter '{self.name}' {'paused' if self.paused else 'resumed'}")

    def _spawn_position(self) -> np.ndarray:
        if self.randomize_position:
            return np.array([
                math.floor(self.rng.uniform(self.bounds.left, self.bounds.right)),
                math.floor(self.rng.uniform(self.bounds.bottom, self.bounds.top)),
            ], dtype=float)
        return self.position.copy()

    def _spawn_velocity(self) -> np.ndarray:
        if self.randomize_velocity:
            return np.array([self.rng.uniform(-1.0, 1.0), self.rng.uniform(-1.0, 1.0)])
        return self.initial_velocity.copy()

    def emit(self):
        """Spawns one flight of flight_size particles unless paused."""
        if self.paused:
            logger.debug(f"Emitter '{self.name}' is paused")
            return
        for _ in range(self.flight_size):
            particle = Particle(
                self._spawn_position(),
                self._spawn_velocity(),
                self.color_picker.get_next_color(),
                self.radius,
                self.life_span,
                stroke_weight=self.stroke_weight,
            )
            self.particles.append(particle)
        logger.debug(f"Emitter '{self.name}' emitted {self.flight_size} particles, pool size {len(self.particles)}")

    def apply_force(self, force):
        """Adds a persistent force to every live particle."""
        for p in self.particles:
            p.apply_force(force)

    def apply_impulse(self, impulse):
        """Kicks every live particle's velocity once."""
        for p in self.particles:
            p.apply_impulse(impulse)

    def update(self, t: float):
        """
        Runs one tick at elapsed time t.

        Walks the pool from the back so that removing a dead particle never
        shifts an unvisited one past the cursor.
        """
        if self.mover is not None:
            self.position = self.mover.position(t)

        for i in range(len(self.particles) - 1, -1, -1):
            particle = self.particles[i]
            if self.noise_field is not None:
                impulse = self.noise_field.direction(
                    particle.position[0], particle.position[1], self.noise_scale, self.noise_strength
                )
                particle.update(impulse)
            else:
                particle.update()

            if particle.is_dead():
                del self.particles[i]

    def display(self) -> List[ParticleDrawRequest]:
        return [p.display() for p in self.particles]

    def noise_arrows(self) -> List[ArrowDrawRequest]:
        """
        Arrows sampling the noise field on a regular grid across the bounds.
        Empty unless visualize_noise_field is set and a noise field exists.
        The field does not change over time, so the grid is built once.
        """
        if not self.visualize_noise_field or self.noise_field is None:
            return []
        if self._arrows is None:
            color = HSLA(*constants.NOISE_ARROW_COLOR)
            arrows = []
            for x in np.arange(self.bounds.left, self.bounds.right, constants.NOISE_GRID_STEP):
                for y in np.arange(self.bounds.bottom, self.bounds.top, constants.NOISE_GRID_STEP):
                    offset = self.noise_field.direction(x, y, self.noise_scale, constants.NOISE_ARROW_LENGTH)
                    arrows.append(ArrowDrawRequest(
                        start=(float(x), float(y)),
                        end=(float(x + offset[0]), float(y + offset[1])),
                        weight=constants.NOISE_ARROW_WEIGHT,
                        color=color,
                    ))
            self._arrows = arrows
        return self._arrows
