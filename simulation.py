# simulation.py

import logging
from typing import List

import numpy as np

import constants
from config import Config
from emitter import ArrowDrawRequest, Bounds, Emitter
from particle import ParticleDrawRequest

logger = logging.getLogger(constants.LOGGER_NAME)


class Simulation:
    """
    Drives a set of independent emitters, one tick at a time.

    Data Contract:
    - Inputs:
        - emitters (list[Emitter]): Updated in order; they share no state.
        - rng: Decides whether each emitter emits on a given tick.
        - emit_probability (float): Chance per tick and emitter of an emit() call.
        - time_scale (float): Elapsed time per frame handed to Emitter.update.
    - Outputs: draw requests for the renderer.
    - Side Effects: tick() mutates every emitter.
    """
    def __init__(self, emitters: List[Emitter], rng=None, emit_probability: float = 0.1,
                 time_scale: float = 1.0 / 360.0):
        self.emitters = emitters
        self.rng = rng if rng is not None else np.random.default_rng()
        self.emit_probability = emit_probability
        self.time_scale = time_scale

    @classmethod
    def from_config(cls, config: Config, bounds: Bounds, rng=None) -> "Simulation":
        rng = rng if rng is not None else np.random.default_rng(config.master_seed)
        emitters = [Emitter.from_config(name, config, bounds, rng=rng) for name in config.use_emitters]
        logger.info(f"Simulation created with {len(emitters)} emitter(s): {config.use_emitters}")
        return cls(emitters, rng=rng, emit_probability=config.emit_probability, time_scale=config.time_scale)

    def tick(self, frame: int):
        """Updates every emitter at t = frame * time_scale, then lets each one maybe emit."""
        t = frame * self.time_scale
        for e in self.emitters:
            e.update(t)
        for e in self.emitters:
            if self.rng.random() < self.emit_probability:
                e.emit()

        if frame % 100 == 0:
            logger.debug(f"Frame={frame}, t={t:.3f}, Particles={self.particle_count()}")

    def toggle_pause(self):
        for e in self.emitters:
            e.toggle_pause()

    def apply_force(self, force):
        for e in self.emitters:
            e.apply_force(force)

    def particle_count(self) -> int:
        return sum(len(e) for e in self.emitters)

    def draw_requests(self):
        """
        Arrow requests first (so they sit underneath), then particle requests,
        emitter by emitter.
        """
        arrows: List[ArrowDrawRequest] = []
        particles: List[ParticleDrawRequest] = []
        for e in self.emitters:
            arrows.extend(e.noise_arrows())
            particles.extend(e.display())
        return arrows + particles
