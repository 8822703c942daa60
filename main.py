# main.py

import logging

import numpy as np
import pygame

import constants
import logger_setup
import renderer
from config import load_config
from emitter import Bounds
from simulation import Simulation

# Get the application's dedicated logger
logger = logging.getLogger(constants.LOGGER_NAME)


def bounds_for_window(width: int, height: int) -> Bounds:
    """Simulation bounds for a window, with the origin at its center."""
    return Bounds(top=height / 2.0, bottom=-height / 2.0, left=-width / 2.0, right=width / 2.0)


def run_simulation_loop(simulation, screen, clock, overlay, bounds, config):
    """
    The main loop. One simulation tick and one rendered frame per iteration.

    SPACE toggles pause on every emitter, S captures the current frame.
    """
    running = True
    frame = 0

    while running:
        # Event handling
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYUP:
                if event.key == pygame.K_SPACE:
                    logger.info("Toggling pause")
                    simulation.toggle_pause()
                elif event.key == pygame.K_s:
                    renderer.capture_frame(screen, constants.CAPTURE_DIRECTORY, config.capture_prefix, frame)

        # --- Simulation Update ---
        simulation.tick(frame)

        # --- Drawing ---
        # The background is only cleared once, so particles leave trails.
        if frame == 0:
            screen.fill(constants.BLACK)
        overlay.fill((0, 0, 0, 0))
        renderer.draw(overlay, simulation.draw_requests(), bounds)
        screen.blit(overlay, (0, 0))

        pygame.display.flip()
        clock.tick(constants.FPS)
        frame += 1


def main():
    """
    Main function to initialize and run the particle sketch.
    """
    # --- Setup ---
    config = load_config('config.json')
    logger_setup.setup_logging(config)

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config.master_seed)
    logger.info(f"Master RNG initialized with seed: {config.master_seed}")

    # --- Initialization ---
    pygame.init()
    screen = pygame.display.set_mode((config.window_width, config.window_height))
    pygame.display.set_caption(constants.TITLE)
    clock = pygame.time.Clock()

    bounds = bounds_for_window(config.window_width, config.window_height)
    simulation = Simulation.from_config(config, bounds, rng=rng)

    overlay = pygame.Surface((config.window_width, config.window_height), pygame.SRCALPHA)

    run_simulation_loop(simulation, screen, clock, overlay, bounds, config)

    logger.info("Application shutting down.")
    pygame.quit()


if __name__ == "__main__":
    main()
