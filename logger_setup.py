# logger_setup.py

import logging
import os

import constants
from config import Config


def setup_logging(config: Config, runs_dir: str = 'runs'):
    """
    Sets up logging for the application.

    Creates a run-specific log directory and configures the dedicated
    application logger (not the root logger) to output to the console and,
    unless disabled, to a log file. This keeps third-party loggers such as
    Numba's out of the simulation log.

    Data Contract:
    - Inputs:
        - config (Config): Supplies run_id and the 'logging' section
          (level, format, to_file).
        - runs_dir (str): Parent directory of the per-run log directories.
    - Outputs: The configured logger.
    - Side Effects:
        - Configures the application logger.
        - Creates runs_dir/<run_id>/ when logging to a file.
    """
    log_config = config.logging

    # --- Get a dedicated logger for the application ---
    logger = logging.getLogger(constants.LOGGER_NAME)
    logger.setLevel(log_config.level)

    # --- Prevent logs from propagating to the root logger ---
    logger.propagate = False

    formatter = logging.Formatter(log_config.format)

    # Clear existing handlers to avoid duplication if this function is called again
    if logger.hasHandlers():
        logger.handlers.clear()

    # Console handler
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    # File handler
    log_file = None
    if log_config.to_file:
        log_dir = os.path.join(runs_dir, config.run_id)
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, 'simulation.log')
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized. Run ID: {config.run_id}. Log file: {log_file}")
    return logger
