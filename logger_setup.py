# logger_setup.py

import logging
import os
import json

LOGGER_NAME = "generative_scene"
DEFAULT_LOG_FILE = "scene.log"


def _attach(logger, handler, formatter):
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _detach_all(logger):
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def setup_logging(config_path='config.json', log_root='runs'):
    """
    Sets up the scene's dedicated logger from the 'logging' section of the
    config file. Records go to runs/<run_id>/<file> and, unless disabled, to
    the console. pygame and numba log elsewhere and never reach this logger.

    Recognised 'logging' keys:
    - level (str): Logger level name, e.g. "INFO".
    - format (str): logging.Formatter format string.
    - file (str, optional): Log file name inside the run directory. Defaults to "scene.log".
    - console (bool, optional): Also echo to stderr. Defaults to True.

    Data Contract:
    - Inputs:
        - config_path (str) - Path to the configuration file.
        - log_root (str) - Directory under which per-run log folders are made.
    - Outputs: The configured logger.
    - Side Effects: Creates the run directory. Replaces (and closes) any
      handlers from a previous call, so repeated setup never duplicates output.
    """
    with open(config_path, 'r') as f:
        config = json.load(f)

    run_id = config['run_id']
    log_config = config['logging']

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_config['level'])
    logger.propagate = False
    _detach_all(logger)

    log_dir = os.path.join(log_root, run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, log_config.get('file', DEFAULT_LOG_FILE))

    formatter = logging.Formatter(log_config['format'])
    _attach(logger, logging.FileHandler(log_file), formatter)
    if log_config.get('console', True):
        _attach(logger, logging.StreamHandler(), formatter)

    logger.info(f"Scene logging ready for run '{run_id}' at {log_config['level']} -> {log_file}")
    return logger
