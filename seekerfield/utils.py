#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Logging and Configuration Utilities
================================================================================

Project:        Seeker Field
Module:         utils.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Helpers shared by the command line host and the tests: logging setup and
loading of the JSON run configuration.

The JSON file has three sections:
    - "simulation":  SimulationConfig fields
    - "run_control": frame count, fps and log throttling for the host
    - "logging":     level, format and log file path
"""

import json
import logging
import logging.handlers
import os
from typing import Any, Dict

from .config import SimulationConfig


DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configure the root logger from the "logging" section of a config dict.

    Logs go to the console and to a rotating file (1 MB, 5 backups). A
    `log_file` of null disables the file handler.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path = log_config.get('log_file', 'logs/seekerfield.log')

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")


def load_config(path: str) -> Dict[str, Any]:
    """Load a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        return config
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise


def simulation_config_from(config: Dict[str, Any]) -> SimulationConfig:
    """SimulationConfig built from the "simulation" section."""
    return SimulationConfig.from_dict(config.get('simulation', {}))
