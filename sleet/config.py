"""Manages configuration variables.

This module provides:
- Config: a base class for pulling environment variables
- DevelopmentConfig: a dev config class for test environments
- ProductionConfig: a config class for production
- config: a dict for getting configuration depending on environment
"""

import os

from dotenv import load_dotenv

from .constants import EPOCH as DEFAULT_EPOCH

load_dotenv()


class Config:
    """Base class for pulling environment variables.

    Values stay strings here, ``create_generator`` parses and validates them.
    """

    # unset means derive it from the local address
    DATA_CENTER_ID = os.getenv("SLEET_DATA_CENTER_ID")
    MACHINE_ID = os.getenv("SLEET_MACHINE_ID", "0")

    EPOCH = os.getenv("SLEET_EPOCH", str(DEFAULT_EPOCH))

    BACKOFF = os.getenv("SLEET_BACKOFF", "0")

    LOG_PATH = os.getenv("SLEET_LOG_PATH", "logs/sleet.log")


class DevelopmentConfig(Config):
    """Config class with DEBUG on."""

    DEBUG = True


class ProductionConfig(Config):
    """Config class with DEBUG off."""

    DEBUG = False


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
}
