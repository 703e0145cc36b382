"""Pulls pieces together to brew a Sleet ID generator.

This module provides:
- create_generator: a function to get a configured IdGenerator considering a dev/prod environment
- IdGenerator, IdParts, decompose_id: re-exported from ``sleet.ids``
"""

import logging
from collections.abc import Callable

from .config import config
from .ids import IdGenerator, IdParts, decompose_id
from .utils.errors import InvalidConfigurationError
from .utils.logging import setup_logging
from .utils.network import resolve_default_data_center

__all__ = ["IdGenerator", "IdParts", "create_generator", "decompose_id"]


def _parse(name: str, value: str, kind: type):
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"{name} must be a {kind.__name__}, got {value!r}") from e


def create_generator(
        config_name: str = "development",
        resolver: Callable[[], int] = resolve_default_data_center
) -> IdGenerator:
    """Initializes an IdGenerator from environment configuration, with logging set up.

    If no data center id is configured, ``resolver`` derives one.

    Raises:
        InvalidConfigurationError: If a configured value isn't a number or is out of range
    """
    settings = config[config_name]

    logger = logging.getLogger(__name__)
    setup_logging(logger, debug=settings.DEBUG, log_path=settings.LOG_PATH)

    machine_id = _parse("SLEET_MACHINE_ID", settings.MACHINE_ID, int)
    options = {
        "epoch": _parse("SLEET_EPOCH", settings.EPOCH, int),
        "backoff": _parse("SLEET_BACKOFF", settings.BACKOFF, float),
    }

    if settings.DATA_CENTER_ID is None or settings.DATA_CENTER_ID == "":
        generator = IdGenerator.for_machine(machine_id, resolver=resolver, **options)
    else:
        data_center_id = _parse("SLEET_DATA_CENTER_ID", settings.DATA_CENTER_ID, int)
        generator = IdGenerator(data_center_id, machine_id, **options)

    logger.info(f"Created {generator!r}")
    return generator
