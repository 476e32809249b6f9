# Configuration settings should be set in app.config
# Options missing from the app config are looked up in the environment and
# finally fall back to the defaults declared as class variables on MockRest
import os
import logging
from flask import current_app
import mockrest
from typing import Any, Optional


def get_config(option: str, default: Any = None) -> Optional[Any]:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :param default: value returned when the option isn't configured anywhere
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # RuntimeError: working outside of the application context
        result = os.environ.get(option, getattr(mockrest.MockRest, option, None))
    if result is None:
        return default
    return result


def get_int_config(option: str, default: int = 0) -> int:
    """
    :param option: configuration parameter holding an integer
    :return: the integer value, `default` if the configured value isn't numeric
    """
    value = get_config(option, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        mockrest.log.warning(f'Invalid integer value for {option}: "{value}"')
        return default


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return mockrest.log.getEffectiveLevel() < logging.INFO
