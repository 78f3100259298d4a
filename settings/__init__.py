from settings.api import api_settings
from settings.base import BASE_PATH
from settings.core import core_settings
from settings.logfire import logfire_settings

__all__ = [
    "api_settings",
    "core_settings",
    "logfire_settings",
    "BASE_PATH",
]
