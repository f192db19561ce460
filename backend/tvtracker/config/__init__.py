from tvtracker.config.environment import Settings, get_settings
from tvtracker.config.logging import setup_logging, log_operation

VERSION = "0.2.0"
API_TITLE = "TV Tracker API"
API_DESCRIPTION = "API for tracking movies, series, episodes and user ratings"

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "log_operation",
    "VERSION",
    "API_TITLE",
    "API_DESCRIPTION",
]
