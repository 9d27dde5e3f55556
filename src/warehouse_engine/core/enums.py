"""Enumerations used across the warehouse engine."""

from enum import Enum


class AppendPolicy(str, Enum):
    """How new units are appended after a contiguously stored product."""

    WALK = "walk"  # Walk scan order, filling empty zones and skipping occupied ones
    STRICT = "strict"  # Require the zones right after the last unit to be free


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"
