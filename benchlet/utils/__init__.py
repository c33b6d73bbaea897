"""Benchlet utilities - logging and environment helpers."""

from benchlet.utils.env import (
    EnvVarError,
    EnvVarNotSetError,
    EnvVarTypeError,
    get_env,
    require_env,
)
from benchlet.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)

__all__ = [
    # Env
    "EnvVarError",
    "EnvVarNotSetError",
    "EnvVarTypeError",
    "LogLevel",
    # Logger
    "Logger",
    "LoggerNotConfiguredError",
    "get_env",
    "require_env",
]
