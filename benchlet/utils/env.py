"""Environment variable helpers with type coercion.

Usage:
    from benchlet.utils.env import get_env, require_env

    runs = get_env("BENCHLET_RUNS", default=1, as_type=int)
    parallel = get_env("BENCHLET_PARALLEL", default=False, as_type=bool)
"""

from __future__ import annotations

import os
from typing import Any, TypeVar, cast, overload

T = TypeVar("T")

_FALSE_VALUES = ("false", "0", "", "no", "off")


class EnvVarError(Exception):
    """Base exception for environment variable errors."""

    pass


class EnvVarNotSetError(EnvVarError):
    """Raised when a required environment variable is not set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Required environment variable not set: {name}")


class EnvVarTypeError(EnvVarError):
    """Raised when an environment variable cannot be converted to the expected type."""

    def __init__(self, name: str, value: str, expected_type: type) -> None:
        self.name = name
        self.value = value
        self.expected_type = expected_type
        super().__init__(f"Cannot convert {name}='{value}' to {expected_type.__name__}")


def _coerce_type(name: str, value: str, as_type: type) -> Any:
    """Convert a string value to ``as_type``.

    Raises:
        EnvVarTypeError: If conversion fails.
    """
    try:
        if as_type is bool:
            return value.strip().lower() not in _FALSE_VALUES
        if as_type is str:
            return value
        if as_type is list or getattr(as_type, "__origin__", None) is list:
            return [item.strip() for item in value.split(",") if item.strip()]
        # int, float, enums and anything else constructible from a string
        return as_type(value.strip())
    except (ValueError, TypeError) as e:
        raise EnvVarTypeError(name, value, as_type) from e


@overload
def get_env(name: str, *, default: T, as_type: type[T]) -> T:
    ...


@overload
def get_env(name: str, *, default: T) -> T:
    ...


@overload
def get_env(name: str, *, as_type: type[T]) -> T | None:
    ...


@overload
def get_env(name: str) -> str | None:
    ...


def get_env(
    name: str,
    *,
    default: T | None = None,
    as_type: type[T] | None = None,
) -> T | str | None:
    """Get an environment variable with optional type coercion.

    Args:
        name: Environment variable name.
        default: Returned when the variable is not set.
        as_type: Type to convert the value to. ``bool`` treats "false", "0",
            "", "no" and "off" as False; ``list`` splits on commas.

    Raises:
        EnvVarTypeError: If as_type is specified and conversion fails.

    Examples:
        >>> get_env("BENCHLET_RUNS", default=1, as_type=int)
        1
    """
    value = os.environ.get(name)

    if value is None:
        return default

    if as_type is not None:
        return cast(T, _coerce_type(name, value, as_type))

    return value


def require_env(name: str, *, as_type: type[T] | None = None) -> T | str:
    """Get a required environment variable.

    Raises:
        EnvVarNotSetError: If the variable is not set.
        EnvVarTypeError: If as_type is specified and conversion fails.
    """
    value = os.environ.get(name)

    if value is None:
        raise EnvVarNotSetError(name)

    if as_type is not None:
        return cast(T, _coerce_type(name, value, as_type))

    return value
