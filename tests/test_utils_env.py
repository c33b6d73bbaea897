"""Tests for the environment variable utility."""

import pytest

from benchlet.meter import TimeUnit
from benchlet.utils.env import (
    EnvVarNotSetError,
    EnvVarTypeError,
    get_env,
    require_env,
)


def test_get_env_basic(monkeypatch):
    """Test getting set variables and missing variables with defaults."""
    monkeypatch.setenv("BENCHLET_TEST_VAR", "test_value")
    monkeypatch.delenv("BENCHLET_MISSING_VAR", raising=False)

    assert get_env("BENCHLET_TEST_VAR") == "test_value"
    assert get_env("BENCHLET_MISSING_VAR", default="default") == "default"
    assert get_env("BENCHLET_MISSING_VAR") is None


def test_get_env_coercion(monkeypatch):
    """Test type coercion for common types."""
    monkeypatch.setenv("BENCHLET_BOOL_TRUE", "true")
    monkeypatch.setenv("BENCHLET_BOOL_FALSE", "0")
    monkeypatch.setenv("BENCHLET_INT", " 123 ")
    monkeypatch.setenv("BENCHLET_FLOAT", "1.23")
    monkeypatch.setenv("BENCHLET_LIST", "a, b, c ")
    monkeypatch.setenv("BENCHLET_UNIT", "seconds")

    assert get_env("BENCHLET_BOOL_TRUE", as_type=bool) is True
    assert get_env("BENCHLET_BOOL_FALSE", as_type=bool) is False
    assert get_env("BENCHLET_INT", as_type=int) == 123
    assert get_env("BENCHLET_FLOAT", as_type=float) == 1.23
    assert get_env("BENCHLET_LIST", as_type=list) == ["a", "b", "c"]
    assert get_env("BENCHLET_UNIT", as_type=TimeUnit) is TimeUnit.SECONDS

    # Test coercion failure
    monkeypatch.setenv("BENCHLET_INVALID_INT", "not_an_int")
    with pytest.raises(EnvVarTypeError):
        get_env("BENCHLET_INVALID_INT", as_type=int)


def test_require_env(monkeypatch):
    """Test getting required variables."""
    monkeypatch.setenv("BENCHLET_REQUIRED", "7")
    monkeypatch.delenv("BENCHLET_NON_EXISTENT", raising=False)

    assert require_env("BENCHLET_REQUIRED") == "7"
    assert require_env("BENCHLET_REQUIRED", as_type=int) == 7

    with pytest.raises(EnvVarNotSetError):
        require_env("BENCHLET_NON_EXISTENT")
