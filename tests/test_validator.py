"""Tests for method checks and invocation."""

import pytest

from benchlet.annotations import Role
from benchlet.element.validator import check_method, invoke_method
from benchlet.exceptions import MethodCheckError, MethodInvocationError

CALLS: list[str] = []


class CheckAndExecute:
    def correct_method(self) -> None:
        CALLS.append("correct")

    def incorrect_method(self) -> object:
        return None

    def unannotated(self):
        CALLS.append("unannotated")

    def unannotated_returning(self):
        CALLS.append("returning")
        return 42

    def with_param(self, value) -> None:
        pass

    def _private(self) -> None:
        pass

    @staticmethod
    def static_method() -> None:
        pass

    async def async_method(self) -> None:
        pass

    def raising(self) -> None:
        raise RuntimeError("boom")


class Inheriting(CheckAndExecute):
    pass


class Overriding(CheckAndExecute):
    def correct_method(self) -> None:
        pass


@pytest.fixture(autouse=True)
def reset_calls():
    CALLS.clear()


def test_check_method_wrong_owner():
    """Test that a method of another class is rejected."""
    error = check_method(object(), CheckAndExecute.correct_method, Role.SKIP)
    assert isinstance(error, MethodCheckError)
    assert error.role is Role.SKIP
    assert "not declared" in error.reason


def test_check_method_non_void_return():
    """Test that a method annotated to return a value is rejected."""
    error = check_method(CheckAndExecute(), CheckAndExecute.incorrect_method, Role.SKIP)
    assert error is not None
    assert "return None" in error.reason


@pytest.mark.parametrize("role", list(Role))
def test_check_method_valid(role):
    """Test that a public, void, argument-free method passes for every role."""
    assert check_method(CheckAndExecute(), CheckAndExecute.correct_method, role) is None


def test_check_method_unannotated_return():
    """Test that a method without return annotation is accepted."""
    assert check_method(CheckAndExecute(), CheckAndExecute.unannotated, Role.BENCH) is None


@pytest.mark.parametrize(
    "name, reason",
    [
        ("with_param", "no parameters"),
        ("_private", "not public"),
        ("static_method", "static and class methods"),
        ("async_method", "async"),
    ],
)
def test_check_method_bad_shape(name, reason):
    """Test that methods with the wrong shape are rejected."""
    method = getattr(CheckAndExecute, name)
    error = check_method(CheckAndExecute(), method, Role.BENCH)
    assert error is not None
    assert reason in error.reason


def test_check_method_not_a_function():
    """Test that a bound method is rejected."""
    target = CheckAndExecute()
    error = check_method(target, target.correct_method, Role.BENCH)
    assert error is not None
    assert "plain function" in error.reason


def test_check_method_inheritance():
    """Test ownership through inheritance and overriding."""
    assert check_method(Inheriting(), CheckAndExecute.correct_method, Role.BENCH) is None
    assert check_method(Overriding(), CheckAndExecute.correct_method, Role.BENCH) is not None
    assert check_method(Overriding(), Overriding.correct_method, Role.BENCH) is None


def test_invoke_method_success():
    """Test that a successful invocation returns None and runs the method."""
    error = invoke_method(CheckAndExecute(), CheckAndExecute.correct_method, Role.SKIP)
    assert error is None
    assert CALLS == ["correct"]


def test_invoke_method_raising():
    """Test that an exception of the invoked method is wrapped."""
    error = invoke_method(CheckAndExecute(), CheckAndExecute.raising, Role.AFTER_EACH_RUN)
    assert isinstance(error, MethodInvocationError)
    assert isinstance(error.cause, RuntimeError)
    assert error.role is Role.AFTER_EACH_RUN
    assert error.declaring_class is CheckAndExecute
    assert error.location == "CheckAndExecute.raising"
    assert "boom" in str(error)


def test_invoke_method_bad_call():
    """Test that a failing invocation mechanism is wrapped too."""
    error = invoke_method(CheckAndExecute(), CheckAndExecute.with_param, Role.BENCH)
    assert isinstance(error, MethodInvocationError)
    assert isinstance(error.cause, TypeError)


def test_void_check_reads_annotation_only():
    """Test that an unannotated method returning a value passes and its value is dropped."""
    target = CheckAndExecute()
    method = CheckAndExecute.unannotated_returning

    assert check_method(target, method, Role.BENCH) is None
    assert invoke_method(target, method, Role.BENCH) is None
    assert CALLS == ["returning"]
