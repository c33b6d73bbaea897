"""Exception hierarchy for benchlet.

Validator operations return ``MethodCheckError`` / ``MethodInvocationError``
instances as values; the executor raises them. Every ``BenchmarkError`` is
attributable to exactly one class, function and lifecycle role.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from benchlet.annotations import Role


class BenchletError(Exception):
    """Base exception for benchlet errors."""

    pass


class BenchmarkDefinitionError(BenchletError):
    """Raised when a benchmark class or method is declared incorrectly."""

    def __init__(self, declaring_class: type, reason: str) -> None:
        self.declaring_class = declaring_class
        self.reason = reason
        super().__init__(f"Invalid benchmark definition in {declaring_class.__name__}: {reason}")


class BenchmarkError(BenchletError):
    """An error attributable to one method of one benchmarked class."""

    def __init__(
        self,
        declaring_class: type,
        method: Any,
        role: Role,
        message: str,
    ) -> None:
        self.declaring_class = declaring_class
        self.method = method
        self.role = role
        super().__init__(message)

    @property
    def method_name(self) -> str:
        """Name of the method the error belongs to."""
        return getattr(self.method, "__name__", str(self.method))

    @property
    def location(self) -> str:
        """Qualified ``Class.method`` location of the error."""
        return f"{self.declaring_class.__name__}.{self.method_name}"


class MethodCheckError(BenchmarkError):
    """A method is structurally ineligible for its lifecycle role."""

    def __init__(self, declaring_class: type, method: Any, role: Role, reason: str) -> None:
        self.reason = reason
        super().__init__(
            declaring_class,
            method,
            role,
            f"{declaring_class.__name__}.{getattr(method, '__name__', method)} "
            f"cannot be used as {role.value}: {reason}",
        )


class MethodInvocationError(BenchmarkError):
    """A method raised, or could not be invoked at all."""

    def __init__(
        self, declaring_class: type, method: Any, role: Role, cause: Exception
    ) -> None:
        self.cause = cause
        super().__init__(
            declaring_class,
            method,
            role,
            f"{role.value} {declaring_class.__name__}.{getattr(method, '__name__', method)} "
            f"raised {type(cause).__name__}: {cause}",
        )


class MeterError(BenchmarkError):
    """A meter failed while sampling around a bench method."""

    def __init__(
        self,
        declaring_class: type,
        method: Any,
        role: Role,
        meter_name: str,
        cause: Exception,
    ) -> None:
        self.meter_name = meter_name
        self.cause = cause
        super().__init__(
            declaring_class,
            method,
            role,
            f"meter {meter_name} failed while measuring "
            f"{declaring_class.__name__}.{getattr(method, '__name__', method)}: {cause}",
        )
