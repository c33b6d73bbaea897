"""Benchmark method descriptor with resolved lifecycle hooks.

Usage:
    from benchlet.element.benchmark_method import BenchmarkMethod

    # Every benchmark of a class
    methods = BenchmarkMethod.discover(SortBench)

    # A single one, by name or by function
    method = BenchmarkMethod(SortBench, "bench_sorted")
    method.hooks(Role.BEFORE_FIRST_RUN)
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from benchlet.annotations import (
    HOOK_ROLES,
    BenchOptions,
    Role,
    bench_class_options_of,
    bench_options_of,
    roles_of,
)
from benchlet.element.validator import check_declared_method
from benchlet.exceptions import BenchmarkDefinitionError


def _class_functions(cls: type) -> dict[str, Callable[..., Any]]:
    """Plain functions visible on ``cls``, base classes first, overrides applied."""
    members: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        members.update(vars(klass))
    return {name: attr for name, attr in members.items() if inspect.isfunction(attr)}


class BenchmarkMethod:
    """A benchmark method of a class and the hooks that surround it.

    Resolution happens once, at construction; the result is immutable.

    Raises:
        BenchmarkDefinitionError: If the method is not a valid benchmark or
            the class declares its hooks ambiguously.
    """

    def __init__(self, declaring_class: type, method: Callable[..., Any] | str) -> None:
        if isinstance(method, str):
            found = inspect.getattr_static(declaring_class, method, None)
            if found is None:
                raise BenchmarkDefinitionError(
                    declaring_class, f"no method named {method!r}"
                )
            method = found

        error = check_declared_method(declaring_class, method, Role.BENCH)
        if error is not None:
            raise BenchmarkDefinitionError(declaring_class, str(error)) from error

        roles = roles_of(method)
        if Role.SKIP in roles:
            raise BenchmarkDefinitionError(
                declaring_class, f"{method.__name__} is marked skip_bench"
            )
        hook_roles = sorted(role.value for role in roles if role.is_hook)
        if hook_roles:
            raise BenchmarkDefinitionError(
                declaring_class,
                f"{method.__name__} cannot be both a benchmark and "
                f"{', '.join(hook_roles)}",
            )

        self._declaring_class = declaring_class
        self._method = method
        self._roles = roles | {Role.BENCH}

        options = bench_options_of(method) or BenchOptions()
        class_options = bench_class_options_of(declaring_class)
        self._runs = options.runs
        if self._runs is None and class_options is not None:
            self._runs = class_options.runs

        functions = _class_functions(declaring_class)
        self._hooks: dict[Role, tuple[Callable[..., Any], ...]] = {
            role: self._resolve_hooks(role, options, functions) for role in HOOK_ROLES
        }

    def _resolve_hooks(
        self,
        role: Role,
        options: BenchOptions,
        functions: dict[str, Callable[..., Any]],
    ) -> tuple[Callable[..., Any], ...]:
        name = options.hook_name(role)
        if name is not None:
            if name not in functions:
                raise BenchmarkDefinitionError(
                    self._declaring_class,
                    f"{role.value} method {name!r} of {self.name} does not exist",
                )
            return (functions[name],)

        tagged = tuple(func for func in functions.values() if role in roles_of(func))
        if role.is_unique and len(tagged) > 1:
            names = ", ".join(func.__name__ for func in tagged)
            raise BenchmarkDefinitionError(
                self._declaring_class,
                f"only one {role.value} method allowed, found: {names}",
            )
        return tagged

    @classmethod
    def discover(cls, declaring_class: type) -> list[BenchmarkMethod]:
        """Find every benchmark method of a class, in definition order.

        Methods decorated with ``@bench`` always count. On a ``@bench_class``
        class, every public method taking only ``self`` and carrying no
        lifecycle decorator counts too. ``@skip_bench`` excludes a method.
        """
        is_bench_class = bench_class_options_of(declaring_class) is not None
        methods = []
        for func in _class_functions(declaring_class).values():
            roles = roles_of(func)
            if Role.SKIP in roles:
                continue
            if Role.BENCH in roles:
                methods.append(cls(declaring_class, func))
            elif (
                is_bench_class
                and not roles
                and check_declared_method(declaring_class, func, Role.BENCH) is None
            ):
                methods.append(cls(declaring_class, func))
        return methods

    @property
    def declaring_class(self) -> type:
        """Class declaring (or inheriting) the method."""
        return self._declaring_class

    @property
    def method(self) -> Callable[..., Any]:
        """The underlying function."""
        return self._method

    @property
    def name(self) -> str:
        """Qualified ``Class.method`` name."""
        return f"{self._declaring_class.__name__}.{self._method.__name__}"

    @property
    def roles(self) -> frozenset[Role]:
        """Roles carried by the method itself."""
        return self._roles

    @property
    def runs(self) -> int | None:
        """Runs requested through decorators, None when left to the driver."""
        return self._runs

    def get_runs(self, default: int) -> int:
        """Number of runs, falling back to ``default``."""
        return self._runs if self._runs is not None else default

    def hooks(self, role: Role) -> tuple[Callable[..., Any], ...]:
        """Hook functions for ``role``, in the order they run."""
        return self._hooks[role]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BenchmarkMethod):
            return NotImplemented
        return (
            self._declaring_class is other._declaring_class
            and self._method is other._method
        )

    def __hash__(self) -> int:
        return hash((self._declaring_class, self._method))

    def __repr__(self) -> str:
        return f"BenchmarkMethod({self.name})"
