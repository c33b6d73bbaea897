"""Lifecycle decorators for benchmark classes.

Decorators only tag functions and classes; resolution happens in
``benchlet.element.benchmark_method``.

Example:
    from benchlet.annotations import after_each_run, bench, before_first_run

    class SortBench:
        @before_first_run
        def build_input(self) -> None:
            self.data = list(range(100_000, 0, -1))

        @bench(runs=20)
        def bench_sorted(self) -> None:
            sorted(self.data)
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)

ROLES_ATTR = "__benchlet_roles__"
BENCH_OPTIONS_ATTR = "__benchlet_bench__"
BENCH_CLASS_ATTR = "__benchlet_bench_class__"


class Role(Enum):
    """Role a method plays in the benchmark lifecycle."""

    BENCH = "bench"
    SKIP = "skip_bench"
    BEFORE_FIRST_RUN = "before_first_run"
    BEFORE_EACH_RUN = "before_each_run"
    AFTER_EACH_RUN = "after_each_run"
    AFTER_LAST_RUN = "after_last_run"

    @property
    def is_hook(self) -> bool:
        """True for the four lifecycle hook roles."""
        return self in HOOK_ROLES

    @property
    def is_unique(self) -> bool:
        """True for hooks that may appear at most once per class."""
        return self in (Role.BEFORE_FIRST_RUN, Role.AFTER_LAST_RUN)


HOOK_ROLES = (
    Role.BEFORE_FIRST_RUN,
    Role.BEFORE_EACH_RUN,
    Role.AFTER_EACH_RUN,
    Role.AFTER_LAST_RUN,
)


@dataclass(frozen=True)
class BenchOptions:
    """Options given to ``@bench`` or ``@bench_class``.

    Hook names, when set, point at methods of the same class and take
    precedence over hooks found through decorators.
    """

    runs: int | None = None
    before_first_run: str | None = None
    before_each_run: str | None = None
    after_each_run: str | None = None
    after_last_run: str | None = None

    def hook_name(self, role: Role) -> str | None:
        """Explicit method name configured for a hook role, if any."""
        if not role.is_hook:
            return None
        name: str | None = getattr(self, role.value)
        return name or None


def _tag(func: F, role: Role) -> F:
    roles: frozenset[Role] = getattr(func, ROLES_ATTR, frozenset())
    setattr(func, ROLES_ATTR, roles | {role})
    return func


def roles_of(func: Any) -> frozenset[Role]:
    """Roles attached to a function by the decorators in this module."""
    roles: frozenset[Role] = getattr(func, ROLES_ATTR, frozenset())
    return roles


def bench_options_of(func: Any) -> BenchOptions | None:
    """Options of a ``@bench`` function."""
    options: BenchOptions | None = getattr(func, BENCH_OPTIONS_ATTR, None)
    return options


def bench_class_options_of(cls: type) -> BenchOptions | None:
    """Options of a ``@bench_class`` class (inherited by subclasses)."""
    options: BenchOptions | None = getattr(cls, BENCH_CLASS_ATTR, None)
    return options


def _validate_runs(runs: int | None) -> None:
    if runs is not None and runs < 1:
        raise ValueError(f"runs must be >= 1, got {runs}")


def bench(
    func: F | None = None,
    *,
    runs: int | None = None,
    before_first_run: str | None = None,
    before_each_run: str | None = None,
    after_each_run: str | None = None,
    after_last_run: str | None = None,
) -> Any:
    """Mark a method as a benchmark.

    Usable bare (``@bench``) or with options (``@bench(runs=10)``).
    """
    _validate_runs(runs)
    options = BenchOptions(
        runs=runs,
        before_first_run=before_first_run,
        before_each_run=before_each_run,
        after_each_run=after_each_run,
        after_last_run=after_last_run,
    )

    def decorate(f: F) -> F:
        setattr(f, BENCH_OPTIONS_ATTR, options)
        return _tag(f, Role.BENCH)

    if func is not None:
        return decorate(func)
    return decorate


def bench_class(cls: C | None = None, *, runs: int | None = None) -> Any:
    """Mark every public, argument-free, untagged method of a class as a benchmark."""
    _validate_runs(runs)

    def decorate(c: C) -> C:
        setattr(c, BENCH_CLASS_ATTR, BenchOptions(runs=runs))
        return c

    if cls is not None:
        return decorate(cls)
    return decorate


def skip_bench(func: F) -> F:
    """Exclude a method from ``@bench_class`` discovery."""
    return _tag(func, Role.SKIP)


def before_first_run(func: F) -> F:
    """Run once per class, before the first benchmark run."""
    return _tag(func, Role.BEFORE_FIRST_RUN)


def before_each_run(func: F) -> F:
    """Run before every benchmark run."""
    return _tag(func, Role.BEFORE_EACH_RUN)


def after_each_run(func: F) -> F:
    """Run after every benchmark run."""
    return _tag(func, Role.AFTER_EACH_RUN)


def after_last_run(func: F) -> F:
    """Run once per class with the after-run hooks."""
    return _tag(func, Role.AFTER_LAST_RUN)
