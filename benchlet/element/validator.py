"""Structural checks and invocation of benchmark and hook methods.

Both operations return an error value instead of raising, so callers decide
how a failing method affects the rest of a run.
"""

from __future__ import annotations

import inspect
from typing import Any

from benchlet.annotations import Role
from benchlet.exceptions import MethodCheckError, MethodInvocationError

_VOID_ANNOTATIONS = (inspect.Signature.empty, None, type(None), "None")


def _shape_problem(method: Any) -> str | None:
    """Describe why ``method`` cannot be called as ``method(instance)``.

    The return check reads the annotation only; the method is never called.
    """
    if inspect.iscoroutinefunction(method) or inspect.isasyncgenfunction(method):
        return "async methods are not supported"
    if inspect.isgeneratorfunction(method):
        return "generator methods are not supported"
    if method.__name__.startswith("_"):
        return "method is not public"

    signature = inspect.signature(method)
    params = list(signature.parameters.values())
    if len(params) != 1 or params[0].kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        return "method must take no parameters besides self"
    if signature.return_annotation not in _VOID_ANNOTATIONS:
        return f"method must return None, not {signature.return_annotation!r}"
    return None


def check_declared_method(owner: type, method: Any, role: Role) -> MethodCheckError | None:
    """Check ``method`` against a class rather than an instance of it."""
    if not inspect.isfunction(method):
        return MethodCheckError(owner, method, role, "not a plain function")

    attr = inspect.getattr_static(owner, method.__name__, None)
    wrapped = isinstance(attr, staticmethod | classmethod)
    if (attr.__func__ if wrapped else attr) is not method:
        return MethodCheckError(
            owner, method, role, f"method is not declared on {owner.__name__}"
        )
    if wrapped:
        return MethodCheckError(
            owner, method, role, "static and class methods are not supported"
        )

    problem = _shape_problem(method)
    if problem is not None:
        return MethodCheckError(owner, method, role, problem)
    return None


def check_method(target: Any, method: Any, role: Role) -> MethodCheckError | None:
    """Check that ``method`` can be invoked on ``target`` in any lifecycle role.

    Args:
        target: Instance the method would be invoked on.
        method: Plain function, as found in the class body.
        role: Lifecycle role, carried into the error for attribution.

    Returns:
        None when the method is public, takes only ``self``, is annotated to
        return None (or not annotated) and is the attribute of that name on
        ``type(target)``; an error otherwise. Only the annotation is read: an
        unannotated method that returns a value still passes, and the value
        is discarded by ``invoke_method``.
    """
    return check_declared_method(type(target), method, role)


def invoke_method(target: Any, method: Any, role: Role) -> MethodInvocationError | None:
    """Invoke ``method`` on ``target`` once.

    Returns:
        None on success; an error wrapping whatever the call raised otherwise.
    """
    try:
        method(target)
    except Exception as e:
        return MethodInvocationError(type(target), method, role, e)
    return None
