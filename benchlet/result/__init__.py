"""Result tree collecting benchmark measurements."""

from benchlet.result.results import (
    AbstractResult,
    ClassResult,
    MethodResult,
    OutputFormat,
    RunResult,
)

__all__ = [
    "AbstractResult",
    "ClassResult",
    "MethodResult",
    "OutputFormat",
    "RunResult",
]
