"""A single scheduled execution of a benchmark method."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from benchlet.element.benchmark_method import BenchmarkMethod


class BenchmarkElement:
    """One run of a benchmark method.

    Elements compare by identity: two elements for the same method are
    different runs, yet they share the executor of their declaring class.
    """

    __slots__ = ("_element_id", "_method")

    def __init__(self, method: BenchmarkMethod, element_id: int = 0) -> None:
        self._method = method
        self._element_id = element_id

    @property
    def method(self) -> BenchmarkMethod:
        return self._method

    @property
    def element_id(self) -> int:
        return self._element_id

    @property
    def declaring_class(self) -> type:
        return self._method.declaring_class

    def __repr__(self) -> str:
        return f"BenchmarkElement({self._method.name}, id={self._element_id})"
