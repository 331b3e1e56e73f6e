# models/registry.py

"""
Shared behavior for the ordered, capacity-bounded record registries.

Records are kept in insertion order in a plain list. Removal is stable: later records shift
left and keep their relative order. The capacity bound is checked explicitly on insert.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator

from core.response import ErrorCode, Response
from models.types import RecordType


class OrderedRegistry(Generic[RecordType]):

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("Registry capacity cannot be negative.")
        self._capacity: int = capacity
        self._records: list[RecordType] = []

    # === properties ===

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._records) >= self._capacity

    # === data accessors ===

    def list(self) -> list[RecordType]:
        return self._records.copy()

    def _index_where(self, predicate: Callable[[RecordType], bool]) -> int:
        for index, record in enumerate(self._records):
            if predicate(record):
                return index
        return -1

    # === data manipulators ===

    def _require_capacity(self, record_name: str) -> Response | None:
        if self.is_full:
            return Response.fail(
                detail=f"Maximum number of {record_name} reached ({self._capacity}).",
                error=ErrorCode.CAPACITY_EXCEEDED,
            )
        return None

    def _remove_at(self, index: int) -> RecordType:
        return self._records.pop(index)

    # === dunder methods ===

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RecordType]:
        return iter(self._records.copy())

    def __getitem__(self, index: int) -> RecordType:
        return self._records[index]
