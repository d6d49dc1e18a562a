# src/taskboard/records/store.py

from __future__ import annotations

import copy
import itertools
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

from .errors import FixtureError
from .models import Record, RecordId

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


class RecordStore(Generic[R]):
    """
    In-memory ordered collection backing one entity type.

    - records keep insertion order
    - ids come from a monotonic counter started past the largest seeded id,
      so ids are never reused within the process (even after deletes)
    - readers get deep copies; only the owning service mutates

    Every mutating method is a single synchronous step, so an operation
    either fully applies or leaves the list untouched.
    """

    def __init__(self, record_type: type[R], records: Iterable[R] = ()) -> None:
        self._record_type = record_type
        self._records: list[R] = list(records)

        seen: set[RecordId] = set()
        for r in self._records:
            if r.id in seen:
                raise FixtureError(f"duplicate {record_type.ENTITY} id {r.id}")
            seen.add(r.id)

        start = max(seen, default=0) + 1
        self._ids = itertools.count(start)
        logger.info("RecordStore ready entity=%s total=%s", self.entity, len(self._records))

    @property
    def record_type(self) -> type[R]:
        return self._record_type

    @property
    def entity(self) -> str:
        return self._record_type.ENTITY

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[R]:
        # Live records; callers inside the services must not leak them.
        return iter(self._records)

    def next_id(self) -> RecordId:
        return next(self._ids)

    # ---- reads (copies) ----

    def snapshot(self) -> list[R]:
        return [copy.deepcopy(r) for r in self._records]

    def select(self, predicate: Callable[[R], bool]) -> list[R]:
        return [copy.deepcopy(r) for r in self._records if predicate(r)]

    def get(self, record_id: RecordId) -> R | None:
        idx = self.index_of(record_id)
        return None if idx < 0 else copy.deepcopy(self._records[idx])

    def index_of(self, record_id: RecordId) -> int:
        for i, r in enumerate(self._records):
            if r.id == record_id:
                return i
        return -1

    def at(self, index: int) -> R:
        """Live record at index (service-internal)."""
        return self._records[index]

    def contains(self, record_id: RecordId) -> bool:
        return self.index_of(record_id) >= 0

    # ---- mutations ----

    def extend(self, records: Iterable[R]) -> None:
        items = list(records)
        self._records.extend(items)
        logger.debug("%s appended ids=%s", self.entity, [r.id for r in items])

    def put(self, index: int, record: R) -> None:
        self._records[index] = record
        logger.debug("%s replaced id=%s", self.entity, record.id)

    def remove_ids(self, ids: set[RecordId]) -> int:
        """Drop every record whose id is in ids; returns how many were removed."""
        if not ids:
            return 0
        kept = [r for r in self._records if r.id not in ids]
        removed = len(self._records) - len(kept)
        self._records = kept
        logger.debug("%s removed ids=%s count=%s", self.entity, sorted(ids), removed)
        return removed
