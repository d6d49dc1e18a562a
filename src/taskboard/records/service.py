# src/taskboard/records/service.py

"""
Generic CRUD service over a RecordStore.

One implementation serves every entity; entity behavior lives on the
record type (see records/models.py) and in the small hook methods that
subclasses override (_build_new, _ids_to_delete).

Contract:
- every operation is a coroutine that first awaits the simulated latency,
  then touches the store without awaiting again (atomic per operation)
- results are copies; the store is never exposed
- "not found" is None / False, logged at WARNING
- unexpected failures are logged and raised as RecordStoreError
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Generic, TypeVar

from .errors import RecordStoreError
from .models import Record, RecordId, parse_record_id
from .store import RecordStore

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)

Clock = Callable[[], datetime]


@dataclass(frozen=True, slots=True)
class Latency:
    """Simulated per-operation delay in seconds."""

    get_all: float = 0.3
    get_by_id: float = 0.2
    create: float = 0.4
    update: float = 0.35
    delete: float = 0.3
    search: float = 0.25
    query: float = 0.2
    add_activity: float = 0.25
    convert: float = 0.4

    def scaled(self, factor: float) -> Latency:
        factor = max(0.0, float(factor))
        return Latency(**{f.name: getattr(self, f.name) * factor for f in fields(self)})


DEFAULT_LATENCY = Latency()
NO_LATENCY = DEFAULT_LATENCY.scaled(0)


class ReadOnlyService(Generic[R]):
    """Read side of the CRUD contract: get_all / get_by_id / search."""

    def __init__(
        self,
        store: RecordStore[R],
        *,
        latency: Latency = DEFAULT_LATENCY,
        clock: Clock = datetime.now,
    ) -> None:
        self._store = store
        self._latency = latency
        self._clock = clock

    @property
    def entity(self) -> str:
        return self._store.entity

    async def _delay(self, op: str) -> None:
        await asyncio.sleep(getattr(self._latency, op))

    @contextlib.contextmanager
    def _guard(self, op: str, record_id: Any = None) -> Iterator[None]:
        try:
            yield
        except RecordStoreError:
            raise
        except Exception as e:
            logger.exception("%s %s failed id=%s", self.entity, op, record_id)
            raise RecordStoreError(f"{self.entity} {op} failed: {e}") from e

    def _resolve(self, raw_id: Any, op: str) -> RecordId | None:
        rid = parse_record_id(raw_id)
        if rid is None or not self._store.contains(rid):
            logger.warning("%s %s: not found id=%r", self.entity, op, raw_id)
            return None
        return rid

    async def get_all(self) -> list[R]:
        await self._delay("get_all")
        return self._store.snapshot()

    async def get_by_id(self, record_id: Any) -> R | None:
        await self._delay("get_by_id")
        rid = self._resolve(record_id, "get_by_id")
        if rid is None:
            return None
        return self._store.get(rid)

    async def search(self, query: str | None) -> list[R]:
        await self._delay("search")
        if not query or not query.strip():
            return self._store.snapshot()

        term = query.strip().lower()
        with self._guard("search"):
            return self._store.select(lambda r: r.matches(term))

    async def _query(self, predicate: Callable[[R], bool]) -> list[R]:
        """Helper for the per-entity get_by_* lookups."""
        await self._delay("query")
        with self._guard("query"):
            return self._store.select(predicate)


class CrudService(ReadOnlyService[R]):
    """Full create / read / update / delete / search over one record type."""

    def _build_new(self, data: Mapping[str, Any], now: datetime) -> list[R] | None:
        """
        Records to append for create(); the first one is returned to the caller.

        None means the create is refused (reported like "not found").
        """
        record_type = self._store.record_type
        return [record_type.from_data(self._store.next_id(), data, now)]

    def _ids_to_delete(self, record_id: RecordId) -> set[RecordId]:
        return {record_id}

    async def create(self, data: Mapping[str, Any]) -> R | None:
        await self._delay("create")
        now = self._clock()

        with self._guard("create"):
            records = self._build_new(data, now)
            if not records:
                return None
            self._store.extend(records)

        created = records[0]
        logger.info("%s created id=%s extra=%s", self.entity, created.id, len(records) - 1)
        return self._store.get(created.id)

    async def update(self, record_id: Any, patch: Mapping[str, Any]) -> R | None:
        await self._delay("update")
        rid = self._resolve(record_id, "update")
        if rid is None:
            return None

        now = self._clock()
        with self._guard("update", rid):
            idx = self._store.index_of(rid)
            merged = self._store.at(idx).merge(patch, now)
            self._store.put(idx, merged)

        logger.info("%s updated id=%s", self.entity, rid)
        return self._store.get(rid)

    async def delete(self, record_id: Any) -> bool:
        await self._delay("delete")
        rid = self._resolve(record_id, "delete")
        if rid is None:
            return False

        with self._guard("delete", rid):
            ids = self._ids_to_delete(rid)
            removed = self._store.remove_ids(ids)

        logger.info("%s deleted id=%s removed=%s", self.entity, rid, removed)
        return True
