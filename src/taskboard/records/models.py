# src/taskboard/records/models.py

"""
Record base type and value coercion helpers.

Every entity is a slotted dataclass deriving from Record. The class-level
attributes describe how the generic CRUD service treats the entity:

- SEARCH_FIELDS: text fields matched by search()
- CLEARABLE_FIELDS: a patch key wins even when its value is empty
- COERCERS: per-field conversion of raw (JSON-ish) input values
- TOUCH_FIELD: timestamp set to "now" on create and on every update
- TOUCH_FROM_PATCH: an update may set TOUCH_FIELD explicitly instead
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Callable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Self

from dateutil.parser import isoparse

RecordId = int

# Never taken from a patch.
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})

_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}


def parse_record_id(raw: Any) -> RecordId | None:
    """
    Resolve a caller-supplied identifier.

    Accepts an int or a string of digits; anything else resolves to None
    (which callers treat as "not found").
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        s = raw.strip()
        if s.isdigit():
            return int(s)
    return None


def coerce_record_id(raw: Any) -> RecordId | None:
    """Strict variant used for reference fields: empty -> None, junk -> ValueError."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    rid = parse_record_id(raw)
    if rid is None:
        raise ValueError(f"invalid record id: {raw!r}")
    return rid


def parse_timestamp(raw: Any) -> datetime | None:
    """
    Normalize a timestamp to a naive local datetime.

    ISO-8601 strings (including a trailing "Z") and aware datetimes are
    converted to local time; plain dates become local midnight.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, str):
        s = raw.strip()
        if not s:
            return None
        dt = isoparse(s)
    else:
        raise TypeError(f"cannot parse timestamp from {type(raw).__name__}")

    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def text(raw: Any) -> str:
    return "" if raw is None else str(raw)


def optional_text(raw: Any) -> str | None:
    return None if raw is None else str(raw)


def flag(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUE_STRINGS
    return bool(raw)


def integer(raw: Any) -> int:
    if isinstance(raw, str):
        return int(float(raw.strip()))
    return int(raw)


def number(raw: Any) -> float:
    if isinstance(raw, str):
        return float(raw.strip())
    return float(raw)


def round_half_up(value: float) -> int:
    """Nearest integer, halves rounded up (2.5 -> 3), unlike the built-in round()."""
    return math.floor(value + 0.5)


def string_list(raw: Any) -> list[str]:
    if not isinstance(raw, (list, tuple)):
        raise TypeError(f"expected a list, got {type(raw).__name__}")
    return [str(x) for x in raw]


def is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def to_plain(value: Any) -> Any:
    """JSON-friendly representation of record values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    return value


class Record:
    __slots__ = ()

    ENTITY: ClassVar[str] = "record"
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = ()
    CLEARABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"notes"})
    COERCERS: ClassVar[Mapping[str, Callable[[Any], Any]]] = {}
    TOUCH_FIELD: ClassVar[str | None] = None
    TOUCH_FROM_PATCH: ClassVar[bool] = False

    id: RecordId

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in dataclasses.fields(cls))  # type: ignore[arg-type]

    @classmethod
    def coerce(cls, name: str, raw: Any) -> Any:
        fn = cls.COERCERS.get(name)
        return fn(raw) if fn is not None else raw

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build a record from seed data, keeping its id and timestamps."""
        names = cls.field_names()
        values = {k: cls.coerce(k, v) for k, v in data.items() if k in names and v is not None}
        if "id" not in values:
            raise ValueError(f"{cls.ENTITY} record without id")
        values["id"] = coerce_record_id(values["id"])
        return cls(**values)

    @classmethod
    def from_data(cls, record_id: RecordId, data: Mapping[str, Any], now: datetime) -> Self:
        """
        Build a new record for create().

        Blank or omitted fields take the dataclass defaults; the id and the
        creation / touch timestamps are always assigned here.
        """
        values: dict[str, Any] = {}
        for name in cls.field_names() - IMMUTABLE_FIELDS:
            raw = data.get(name)
            if is_blank(raw):
                continue
            values[name] = cls.coerce(name, raw)

        values["id"] = record_id
        values["created_at"] = now
        if cls.TOUCH_FIELD:
            values[cls.TOUCH_FIELD] = now
        cls._complete_new(values, now)
        return cls(**values)

    def merge(self, patch: Mapping[str, Any], now: datetime) -> Self:
        """
        Return a copy with the patch applied.

        Ordinary fields keep their value when the patch value is None or a
        blank string; CLEARABLE_FIELDS take whatever the patch holds.
        Unknown keys and identity fields are ignored.
        """
        names = self.field_names()
        changes: dict[str, Any] = {}
        for key, raw in patch.items():
            if key not in names or key in IMMUTABLE_FIELDS:
                continue
            if key in self.CLEARABLE_FIELDS:
                changes[key] = self.coerce(key, raw)
            elif not is_blank(raw):
                changes[key] = self.coerce(key, raw)

        touch = self.TOUCH_FIELD
        if touch and (touch not in changes or not self.TOUCH_FROM_PATCH):
            changes[touch] = now
        self._complete_changes(changes, now)
        return dataclasses.replace(self, **changes)  # type: ignore[type-var]

    # Hooks for entity-specific bookkeeping.

    @classmethod
    def _complete_new(cls, values: dict[str, Any], now: datetime) -> None:
        return

    def _complete_changes(self, changes: dict[str, Any], now: datetime) -> None:
        return

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over SEARCH_FIELDS (term already lowercased)."""
        for name in self.SEARCH_FIELDS:
            value = getattr(self, name, None)
            if value and term in str(value).lower():
                return True
        return False

    def to_dict(self) -> dict[str, Any]:
        return to_plain(self)
