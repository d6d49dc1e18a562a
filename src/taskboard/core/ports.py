# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by view code and dashboards.

Consumers depend on Protocols instead of the concrete services.
This keeps the in-memory services swappable and makes testing easier.
"""

from collections.abc import Awaitable, Mapping
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class RecordReader(Protocol[T]):
    """Anything that can hand out a fresh copy of every record."""

    def get_all(self) -> Awaitable[list[T]]: ...


class CrudRepo(RecordReader[T], Protocol[T]):
    """
    The uniform per-entity contract.

    Not-found is reported as None (get_by_id / update) or False (delete).
    """

    def get_by_id(self, record_id: Any) -> Awaitable[T | None]: ...
    def create(self, data: Mapping[str, Any]) -> Awaitable[T | None]: ...
    def update(self, record_id: Any, patch: Mapping[str, Any]) -> Awaitable[T | None]: ...
    def delete(self, record_id: Any) -> Awaitable[bool]: ...
    def search(self, query: str | None) -> Awaitable[list[T]]: ...
