# src/taskboard/records/errors.py

from __future__ import annotations


class RecordStoreError(RuntimeError):
    """
    An unexpected failure while reading or mutating a record store.

    Distinct from "not found", which services report as None / False.
    """


class FixtureError(RecordStoreError):
    """Seed data could not be loaded (missing file, bad JSON, bad record)."""
