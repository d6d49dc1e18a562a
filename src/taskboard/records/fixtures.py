# src/taskboard/records/fixtures.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from .errors import FixtureError
from .models import Record

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


def read_fixture(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON array of objects. Seed data is required: any problem is fatal."""
    path = Path(path)
    try:
        data = json.loads(path.read_text("utf-8"))
    except FileNotFoundError as e:
        raise FixtureError(f"seed file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise FixtureError(f"seed file is not valid JSON: {path}: {e}") from e

    if not isinstance(data, list):
        raise FixtureError(f"seed file must hold a JSON array: {path}")

    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise FixtureError(f"{path}: item #{i} is not an object")
    return data


def load_records(path: str | Path, record_type: type[R]) -> list[R]:
    items = read_fixture(path)
    out: list[R] = []
    for i, item in enumerate(items):
        try:
            out.append(record_type.from_dict(item))
        except (TypeError, ValueError) as e:
            raise FixtureError(f"{path}: bad {record_type.ENTITY} record #{i}: {e}") from e
    logger.info("Loaded %d %s records from %s", len(out), record_type.ENTITY, path)
    return out
