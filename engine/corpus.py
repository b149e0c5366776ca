"""
Course corpus: record model and loading.

The corpus is a JSON array of course objects stored in data/courses.json.
It is read once at startup and handed to the ranking engine as an
immutable tuple of Records; nothing mutates it afterwards.

Public API:
    Record
    CorpusError
    parse_corpus(raw)  → tuple[Record, ...]
    load_corpus(path)  → tuple[Record, ...]
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from engine.config import COURSES_FILE

log = logging.getLogger("engine")

TEXT_FIELDS = ("title", "description", "category", "instructor")


class CorpusError(Exception):
    """The corpus is not a well-formed sequence of course records."""


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str = ""
    description: str = ""
    category: str = ""
    price: int | float = 0
    instructor: str = ""

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("price")
    @classmethod
    def _non_negative(cls, value: int | float) -> int | float:
        if value < 0:
            raise ValueError("price must be non-negative")
        return value


def parse_corpus(raw: Any) -> tuple[Record, ...]:
    """
    Validate decoded JSON into a tuple of Records.

    Raises CorpusError if `raw` is not a list of objects, if any object fails
    validation, or if two records share an id.
    """
    if isinstance(raw, (str, bytes, dict)) or not isinstance(raw, Sequence):
        raise CorpusError(f"expected a JSON array of courses, got {type(raw).__name__}")

    records: list[Record] = []
    seen: set[int] = set()
    for pos, item in enumerate(raw):
        if not isinstance(item, dict):
            raise CorpusError(f"entry {pos} is {type(item).__name__}, not an object")
        try:
            record = Record.model_validate(item)
        except ValidationError as exc:
            raise CorpusError(f"entry {pos} is invalid: {exc}") from exc
        if record.id in seen:
            raise CorpusError(f"duplicate course id {record.id} at entry {pos}")
        seen.add(record.id)
        records.append(record)

    return tuple(records)


def load_corpus(path: Path = COURSES_FILE) -> tuple[Record, ...]:
    if not path.exists():
        raise FileNotFoundError(f"courses.json not found at {path}.")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CorpusError(f"{path.name} is not valid JSON: {exc}") from exc

    corpus = parse_corpus(raw)
    log.info("Loaded %d courses from %s", len(corpus), path.name)
    return corpus
