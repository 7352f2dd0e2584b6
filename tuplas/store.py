"""Thread-safe in-memory storage of <key, value1, value2, value3> tuples."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Iterable

MAX_VALUE1_BYTES = 255
MIN_VALUE2_LENGTH = 1
MAX_VALUE2_LENGTH = 32


class StoreError(Exception):
    """Base class for every error reported by the tuple store."""


class KeyExistsError(StoreError):
    """Raised when inserting a key that is already stored."""


class KeyNotFoundError(StoreError, LookupError):
    """Raised when a key is not stored."""


class InvalidTupleError(StoreError, ValueError):
    """Raised when value1 or value2 fall outside their allowed ranges."""


class StoreFullError(StoreError):
    """Raised when a bounded store has no room for another tuple."""


@dataclass(frozen=True)
class Coord:
    """A pair of integer coordinates."""

    x: int
    y: int


@dataclass(frozen=True)
class TupleRecord:
    """One stored tuple."""

    key: int
    value1: str
    value2: tuple[float, ...]
    value3: Coord


def validate_tuple(value1: str, value2: Iterable[float]) -> tuple[float, ...]:
    """Check value1 and value2 against the service limits.

    value1 may hold at most 255 bytes once encoded as UTF-8, and value2 must
    have between 1 and 32 elements. Returns value2 as a tuple of floats.
    """
    if not isinstance(value1, str):
        raise InvalidTupleError("value1 must be a string")
    if len(value1.encode("utf-8")) > MAX_VALUE1_BYTES:
        raise InvalidTupleError(
            f"value1 is longer than {MAX_VALUE1_BYTES} bytes"
        )
    try:
        vector = tuple(float(item) for item in value2)
    except (TypeError, ValueError) as exc:
        raise InvalidTupleError("value2 must be a sequence of numbers") from exc
    if not MIN_VALUE2_LENGTH <= len(vector) <= MAX_VALUE2_LENGTH:
        raise InvalidTupleError(
            f"value2 must have between {MIN_VALUE2_LENGTH} and "
            f"{MAX_VALUE2_LENGTH} elements, got {len(vector)}"
        )
    return vector


def _as_coord(value3) -> Coord:
    if isinstance(value3, Coord):
        return value3
    try:
        x, y = value3
        return Coord(int(x), int(y))
    except (TypeError, ValueError) as exc:
        raise InvalidTupleError("value3 must be a Coord or an (x, y) pair") from exc


class TupleStore:
    """Key-value store of tuples, safe to share between threads.

    ``max_tuples`` bounds the number of stored tuples; ``None`` means no bound.
    """

    def __init__(self, max_tuples: int | None = None) -> None:
        if max_tuples is not None and max_tuples < 0:
            raise ValueError("max_tuples must not be negative")
        self._max_tuples = max_tuples
        self._records: dict[int, TupleRecord] = {}
        self._lock = threading.Lock()

    def destroy(self) -> None:
        """Remove every stored tuple."""
        with self._lock:
            self._records.clear()

    def set_value(self, key: int, value1: str, value2, value3) -> TupleRecord:
        """Insert a new tuple; the key must not be stored yet."""
        vector = validate_tuple(value1, value2)
        coord = _as_coord(value3)
        record = TupleRecord(key, value1, vector, coord)
        with self._lock:
            if key in self._records:
                raise KeyExistsError(f"key {key} already exists")
            if self._max_tuples is not None and len(self._records) >= self._max_tuples:
                raise StoreFullError(
                    f"store is full ({self._max_tuples} tuples)"
                )
            self._records[key] = record
        return record

    def get_value(self, key: int) -> TupleRecord:
        """Return the tuple stored under ``key``."""
        with self._lock:
            try:
                return self._records[key]
            except KeyError:
                raise KeyNotFoundError(f"key {key} not found") from None

    def modify_value(self, key: int, value1: str, value2, value3) -> TupleRecord:
        """Replace the values of an existing tuple."""
        vector = validate_tuple(value1, value2)
        coord = _as_coord(value3)
        record = TupleRecord(key, value1, vector, coord)
        with self._lock:
            if key not in self._records:
                raise KeyNotFoundError(f"key {key} not found")
            self._records[key] = record
        return record

    def delete_key(self, key: int) -> None:
        """Remove the tuple stored under ``key``."""
        with self._lock:
            try:
                del self._records[key]
            except KeyError:
                raise KeyNotFoundError(f"key {key} not found") from None

    def exist(self, key: int) -> bool:
        """Tell whether a tuple is stored under ``key``."""
        with self._lock:
            return key in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)