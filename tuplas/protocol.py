"""Wire format shared by the tuple client and server.

Integers are 32-bit signed big-endian, doubles are IEEE 754 big-endian,
strings are a 32-bit length followed by UTF-8 bytes, and statuses are a
single signed byte.
"""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import BinaryIO, Iterable

from tuplas.store import Coord

_INT = struct.Struct(">i")
_DOUBLE = struct.Struct(">d")
_STATUS = struct.Struct(">b")


class Op(IntEnum):
    """Operation codes sent as the first byte of a request."""

    SET_VALUE = 1
    GET_VALUE = 2
    MODIFY_VALUE = 3
    EXIST = 4
    DELETE_KEY = 5
    DESTROY = 6


class ProtocolError(Exception):
    """Raised on malformed, truncated or unencodable messages."""


def pack_int(value: int) -> bytes:
    """Encode a 32-bit signed integer."""
    try:
        return _INT.pack(value)
    except struct.error as exc:
        raise ProtocolError(f"cannot encode {value!r} as a 32-bit integer") from exc


def pack_string(text: str) -> bytes:
    """Encode a length-prefixed UTF-8 string."""
    data = text.encode("utf-8")
    return pack_int(len(data)) + data


def pack_doubles(values: Iterable[float]) -> bytes:
    """Encode a count followed by that many doubles."""
    try:
        encoded = [_DOUBLE.pack(float(value)) for value in values]
    except (struct.error, TypeError, ValueError) as exc:
        raise ProtocolError("cannot encode vector of doubles") from exc
    return pack_int(len(encoded)) + b"".join(encoded)


def pack_coord(coord: Coord) -> bytes:
    """Encode a coordinate as two integers, x then y."""
    return pack_int(coord.x) + pack_int(coord.y)


def pack_tuple(key: int, value1: str, value2: Iterable[float], value3: Coord) -> bytes:
    """Encode key, value1, value2 and value3 in request order."""
    return pack_int(key) + pack_string(value1) + pack_doubles(value2) + pack_coord(value3)


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``stream``."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            raise ProtocolError(
                f"connection closed with {remaining} of {size} bytes missing"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_int(stream: BinaryIO) -> int:
    """Read a 32-bit signed integer."""
    return _INT.unpack(read_exact(stream, _INT.size))[0]


def _read_length(stream: BinaryIO, what: str) -> int:
    length = read_int(stream)
    if length < 0:
        raise ProtocolError(f"negative {what} length {length}")
    return length


def read_string(stream: BinaryIO) -> str:
    """Read a length-prefixed UTF-8 string."""
    length = _read_length(stream, "string")
    data = read_exact(stream, length)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ProtocolError("string is not valid UTF-8") from exc


def read_doubles(stream: BinaryIO) -> tuple[float, ...]:
    """Read a count followed by that many doubles."""
    count = _read_length(stream, "vector")
    data = read_exact(stream, count * _DOUBLE.size)
    return tuple(value for (value,) in _DOUBLE.iter_unpack(data))


def read_coord(stream: BinaryIO) -> Coord:
    """Read a coordinate encoded as two integers."""
    x = read_int(stream)
    y = read_int(stream)
    return Coord(x, y)


def read_status(stream: BinaryIO) -> int:
    """Read a one-byte signed status."""
    return _STATUS.unpack(read_exact(stream, _STATUS.size))[0]


def read_tuple(stream: BinaryIO) -> tuple[int, str, tuple[float, ...], Coord]:
    """Read key, value1, value2 and value3 in request order."""
    key = read_int(stream)
    value1 = read_string(stream)
    value2 = read_doubles(stream)
    value3 = read_coord(stream)
    return key, value1, value2, value3