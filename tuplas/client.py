"""Client side of the tuple service, speaking the TCP wire protocol."""

from __future__ import annotations

import os
import socket
from typing import BinaryIO, Callable, Mapping, TypeVar

from tuplas.protocol import (
    Op,
    ProtocolError,
    pack_int,
    pack_tuple,
    read_coord,
    read_doubles,
    read_status,
    read_string,
)
from tuplas.store import (
    Coord,
    KeyNotFoundError,
    StoreError,
    TupleRecord,
    validate_tuple,
)

_T = TypeVar("_T")


class CommunicationError(Exception):
    """Raised when the server cannot be reached or answers incorrectly."""


def _as_coord(value3) -> Coord:
    if isinstance(value3, Coord):
        return value3
    x, y = value3
    return Coord(int(x), int(y))


class TupleClient:
    """Remote tuple service; each call opens its own connection."""

    def __init__(self, host: str, port: int, timeout: float | None = 30.0) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout

    def _request(self, payload: bytes, reader: Callable[[BinaryIO], _T]) -> _T:
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
                sock.sendall(payload)
                with sock.makefile("rb") as stream:
                    return reader(stream)
        except (OSError, ProtocolError) as exc:
            raise CommunicationError(
                f"communication with {self.host}:{self.port} failed: {exc}"
            ) from exc

    def _tuple_payload(self, op: Op, key: int, value1: str, value2, value3) -> bytes:
        vector = validate_tuple(value1, value2)
        try:
            return bytes([op]) + pack_tuple(key, value1, vector, _as_coord(value3))
        except ProtocolError as exc:
            raise CommunicationError(f"cannot encode request: {exc}") from exc

    def _key_payload(self, op: Op, key: int) -> bytes:
        try:
            return bytes([op]) + pack_int(key)
        except ProtocolError as exc:
            raise CommunicationError(f"cannot encode request: {exc}") from exc

    def set_value(self, key: int, value1: str, value2, value3) -> None:
        """Insert a new tuple on the server."""
        payload = self._tuple_payload(Op.SET_VALUE, key, value1, value2, value3)
        if self._request(payload, read_status) != 0:
            raise StoreError(f"server rejected set_value for key {key}")

    def get_value(self, key: int) -> TupleRecord:
        """Fetch the tuple stored under ``key``."""

        def reader(stream: BinaryIO):
            if read_status(stream) != 0:
                return None
            return read_string(stream), read_doubles(stream), read_coord(stream)

        reply = self._request(self._key_payload(Op.GET_VALUE, key), reader)
        if reply is None:
            raise KeyNotFoundError(f"key {key} not found")
        value1, value2, value3 = reply
        return TupleRecord(key, value1, value2, value3)

    def modify_value(self, key: int, value1: str, value2, value3) -> None:
        """Replace the values of an existing tuple on the server."""
        payload = self._tuple_payload(Op.MODIFY_VALUE, key, value1, value2, value3)
        if self._request(payload, read_status) != 0:
            raise KeyNotFoundError(f"key {key} not found")

    def exist(self, key: int) -> bool:
        """Tell whether the server stores a tuple under ``key``."""
        status = self._request(self._key_payload(Op.EXIST, key), read_status)
        if status not in (0, 1):
            raise CommunicationError(f"unexpected exist status {status}")
        return status == 1

    def delete_key(self, key: int) -> None:
        """Remove the tuple stored under ``key`` on the server."""
        if self._request(self._key_payload(Op.DELETE_KEY, key), read_status) != 0:
            raise KeyNotFoundError(f"key {key} not found")

    def destroy(self) -> None:
        """Remove every tuple stored on the server."""
        if self._request(bytes([Op.DESTROY]), read_status) != 0:
            raise StoreError("server failed to destroy tuples")


def client_from_env(environ: Mapping[str, str] | None = None) -> TupleClient:
    """Build a client from the IP_TUPLAS and PORT_TUPLAS variables."""
    env = os.environ if environ is None else environ
    host = env.get("IP_TUPLAS")
    port_text = env.get("PORT_TUPLAS")
    if not host or not port_text:
        raise CommunicationError("IP_TUPLAS or PORT_TUPLAS is not defined")
    try:
        port = int(port_text)
    except ValueError as exc:
        raise CommunicationError(f"invalid PORT_TUPLAS value {port_text!r}") from exc
    return TupleClient(host, port)