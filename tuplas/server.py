"""TCP server that exposes a TupleStore over the tuple wire protocol."""

from __future__ import annotations

import argparse
import logging
import socketserver
import struct
from typing import BinaryIO

from tuplas.protocol import (
    Op,
    ProtocolError,
    pack_coord,
    pack_doubles,
    pack_string,
    read_exact,
    read_int,
    read_tuple,
)
from tuplas.store import StoreError, TupleStore

logger = logging.getLogger(__name__)

DEFAULT_PORT = 4500


def _status(value: int) -> bytes:
    return struct.pack(">b", value)


def _handle_set(store: TupleStore, stream: BinaryIO) -> bytes:
    # A malformed set request is still answered with an error status.
    try:
        key, value1, value2, value3 = read_tuple(stream)
    except ProtocolError as exc:
        logger.warning("malformed set_value request: %s", exc)
        return _status(1)
    try:
        store.set_value(key, value1, value2, value3)
    except StoreError as exc:
        logger.info("set_value(%d) rejected: %s", key, exc)
        return _status(1)
    return _status(0)


def _handle_get(store: TupleStore, stream: BinaryIO) -> bytes:
    key = read_int(stream)
    try:
        record = store.get_value(key)
    except StoreError:
        return _status(1)
    return (
        _status(0)
        + pack_string(record.value1)
        + pack_doubles(record.value2)
        + pack_coord(record.value3)
    )


def _handle_modify(store: TupleStore, stream: BinaryIO) -> bytes:
    key, value1, value2, value3 = read_tuple(stream)
    try:
        store.modify_value(key, value1, value2, value3)
    except StoreError as exc:
        logger.info("modify_value(%d) rejected: %s", key, exc)
        return _status(1)
    return _status(0)


def _handle_exist(store: TupleStore, stream: BinaryIO) -> bytes:
    key = read_int(stream)
    return _status(1 if store.exist(key) else 0)


def _handle_delete(store: TupleStore, stream: BinaryIO) -> bytes:
    key = read_int(stream)
    try:
        store.delete_key(key)
    except StoreError:
        return _status(-1)
    return _status(0)


def _handle_destroy(store: TupleStore, stream: BinaryIO) -> bytes:
    store.destroy()
    return _status(0)


_HANDLERS = {
    Op.SET_VALUE: _handle_set,
    Op.GET_VALUE: _handle_get,
    Op.MODIFY_VALUE: _handle_modify,
    Op.EXIST: _handle_exist,
    Op.DELETE_KEY: _handle_delete,
    Op.DESTROY: _handle_destroy,
}


def handle_request(store: TupleStore, stream: BinaryIO) -> bytes:
    """Read one request from ``stream``, apply it to ``store`` and return the reply.

    An unknown operation code yields an empty reply. A truncated request
    raises ProtocolError, except for set_value, which answers with an error
    status.
    """
    op_code = read_exact(stream, 1)[0]
    try:
        op = Op(op_code)
    except ValueError:
        logger.warning("unknown operation code %d", op_code)
        return b""
    return _HANDLERS[op](store, stream)


class _RequestHandler(socketserver.StreamRequestHandler):
    def handle(self) -> None:
        logger.info("connection from %s:%d", *self.client_address[:2])
        try:
            reply = handle_request(self.server.store, self.rfile)
        except ProtocolError as exc:
            logger.warning("dropping request: %s", exc)
            return
        if reply:
            self.wfile.write(reply)


class TupleServer(socketserver.ThreadingTCPServer):
    """Threaded TCP server answering one request per connection."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, address, store: TupleStore | None = None) -> None:
        self.store = TupleStore() if store is None else store
        super().__init__(address, _RequestHandler)


def main(argv=None) -> int:
    """Run the tuple server until interrupted."""
    parser = argparse.ArgumentParser(description="Serve a tuple store over TCP.")
    parser.add_argument("--host", default="0.0.0.0", help="address to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    with TupleServer((args.host, args.port)) as server:
        logger.info("listening on %s:%d", *server.server_address[:2])
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("shutting down")
    return 0