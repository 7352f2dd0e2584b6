import io
import socket
import threading

import pytest

from tuplas.protocol import (
    Op,
    ProtocolError,
    pack_coord,
    pack_doubles,
    pack_int,
    pack_string,
    pack_tuple,
    read_coord,
    read_doubles,
    read_status,
    read_string,
)
from tuplas.server import TupleServer, handle_request, main
from tuplas.store import Coord, TupleStore


def request(op, payload=b""):
    return io.BytesIO(bytes([op]) + payload)


@pytest.fixture
def store():
    return TupleStore()


def test_set_value_stores_tuple(store):
    reply = handle_request(
        store, request(Op.SET_VALUE, pack_tuple(100, "User_0", [1.5, 2.5], Coord(3, 4)))
    )
    assert reply == b"\x00"
    record = store.get_value(100)
    assert record.value1 == "User_0"
    assert record.value2 == (1.5, 2.5)
    assert record.value3 == Coord(3, 4)


def test_set_value_duplicate_is_rejected(store):
    store.set_value(1, "a", [1.0], Coord(0, 0))
    reply = handle_request(store, request(Op.SET_VALUE, pack_tuple(1, "b", [2.0], Coord(1, 1))))
    assert reply == b"\x01"
    assert store.get_value(1).value1 == "a"


def test_set_value_invalid_vector_is_rejected(store):
    reply = handle_request(store, request(Op.SET_VALUE, pack_tuple(1, "a", [], Coord(0, 0))))
    assert reply == b"\x01"
    assert len(store) == 0


def test_truncated_set_value_answers_error(store):
    reply = handle_request(store, request(Op.SET_VALUE, pack_int(5) + pack_int(10)))
    assert reply == b"\x01"
    assert not store.exist(5)


def test_get_value_reply_round_trip(store):
    store.set_value(7, "héllo", [0.1, -2.0, 3.25], Coord(-5, 6))
    stream = io.BytesIO(handle_request(store, request(Op.GET_VALUE, pack_int(7))))
    assert read_status(stream) == 0
    assert read_string(stream) == "héllo"
    assert read_doubles(stream) == (0.1, -2.0, 3.25)
    assert read_coord(stream) == Coord(-5, 6)
    assert stream.read() == b""


def test_get_value_reply_bytes(store):
    store.set_value(7, "ab", [1.0], Coord(1, 2))
    reply = handle_request(store, request(Op.GET_VALUE, pack_int(7)))
    assert reply == b"\x00" + pack_string("ab") + pack_doubles([1.0]) + pack_coord(Coord(1, 2))


def test_get_value_missing_key(store):
    assert handle_request(store, request(Op.GET_VALUE, pack_int(9))) == b"\x01"


def test_modify_value(store):
    store.set_value(3, "old", [1.0], Coord(0, 0))
    reply = handle_request(
        store, request(Op.MODIFY_VALUE, pack_tuple(3, "new", [9.5, 8.5], Coord(7, 8)))
    )
    assert reply == b"\x00"
    assert store.get_value(3).value2 == (9.5, 8.5)


def test_modify_missing_key(store):
    reply = handle_request(store, request(Op.MODIFY_VALUE, pack_tuple(3, "x", [1.0], Coord(0, 0))))
    assert reply == b"\x01"
    assert not store.exist(3)


def test_exist_reports_presence(store):
    assert handle_request(store, request(Op.EXIST, pack_int(4))) == b"\x00"
    store.set_value(4, "x", [1.0], Coord(0, 0))
    assert handle_request(store, request(Op.EXIST, pack_int(4))) == b"\x01"


def test_delete_key(store):
    store.set_value(5, "x", [1.0], Coord(0, 0))
    assert handle_request(store, request(Op.DELETE_KEY, pack_int(5))) == b"\x00"
    assert not store.exist(5)
    assert handle_request(store, request(Op.DELETE_KEY, pack_int(5))) == b"\xff"


def test_destroy_empties_store(store):
    for key in range(3):
        store.set_value(key, "x", [1.0], Coord(0, 0))
    assert handle_request(store, request(Op.DESTROY)) == b"\x00"
    assert len(store) == 0


def test_unknown_op_has_empty_reply(store):
    assert handle_request(store, request(99, pack_int(1))) == b""


def test_truncated_get_raises(store):
    with pytest.raises(ProtocolError):
        handle_request(store, request(Op.GET_VALUE, b"\x00\x01"))


def test_empty_request_raises(store):
    with pytest.raises(ProtocolError):
        handle_request(store, io.BytesIO(b""))


def test_server_answers_over_socket():
    store = TupleStore()
    server = TupleServer(("127.0.0.1", 0), store)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        with socket.create_connection((host, port), timeout=5) as sock:
            sock.sendall(bytes([Op.SET_VALUE]) + pack_tuple(42, "net", [2.0], Coord(1, 1)))
            assert sock.recv(1) == b"\x00"
        with socket.create_connection((host, port), timeout=5) as sock:
            sock.sendall(bytes([Op.EXIST]) + pack_int(42))
            assert sock.recv(1) == b"\x01"
        assert store.get_value(42).value1 == "net"
    finally:
        server.shutdown()
        server.server_close()
        thread.join()


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit):
        main(["--port", "not-a-number"])