# tuplas

A small store of tuples indexed by an integer key. Each tuple holds:

- `value1`: a text string of at most 255 bytes once encoded as UTF-8,
- `value2`: a vector of 1 to 32 floating-point numbers,
- `value3`: a `Coord` with integer `x` and `y` (an `(x, y)` pair is accepted too).

The store can be used directly in your own process (`tuplas.store`), or
served over TCP by `TupleServer` (`tuplas.server`) and reached through
`TupleClient` (`tuplas.client`). Both sides speak a compact big-endian
binary protocol defined in `tuplas.protocol`.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Using the store in-process

```python
from tuplas.store import Coord, KeyExistsError, TupleStore

store = TupleStore(max_tuples=100)   # max_tuples=None (the default) means unbounded
store.set_value(100, "SetValue Test", [1.11, 2.22, 3.33], Coord(5, 10))

record = store.get_value(100)        # a frozen TupleRecord
print(record.key, record.value1, record.value2, record.value3)

store.modify_value(100, "Modified Value", [6.66, 7.77, 8.88], Coord(35, 45))
print(store.exist(100), len(store))

try:
    store.set_value(100, "again", [1.0], Coord(0, 0))
except KeyExistsError:
    print("key 100 is already stored")

store.delete_key(100)
store.destroy()
```

`set_value` and `modify_value` return the stored `TupleRecord`. `value2` is
kept as a tuple of floats. `TupleStore` is guarded by a lock and can be
shared between threads.

Errors are raised as exceptions derived from `StoreError`:

- `KeyExistsError`: `set_value` with a key that is already stored,
- `KeyNotFoundError`: `get_value`, `modify_value` or `delete_key` with a
  key that is not stored (also a `LookupError`),
- `InvalidTupleError`: `value1` too long, `value2` empty or longer than 32,
  or values of the wrong type (also a `ValueError`),
- `StoreFullError`: a bounded store already holds `max_tuples` tuples.

`validate_tuple(value1, value2)` applies the same checks on its own and
returns `value2` as a tuple of floats.

## Running the server

```
tuplas-server [--host 0.0.0.0] [--port 4500]
```

`TupleServer` is a threaded TCP server holding one `TupleStore`. Each
connection carries a single request: an operation byte (`Op.SET_VALUE`,
`GET_VALUE`, `MODIFY_VALUE`, `EXIST`, `DELETE_KEY`, `DESTROY`) and its
arguments. The reply is one signed status byte, followed by the tuple's
`value1`, `value2` and `value3` for a successful lookup. An unknown operation
gets no reply; a truncated request is dropped.

To embed the server:

```python
from tuplas.server import TupleServer
from tuplas.store import TupleStore

with TupleServer(("127.0.0.1", 4500), TupleStore()) as server:
    server.serve_forever()
```

`handle_request(store, stream)` processes one request read from a binary
stream and returns the reply bytes, without any networking.

## Talking to the server

```python
from tuplas.client import TupleClient, client_from_env
from tuplas.store import Coord

client = TupleClient("127.0.0.1", 4500)   # timeout defaults to 30 seconds
client.set_value(7, "hello", [1.5, 2.5], Coord(1, 2))
print(client.get_value(7))
print(client.exist(7))
client.delete_key(7)
client.destroy()
```

Every call opens its own connection. `client_from_env()` builds a client from
the `IP_TUPLAS` and `PORT_TUPLAS` environment variables (or from a mapping
passed in).

- Network failures, malformed replies and missing or invalid environment
  variables raise `CommunicationError`.
- Invalid tuples are rejected locally with `InvalidTupleError`.
- A rejected `set_value` or `destroy` raises `StoreError`; a failed
  `get_value`, `modify_value` or `delete_key` raises `KeyNotFoundError`.

## Sample workloads

`tuplas-apps` runs one batch against the server named by `IP_TUPLAS` and
`PORT_TUPLAS` and prints a line per operation:

```
tuplas-apps insert  [--count 1000] [--first-key 100]
tuplas-apps read    [--count 100]  [--first-key 100]
tuplas-apps modify  [--count 100]  [--first-key 100]
tuplas-apps delete  [--count 100]  [--first-key 400]
tuplas-apps check   [--count 100]  [--first-key 150]
tuplas-apps destroy
```

The same workloads are available as functions in `tuplas.apps`
(`insert_users`, `read_users`, `modify_users`, `delete_range`, `check_range`,
which yield report lines, and `destroy_all`, which returns one). They accept
either a `TupleClient` or a local `TupleStore`.

## Key list

```
tuplas-keylist
```

Fills a `KeyList` with ten entries, prints them newest first and empties it.
`KeyList` (in `tuplas.keylist`) keeps string keys shorter than 256 characters
with integer values; `set` always adds a new entry at the front, shadowing
older ones with the same key. `get` returns the newest value or raises
`KeyError`, `delete` removes the newest matching entry and returns whether
one was found, and `format_lines` describes every entry.

## Exercises

```
tuplas-exercises args VALUE...
tuplas-exercises ints VALUE...
tuplas-exercises minmax NUMBER...
tuplas-exercises turns [--iterations 10] [--threads 2]
tuplas-exercises pi [--steps 10000000]
tuplas-exercises pi-strided [--steps 10000000] [--stride 20]
```

These print numbered arguments, parse arguments as integers, report the
minimum and maximum of integers, show threads taking strict turns, and
approximate pi by numerical integration (with timing). The functions behind
them are `describe_args`, `describe_ints`, `min_max`, `alternate_turns`,
`integrate_pi` and `integrate_pi_strided` in `tuplas.exercises`.

## What this package does not do

- Storage is in memory only: the server's tuples are lost when it stops, and
  nothing is written to disk.
- The protocol has no authentication or encryption; run the server only on
  trusted networks.
- Connections carry a single request each; there is no pipelining or
  persistent session.