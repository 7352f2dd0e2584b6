"""Batch client programs that exercise the tuple service.

Each function takes any object offering the tuple service operations,
such as a TupleStore or a TupleClient. It yields the report lines
for the work it does.
"""

from __future__ import annotations

import argparse
import sys
from typing import Iterator

from tuplas.client import CommunicationError, client_from_env
from tuplas.store import Coord, StoreError


def insert_users(service, count: int = 1000, first_key: int = 100) -> Iterator[str]:
    """Insert ``count`` user tuples starting at ``first_key``."""
    for i in range(count):
        key = first_key + i
        value1 = f"User_{i}"
        value2 = (1.1 * i, 2.2 * i, 3.3 * i)
        value3 = Coord(i * 10, i * 20)
        try:
            service.set_value(key, value1, value2, value3)
        except CommunicationError:
            yield f"❌ Error en la comunicación (key={key})"
        except StoreError:
            yield f"❌ Error al insertar la tupla (key={key}, error de aplicación)"
        else:
            yield (
                f"Tupla insertada (key={key}, value1={value1}, "
                f"Coord=({value3.x},{value3.y}))"
            )


def read_users(service, count: int = 100, first_key: int = 100) -> Iterator[str]:
    """Read ``count`` tuples starting at ``first_key`` and describe them."""
    for i in range(count):
        key = first_key + i
        try:
            record = service.get_value(key)
        except CommunicationError:
            yield f"❌ app-cliente2: Error en la comunicación (key={key})"
        except StoreError:
            yield f"❌ app-cliente2: Tupla no encontrada (key={key})"
        else:
            yield f"Tupla leída: key = {key} "
            yield f"   - value1: {record.value1}"
            yield f"   - N_value2: {len(record.value2)}"
            yield "   - V_value2: " + "".join(f"{value:.2f} " for value in record.value2)
            yield f"   - Coord: ({record.value3.x}, {record.value3.y})"
            yield ""


def modify_users(service, count: int = 100, first_key: int = 100) -> Iterator[str]:
    """Replace the values of ``count`` tuples starting at ``first_key``."""
    for i in range(count):
        key = first_key + i
        value1 = f"Modified_User_{i}"
        value2 = (9.99 + i, 8.88 + i, 7.77 + i)
        value3 = Coord(100 + i, 200 + i)
        try:
            service.modify_value(key, value1, value2, value3)
        except CommunicationError:
            yield f"app-cliente3: Error en la comunicación (key={key})"
        except StoreError:
            yield f"app-cliente3: Error al modificar la tupla (key={key})"
        else:
            yield (
                f"Tupla modificada: key={key}, value1={value1}, "
                f"Coord=({value3.x},{value3.y}))"
            )


def delete_range(service, count: int = 100, first_key: int = 400) -> Iterator[str]:
    """Delete ``count`` consecutive keys starting at ``first_key``."""
    for key in range(first_key, first_key + count):
        try:
            service.delete_key(key)
        except CommunicationError:
            yield f"app-cliente4: Error en (key={key})"
        except StoreError:
            yield f"app-cliente4: Tupla no encontrada (key={key})"
        else:
            yield f"Tupla borrada (key={key})"


def check_range(service, count: int = 100, first_key: int = 150) -> Iterator[str]:
    """Report whether each of ``count`` keys starting at ``first_key`` exists."""
    for key in range(first_key, first_key + count):
        try:
            found = service.exist(key)
        except CommunicationError:
            yield f"Error en la comunicación con el servidor (key={key})"
        else:
            yield f"La clave {key} EXISTE" if found else f"La clave {key} NO EXISTE"


def destroy_all(service) -> str:
    """Remove every tuple and return the report line."""
    try:
        service.destroy()
    except CommunicationError:
        return "app-cliente6: Error en la comunicación"
    except StoreError:
        return "app-cliente6: Error al destruir las tuplas"
    return "app-cliente6: Todas las tuplas han sido destruidas."


_RANGE_COMMANDS = {
    "insert": (insert_users, 1000, 100, "insert user tuples"),
    "read": (read_users, 100, 100, "read tuples"),
    "modify": (modify_users, 100, 100, "modify tuples"),
    "delete": (delete_range, 100, 400, "delete tuples"),
    "check": (check_range, 100, 150, "check whether keys exist"),
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Exercise a tuple server named by IP_TUPLAS and PORT_TUPLAS."
    )
    commands = parser.add_subparsers(dest="command", required=True)
    for name, (func, count, first_key, help_text) in _RANGE_COMMANDS.items():
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("--count", type=int, default=count)
        sub.add_argument("--first-key", type=int, default=first_key)
        sub.set_defaults(func=func)
    commands.add_parser("destroy", help="remove every tuple")
    return parser


def main(argv=None) -> int:
    """Run one batch program against the configured tuple server."""
    args = _build_parser().parse_args(argv)
    try:
        service = client_from_env()
    except CommunicationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if args.command == "destroy":
        print(destroy_all(service))
    else:
        for line in args.func(service, args.count, args.first_key):
            print(line)
    return 0