"""A small key/value list where newer entries shadow older ones."""

from __future__ import annotations

from typing import Iterator

MAX_KEY_LENGTH = 256


class KeyList:
    """Ordered collection of (key, value) pairs, newest first.

    Setting a key never replaces an existing entry: the new entry is placed
    at the front and hides older entries with the same key.
    """

    def __init__(self) -> None:
        # Stored oldest first; iteration walks it backwards.
        self._entries: list[tuple[str, int]] = []

    def set(self, key: str, value: int) -> None:
        """Place a new entry at the front of the list."""
        if len(key) >= MAX_KEY_LENGTH:
            raise ValueError(f"key must be shorter than {MAX_KEY_LENGTH} characters")
        self._entries.append((key, value))

    def get(self, key: str) -> int:
        """Return the value of the newest entry with ``key``."""
        for entry_key, value in self:
            if entry_key == key:
                return value
        raise KeyError(key)

    def delete(self, key: str) -> bool:
        """Remove the newest entry with ``key``; report whether one was found."""
        for index in range(len(self._entries) - 1, -1, -1):
            if self._entries[index][0] == key:
                del self._entries[index]
                return True
        return False

    def destroy(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return reversed(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def format_lines(self) -> list[str]:
        """Describe each entry, newest first."""
        return [f"Key={key}    value={value}" for key, value in self]


def main(argv=None) -> int:
    """Fill a list with ten entries, print it, then empty it."""
    keys = KeyList()
    for i in range(10):
        keys.set(str(i), i)
    for line in keys.format_lines():
        print(line)
    for i in range(10):
        keys.delete(str(i))
    keys.destroy()
    return 0