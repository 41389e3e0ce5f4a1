# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Unique object identifiers for file records.

Identifiers follow the 12-byte object id layout:

- 4 bytes: big-endian Unix seconds at creation
- 5 bytes: random value, fixed for the lifetime of the process
- 3 bytes: big-endian counter, seeded at random

The lowercase hex form (24 characters) is what ends up in storage paths.
"""

import os
import secrets
import threading
import time
from datetime import UTC, datetime


_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_COUNTER_MAX = 0xFFFFFF


class InvalidIdError(ValueError):
    """Raised when a value cannot be parsed as an object id."""


class _Generator:
    """Process-wide source of the random and counter id components."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pid = os.getpid()
        self._random = secrets.token_bytes(5)
        self._counter = secrets.randbelow(_COUNTER_MAX + 1)

    def next_bytes(self, timestamp: int) -> bytes:
        with self._lock:
            # Forked children must not reuse the parent's random component
            if os.getpid() != self._pid:
                self._pid = os.getpid()
                self._random = secrets.token_bytes(5)
            self._counter = (self._counter + 1) & _COUNTER_MAX
            counter = self._counter
        return (
            (timestamp & 0xFFFFFFFF).to_bytes(4, "big")
            + self._random
            + counter.to_bytes(3, "big")
        )


_generator = _Generator()


class ObjectId:
    """A 12-byte globally unique identifier.

    Create a fresh identifier with ``ObjectId()`` or parse an existing one
    with ``ObjectId.from_hex()``.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: bytes | None = None) -> None:
        if raw is None:
            raw = _generator.next_bytes(int(time.time()))
        elif len(raw) != 12:
            raise InvalidIdError(
                f"Object id must be 12 bytes, got {len(raw)}"
            )
        self._raw = bytes(raw)

    @classmethod
    def from_hex(cls, value: str) -> "ObjectId":
        """Parse a 24-character hex string.

        Args:
            value: Hex representation, case-insensitive.

        Returns:
            ObjectId with the decoded bytes.

        Raises:
            InvalidIdError: If value is not exactly 24 hex characters.
        """
        if (
            not isinstance(value, str)
            or len(value) != 24
            or not _HEX_DIGITS.issuperset(value)
        ):
            raise InvalidIdError(f"Invalid object id: {value!r}")
        return cls(bytes.fromhex(value))

    @property
    def binary(self) -> bytes:
        """Raw 12 bytes."""
        return self._raw

    @property
    def hex(self) -> str:
        """Lowercase 24-character hex representation."""
        return self._raw.hex()

    @property
    def generation_time(self) -> datetime:
        """UTC timestamp embedded in the first four bytes."""
        seconds = int.from_bytes(self._raw[:4], "big")
        return datetime.fromtimestamp(seconds, UTC)

    def __str__(self) -> str:
        return self.hex

    def __repr__(self) -> str:
        return f"ObjectId({self.hex!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectId):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)
