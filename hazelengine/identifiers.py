"""64-bit unique identifiers."""

from __future__ import annotations

import random

_MAX = (1 << 64) - 1
_engine = random.SystemRandom()


class UUID(int):
    """A 64-bit identifier; random unless a value is given."""

    def __new__(cls, value: int | None = None) -> "UUID":
        if value is None:
            value = _engine.getrandbits(64)
        value = int(value)
        if not 0 <= value <= _MAX:
            raise ValueError(f"UUID value out of 64-bit range: {value}")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"UUID({int(self)})"