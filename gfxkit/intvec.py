"""Vectors stored as packed integers, read and written as floats.

Signed storage represents values in [-1, 1], unsigned storage values in
[0, 1], each scaled by the storage type's maximum value.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from gfxkit.vectors import Vec


class IntVec:
    """A fixed-length vector of integers scaled to a float range."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, t_max: int, n: int, signed: bool = True) -> None:
        if t_max <= 0:
            raise ValueError("t_max must be positive")
        if n <= 0:
            raise ValueError("vector length must be positive")
        self.t_max = t_max
        self.signed = signed
        self._data = [0] * n

    def _from_float(self, x: float) -> int:
        value = math.floor(min(x, 1.0) * self.t_max + 0.5)
        # Values outside the storage range wrap around like a narrowing cast.
        if self.signed:
            span = 2 * (self.t_max + 1)
            return (value + self.t_max + 1) % span - (self.t_max + 1)
        return value % (self.t_max + 1)

    def _to_float(self, s: int) -> float:
        return s / self.t_max

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, i: int) -> float:
        return self._to_float(self._data[i])

    def __iter__(self) -> Iterator[float]:
        return (self._to_float(s) for s in self._data)

    def set(self, i: int, x: float) -> None:
        """Store ``x`` at position ``i``."""
        self._data[i] = self._from_float(x)

    def fill(self, x: float) -> None:
        """Store ``x`` in every position."""
        packed = self._from_float(x)
        self._data = [packed] * len(self._data)

    def raw_data(self) -> tuple[int, ...]:
        """Return the stored integers."""
        return tuple(self._data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntVec):
            return NotImplemented
        return (
            self.t_max == other.t_max
            and self.signed == other.signed
            and self._data == other._data
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(t_max={self.t_max}, "
            f"signed={self.signed}, data={self._data})"
        )


class IntVec3(IntVec):
    """A packed integer 3-vector, such as an RGB colour or a normal."""

    def __init__(
        self,
        t_max: int,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
        signed: bool = True,
    ) -> None:
        super().__init__(t_max, 3, signed)
        self.pack((x, y, z))

    def pack(self, v: Iterable[float]) -> None:
        """Store the three components of ``v``."""
        components = list(v)
        if len(components) != 3:
            raise ValueError("IntVec3 needs exactly three components")
        for i, x in enumerate(components):
            self.set(i, x)

    def unpack(self) -> Vec:
        """Return the stored components as a float vector."""
        return Vec(self)