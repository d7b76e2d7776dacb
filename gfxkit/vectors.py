"""Small dense floating-point vectors and the geometric helpers built on them."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from numbers import Real


class Vec:
    """A mutable vector of floats.

    ``Vec(x, y, ...)`` builds a vector from its components, ``Vec(seq)``
    from any iterable, and ``Vec(v, w)`` extends an existing vector ``v``
    by one more component ``w``.
    """

    __slots__ = ("_elt",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, *args) -> None:
        if len(args) == 1 and isinstance(args[0], Iterable):
            components = list(args[0])
        elif len(args) == 2 and isinstance(args[0], Vec):
            components = [*args[0], args[1]]
        else:
            components = list(args)
        if not components:
            raise ValueError("a vector needs at least one component")
        self._elt = [float(c) for c in components]

    def dim(self) -> int:
        """Return the number of components."""
        return len(self._elt)

    def dot(self, other: Vec) -> float:
        """Return the inner product with ``other``."""
        self._check_same_dim(other)
        return sum(a * b for a, b in zip(self._elt, other._elt))

    def _check_same_dim(self, other: Vec) -> None:
        if len(self._elt) != len(other._elt):
            raise ValueError(
                f"dimension mismatch: {len(self._elt)} vs {len(other._elt)}"
            )

    # Container protocol

    def __len__(self) -> int:
        return len(self._elt)

    def __iter__(self) -> Iterator[float]:
        return iter(self._elt)

    def __getitem__(self, index):
        return self._elt[index]

    def __setitem__(self, index: int, value: float) -> None:
        self._elt[index] = float(value)

    # Arithmetic

    def __add__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        self._check_same_dim(other)
        return Vec(a + b for a, b in zip(self._elt, other._elt))

    def __sub__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        self._check_same_dim(other)
        return Vec(a - b for a, b in zip(self._elt, other._elt))

    def __neg__(self) -> Vec:
        return Vec(-a for a in self._elt)

    def __mul__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        return Vec(a * s for a in self._elt)

    __rmul__ = __mul__

    def __truediv__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        return Vec(a / s for a in self._elt)

    def __matmul__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        return self.dot(other)

    def __iadd__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        self._check_same_dim(other)
        self._elt = [a + b for a, b in zip(self._elt, other._elt)]
        return self

    def __isub__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        self._check_same_dim(other)
        self._elt = [a - b for a, b in zip(self._elt, other._elt)]
        return self

    def __imul__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        self._elt = [a * s for a in self._elt]
        return self

    def __itruediv__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        self._elt = [a / s for a in self._elt]
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vec):
            return NotImplemented
        return self._elt == other._elt

    def __repr__(self) -> str:
        return f"Vec({', '.join(repr(a) for a in self._elt)})"

    def __str__(self) -> str:
        return " ".join(f"{a:g}" for a in self._elt)


def norm2(v: Vec) -> float:
    """Return the squared length of ``v``."""
    return v.dot(v)


def norm(v: Vec) -> float:
    """Return the length of ``v``."""
    return math.sqrt(norm2(v))


def unitize(v: Vec) -> Vec:
    """Scale ``v`` in place to unit length and return it.

    Zero vectors and vectors that are already unit length are left alone.
    """
    length2 = norm2(v)
    if length2 != 1.0 and length2 != 0.0:
        v /= math.sqrt(length2)
    return v


def perp(v: Vec) -> Vec:
    """Return the 2-D vector perpendicular to ``v``, rotated clockwise."""
    if v.dim() != 2:
        raise ValueError("perp requires a 2-D vector")
    return Vec(v[1], -v[0])


def cross4(a: Vec, b: Vec, c: Vec) -> Vec:
    """Return the 4-D generalised cross product of three 4-vectors."""
    if not (a.dim() == b.dim() == c.dim() == 4):
        raise ValueError("cross4 requires 4-D vectors")
    d1 = b[2] * c[3] - b[3] * c[2]
    d2 = b[1] * c[3] - b[3] * c[1]
    d3 = b[1] * c[2] - b[2] * c[1]
    d4 = b[0] * c[3] - b[3] * c[0]
    d5 = b[0] * c[2] - b[2] * c[0]
    d6 = b[0] * c[1] - b[1] * c[0]
    return Vec(
        -a[1] * d1 + a[2] * d2 - a[3] * d3,
        a[0] * d1 - a[2] * d4 + a[3] * d5,
        -a[0] * d2 + a[1] * d4 - a[3] * d6,
        a[0] * d3 - a[1] * d5 + a[2] * d6,
    )


def proj(v: Vec) -> Vec:
    """Project a homogeneous 4-vector into 3-space.

    The first three components are divided by ``w`` unless ``w`` is 0 or 1.
    """
    if v.dim() != 4:
        raise ValueError("proj requires a 4-D vector")
    u = Vec(v[0], v[1], v[2])
    w = v[3]
    if w != 1.0 and w != 0.0:
        u /= w
    return u


def tet_raw_normal(v1: Vec, v2: Vec, v3: Vec, v4: Vec) -> Vec:
    """Return the unnormalised normal of the tetrahedron spanned by four 4-D points."""
    return cross4(v2 - v1, v3 - v1, v4 - v1)


def tet_normal(v1: Vec, v2: Vec, v3: Vec, v4: Vec) -> Vec:
    """Return the unit normal of the tetrahedron spanned by four 4-D points."""
    return unitize(tet_raw_normal(v1, v2, v3, v4))