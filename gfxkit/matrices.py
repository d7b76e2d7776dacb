"""Dense square matrices of floats, with the 2x2 and 4x4 cases named."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from numbers import Real

from gfxkit.vectors import Vec, cross4, perp


def _rows_from_args(n: int, args: tuple, name: str) -> list[Vec]:
    """Build the rows of an ``n`` x ``n`` matrix from constructor arguments."""
    if not args:
        rows = [Vec([0.0] * n) for _ in range(n)]
    elif len(args) == 1 and isinstance(args[0], _SquareMat):
        rows = [Vec(r) for r in args[0]]
    elif len(args) == n and all(isinstance(a, Vec) for a in args):
        rows = [Vec(a) for a in args]
    elif len(args) == n * n and all(isinstance(a, Real) for a in args):
        rows = [Vec(args[i * n:(i + 1) * n]) for i in range(n)]
    else:
        raise TypeError(
            f"{name} takes no arguments, a matrix, "
            f"{n} row vectors or {n * n} numbers"
        )
    if any(r.dim() != n for r in rows):
        raise ValueError(f"rows of {name} must have {n} components")
    return rows


class _SquareMat:
    """Row-major square matrix whose rows are :class:`Vec` objects."""

    __slots__ = ("_rows",)
    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def _from_rows(cls, rows: Iterable[Vec]):
        obj = cls.__new__(cls)
        obj._rows = list(rows)
        return obj

    def dim(self) -> int:
        """Return the number of rows (and columns)."""
        return len(self._rows)

    def col(self, i: int) -> Vec:
        """Return column ``i`` as a new vector."""
        return Vec(row[i] for row in self._rows)

    def identity(self):
        """Overwrite this matrix with the identity and return it."""
        n = self.dim()
        self._rows = [Vec(1.0 if i == j else 0.0 for j in range(n)) for i in range(n)]
        return self

    def _check_same_dim(self, other: _SquareMat) -> None:
        if self.dim() != other.dim():
            raise ValueError(f"dimension mismatch: {self.dim()} vs {other.dim()}")

    # Container protocol

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Vec]:
        return iter(self._rows)

    def __getitem__(self, index):
        if isinstance(index, tuple):
            i, j = index
            return self._rows[i][j]
        return self._rows[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, tuple):
            i, j = index
            self._rows[i][j] = value
            return
        row = Vec(value)
        if row.dim() != self.dim():
            raise ValueError(f"row must have {self.dim()} components")
        self._rows[index] = row

    # Arithmetic

    def __add__(self, other):
        if not isinstance(other, _SquareMat):
            return NotImplemented
        self._check_same_dim(other)
        return type(self)._from_rows(a + b for a, b in zip(self._rows, other._rows))

    def __sub__(self, other):
        if not isinstance(other, _SquareMat):
            return NotImplemented
        self._check_same_dim(other)
        return type(self)._from_rows(a - b for a, b in zip(self._rows, other._rows))

    def __neg__(self):
        return type(self)._from_rows(-r for r in self._rows)

    def __mul__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        return type(self)._from_rows(r * s for r in self._rows)

    __rmul__ = __mul__

    def __truediv__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        return type(self)._from_rows(r / s for r in self._rows)

    def __matmul__(self, other):
        if isinstance(other, Vec):
            if other.dim() != self.dim():
                raise ValueError(
                    f"cannot multiply {self.dim()}x{self.dim()} matrix "
                    f"by {other.dim()}-vector"
                )
            return Vec(r.dot(other) for r in self._rows)
        if isinstance(other, _SquareMat):
            self._check_same_dim(other)
            cols = [other.col(j) for j in range(other.dim())]
            return type(self)._from_rows(
                Vec(r.dot(c) for c in cols) for r in self._rows
            )
        return NotImplemented

    def __iadd__(self, other):
        if not isinstance(other, _SquareMat):
            return NotImplemented
        self._check_same_dim(other)
        self._rows = [a + b for a, b in zip(self._rows, other._rows)]
        return self

    def __isub__(self, other):
        if not isinstance(other, _SquareMat):
            return NotImplemented
        self._check_same_dim(other)
        self._rows = [a - b for a, b in zip(self._rows, other._rows)]
        return self

    def __imul__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        self._rows = [r * s for r in self._rows]
        return self

    def __itruediv__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        self._rows = [r / s for r in self._rows]
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, _SquareMat):
            return NotImplemented
        return self._rows == other._rows

    def __repr__(self) -> str:
        rows = ", ".join(repr(r) for r in self._rows)
        return f"{type(self).__name__}({rows})"

    def __str__(self) -> str:
        return "\n".join(str(r) for r in self._rows)


class _MatN(_SquareMat):
    """Square matrix of any size, built from its rows."""

    def __init__(self, rows: Iterable[Iterable[float]]) -> None:
        self._rows = [Vec(r) for r in rows]
        if any(r.dim() != len(self._rows) for r in self._rows):
            raise ValueError("matrix must be square")


class Mat2(_SquareMat):
    """A 2x2 matrix: ``Mat2()``, ``Mat2(a, b, c, d)``, ``Mat2(row0, row1)`` or ``Mat2(m)``."""

    def __init__(self, *args) -> None:
        self._rows = _rows_from_args(2, args, type(self).__name__)

    def col(self, i: int) -> Vec:
        """Return column ``i`` as a new vector."""
        return Vec(self._rows[0][i], self._rows[1][i])

    def identity(self) -> Mat2:
        """Overwrite this matrix with the identity and return it."""
        self._rows = [Vec(1.0, 0.0), Vec(0.0, 1.0)]
        return self


class Mat4(_SquareMat):
    """A 4x4 matrix: ``Mat4()``, ``Mat4(r0, r1, r2, r3)``, ``Mat4(m)`` or 16 numbers."""

    def __init__(self, *args) -> None:
        self._rows = _rows_from_args(4, args, type(self).__name__)

    def col(self, i: int) -> Vec:
        """Return column ``i`` as a new vector."""
        r = self._rows
        return Vec(r[0][i], r[1][i], r[2][i], r[3][i])

    def transform_point(self, v: Vec) -> Vec:
        """Transform a 3-D point homogeneously and project it back to 3-space."""
        if v.dim() != 3:
            raise ValueError("transform_point requires a 3-D vector")
        u = Vec(v, 1.0)
        w = self._rows[3].dot(u)
        x, y, z = (self._rows[k].dot(u) for k in range(3))
        if w == 0.0:
            return Vec(x, y, z)
        return Vec(x / w, y / w, z / w)

    def __matmul__(self, other):
        if isinstance(other, Vec) and other.dim() == 3:
            return self.transform_point(other)
        return super().__matmul__(other)


def _matrix_from_rows(rows: Iterable[Vec]) -> _SquareMat:
    rows = [Vec(r) for r in rows]
    cls = {2: Mat2, 4: Mat4}.get(len(rows))
    if cls is None:
        return _MatN(rows)
    return cls._from_rows(rows)


def outer_product2(u: Vec, v: Vec | None = None) -> Mat2:
    """Return the 2x2 outer product of ``u`` and ``v`` (``v`` defaults to ``u``)."""
    if v is None:
        v = u
    if u.dim() != 2 or v.dim() != 2:
        raise ValueError("outer_product2 requires 2-D vectors")
    return Mat2(u[0] * v[0], u[0] * v[1], u[1] * v[0], u[1] * v[1])


def _cross3(a: Vec, b: Vec) -> Vec:
    return Vec(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def det(m) -> float:
    """Return the determinant of a 2x2, 3x3 or 4x4 matrix indexed as ``m[i, j]``."""
    n = m.dim()
    rows = [Vec(m[i, j] for j in range(n)) for i in range(n)]
    if n == 2:
        return rows[0][0] * rows[1][1] - rows[0][1] * rows[1][0]
    if n == 3:
        return rows[0].dot(_cross3(rows[1], rows[2]))
    if n == 4:
        return rows[0].dot(cross4(rows[1], rows[2], rows[3]))
    raise ValueError(f"determinant not supported for dimension {n}")


def trace(m) -> float:
    """Return the sum of the diagonal elements."""
    return sum(m[i, i] for i in range(m.dim()))


def transpose(m):
    """Return the transpose of ``m``; symmetric matrices come back as copies."""
    if isinstance(m, _SquareMat):
        return type(m)._from_rows(m.col(i) for i in range(m.dim()))
    copy = getattr(m, "copy", None)
    if copy is None:
        raise TypeError(f"cannot transpose {type(m).__name__}")
    return copy()


def adjoint2(m: Mat2) -> Mat2:
    """Return the cofactor matrix of a 2x2 matrix."""
    if m.dim() != 2:
        raise ValueError("adjoint2 requires a 2x2 matrix")
    return Mat2(perp(m[1]), -perp(m[0]))