"""Symmetric matrices stored as their packed upper triangle."""

from __future__ import annotations

from numbers import Real

from gfxkit.matrices import _matrix_from_rows
from gfxkit.vectors import Vec


class SymMat:
    """A symmetric ``dim`` x ``dim`` matrix; ``m[i, j]`` and ``m[j, i]`` share storage."""

    __slots__ = ("_n", "_elt")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, dim: int, fill: float = 0.0) -> None:
        if dim < 1:
            raise ValueError("dimension must be positive")
        self._n = dim
        self._elt = [float(fill)] * (dim * (dim + 1) // 2)

    def dim(self) -> int:
        """Return the number of rows (and columns)."""
        return self._n

    def size(self) -> int:
        """Return the number of stored elements."""
        return len(self._elt)

    def _index(self, i: int, j: int) -> int:
        n = self._n
        if not (0 <= i < n and 0 <= j < n):
            raise IndexError(f"index ({i}, {j}) out of range for dimension {n}")
        if i > j:
            i, j = j, i
        return self.size() - (n - i) * (n - i + 1) // 2 + (j - i)

    def __getitem__(self, index) -> float:
        i, j = index
        return self._elt[self._index(i, j)]

    def __setitem__(self, index, value: float) -> None:
        i, j = index
        self._elt[self._index(i, j)] = float(value)

    def row(self, i: int) -> Vec:
        """Return row ``i`` as a vector."""
        return Vec(self[i, j] for j in range(self._n))

    def col(self, j: int) -> Vec:
        """Return column ``j`` as a vector."""
        return Vec(self[i, j] for i in range(self._n))

    def fullmatrix(self):
        """Return an equivalent dense matrix (a Mat2 or Mat4 where the size fits)."""
        return _matrix_from_rows(self.row(i) for i in range(self._n))

    def trace(self) -> float:
        """Return the sum of the diagonal elements."""
        return sum(self[i, i] for i in range(self._n))

    def copy(self) -> SymMat:
        """Return an independent copy."""
        result = SymMat(self._n)
        result._elt = list(self._elt)
        return result

    def _with_elements(self, elements) -> SymMat:
        result = SymMat(self._n)
        result._elt = [float(x) for x in elements]
        return result

    def _check_same_dim(self, other: SymMat) -> None:
        if self._n != other._n:
            raise ValueError(f"dimension mismatch: {self._n} vs {other._n}")

    def __add__(self, other):
        if not isinstance(other, SymMat):
            return NotImplemented
        self._check_same_dim(other)
        return self._with_elements(a + b for a, b in zip(self._elt, other._elt))

    def __sub__(self, other):
        if not isinstance(other, SymMat):
            return NotImplemented
        self._check_same_dim(other)
        return self._with_elements(a - b for a, b in zip(self._elt, other._elt))

    def __neg__(self) -> SymMat:
        return self._with_elements(-a for a in self._elt)

    def __mul__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        return self._with_elements(a * s for a in self._elt)

    __rmul__ = __mul__

    def __truediv__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        return self._with_elements(a / s for a in self._elt)

    def __iadd__(self, other):
        if not isinstance(other, SymMat):
            return NotImplemented
        self._check_same_dim(other)
        self._elt = [a + b for a, b in zip(self._elt, other._elt)]
        return self

    def __isub__(self, other):
        if not isinstance(other, SymMat):
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

    def __matmul__(self, other):
        if isinstance(other, Vec):
            if other.dim() != self._n:
                raise ValueError(
                    f"cannot multiply {self._n}x{self._n} matrix by {other.dim()}-vector"
                )
            return Vec(self.row(i).dot(other) for i in range(self._n))
        if isinstance(other, SymMat):
            self._check_same_dim(other)
            n = self._n
            result = SymMat(n)
            for i in range(n):
                for j in range(i, n):
                    # The 4x4 product keeps the lower-triangle entries.
                    if n == 4:
                        result[i, j] = self.row(j).dot(other.col(i))
                    else:
                        result[i, j] = self.row(i).dot(other.col(j))
            return result
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, SymMat):
            return NotImplemented
        return self._n == other._n and self._elt == other._elt

    def __repr__(self) -> str:
        return f"SymMat({self._n}, elements={self._elt})"

    def __str__(self) -> str:
        return "\n".join(
            " ".join(f"{self[i, j]:g}" for j in range(self._n)) for i in range(self._n)
        )


def sym_identity(dim: int) -> SymMat:
    """Return the ``dim`` x ``dim`` identity matrix."""
    result = SymMat(dim)
    for i in range(dim):
        result[i, i] = 1.0
    return result


def sym_outer_product(v: Vec) -> SymMat:
    """Return the symmetric outer product of ``v`` with itself."""
    n = v.dim()
    result = SymMat(n)
    for i in range(n):
        for j in range(i, n):
            result[i, j] = v[i] * v[j]
    return result