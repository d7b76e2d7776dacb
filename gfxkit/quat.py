"""Quaternions for rotations, with interpolation and a virtual trackball."""

from __future__ import annotations

import math
from collections.abc import Iterator
from numbers import Real

from gfxkit.core import FEQ_EPS
from gfxkit.matrices import Mat4
from gfxkit.vectors import Vec, norm, unitize


def _cross3(a: Vec, b: Vec) -> Vec:
    return Vec(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


class Quat:
    """A quaternion made of a 3-vector part and a scalar part.

    ``Quat()`` is the identity, ``Quat(v, w)`` takes a 3-vector and a scalar,
    ``Quat(x, y, z, w)`` takes the four components.
    """

    __slots__ = ("_v", "_s")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, *args) -> None:
        if not args:
            v, s = Vec(0.0, 0.0, 0.0), 1.0
        elif len(args) == 2:
            v, s = Vec(args[0]), float(args[1])
        elif len(args) == 4:
            v, s = Vec(args[:3]), float(args[3])
        else:
            raise TypeError("Quat takes no arguments, (vector, scalar) or (x, y, z, w)")
        if v.dim() != 3:
            raise ValueError("the vector part of a quaternion must be 3-D")
        self._v = v
        self._s = s

    @classmethod
    def ident(cls) -> Quat:
        """Return the identity quaternion."""
        return cls()

    @property
    def vector(self) -> Vec:
        """The vector part, as a new 3-vector."""
        return Vec(self._v)

    @property
    def scalar(self) -> float:
        """The scalar part."""
        return self._s

    def norm2(self) -> float:
        """Return the squared length."""
        return self._v.dot(self._v) + self._s * self._s

    def norm(self) -> float:
        """Return the length."""
        return math.sqrt(self.norm2())

    def unit(self) -> Quat:
        """Return this quaternion scaled to unit length (zero stays zero)."""
        length2 = self.norm2()
        if length2 == 1.0 or length2 == 0.0:
            return Quat(self._v, self._s)
        return self / math.sqrt(length2)

    def conjugate(self) -> Quat:
        """Return the conjugate, with the vector part negated."""
        return Quat(-self._v, self._s)

    def inverse(self) -> Quat:
        """Return the multiplicative inverse."""
        length2 = self.norm2()
        if length2 == 0.0:
            raise ZeroDivisionError("the zero quaternion has no inverse")
        return self.conjugate() / length2

    def __iter__(self) -> Iterator[float]:
        yield from self._v
        yield self._s

    def __add__(self, other):
        if not isinstance(other, Quat):
            return NotImplemented
        return Quat(self._v + other._v, self._s + other._s)

    def __sub__(self, other):
        if not isinstance(other, Quat):
            return NotImplemented
        return Quat(self._v - other._v, self._s - other._s)

    def __neg__(self) -> Quat:
        return Quat(-self._v, -self._s)

    def __mul__(self, other):
        if isinstance(other, Quat):
            v1, s1, v2, s2 = self._v, self._s, other._v, other._s
            return Quat(v2 * s1 + v1 * s2 + _cross3(v1, v2), s1 * s2 - v1.dot(v2))
        if isinstance(other, Real):
            return Quat(self._v * other, self._s * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return Quat(self._v * other, self._s * other)
        return NotImplemented

    def __truediv__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        return Quat(self._v / s, self._s / s)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quat):
            return NotImplemented
        return self._v == other._v and self._s == other._s

    def __repr__(self) -> str:
        x, y, z = self._v
        return f"Quat({x!r}, {y!r}, {z!r}, {self._s!r})"

    def __str__(self) -> str:
        return f"{self._v} {self._s:g}"


def qexp(q: Quat) -> Quat:
    """Return the exponential of a quaternion whose scalar part is zero."""
    v = q.vector
    theta = norm(v)
    c = math.cos(theta)
    if theta > FEQ_EPS:
        return Quat(v * (math.sin(theta) / theta), c)
    return Quat(v, c)


def qlog(q: Quat) -> Quat:
    """Return the natural logarithm of a unit quaternion."""
    v = q.vector
    scale = norm(v)
    theta = math.atan2(scale, q.scalar)
    if scale > 0.0:
        scale = theta / scale
    return Quat(v * scale, 0.0)


def axis_to_quat(axis: Vec, phi: float) -> Quat:
    """Return the quaternion rotating by ``phi`` radians about ``axis``."""
    u = unitize(Vec(axis))
    s = math.sin(phi / 2.0)
    return Quat(u[0] * s, u[1] * s, u[2] * s, math.cos(phi / 2.0))


def _rotation_matrix(x: float, y: float, z: float, w: float, s: float) -> Mat4:
    return Mat4(
        1 - s * (y * y + z * z), s * (x * y - w * z), s * (x * z + w * y), 0.0,
        s * (x * y + w * z), 1 - s * (x * x + z * z), s * (y * z - w * x), 0.0,
        s * (x * z - w * y), s * (y * z + w * x), 1 - s * (x * x + y * y), 0.0,
        0.0, 0.0, 0.0, 1.0,
    )


def quat_to_matrix(q: Quat) -> Mat4:
    """Return the rotation matrix of a quaternion of any non-zero length."""
    x, y, z, w = q
    return _rotation_matrix(x, y, z, w, 2.0 / q.norm2())


def unit_quat_to_matrix(q: Quat) -> Mat4:
    """Return the rotation matrix of a unit quaternion."""
    x, y, z, w = q
    return _rotation_matrix(x, y, z, w, 2.0)


def slerp(start: Quat, end: Quat, t: float) -> Quat:
    """Spherically interpolate between two unit quaternions at parameter ``t``."""
    v_from, v_to = start.vector, end.vector
    s_from, s_to = start.scalar, end.scalar
    cosine = v_from.dot(v_to) + s_from * s_to

    if 1 + cosine < FEQ_EPS:
        # Nearly opposite: rotate through a perpendicular quaternion.
        a = math.sin((1 - t) * math.pi / 2.0)
        b = math.sin(t * math.pi / 2.0)
        return Quat(
            a * v_from[0] + b * -v_from[1],
            a * v_from[1] + b * v_from[0],
            a * v_from[2] + b * -s_from,
            a * s_from + b * v_from[2],
        )

    if 1 - cosine < FEQ_EPS:
        # Nearly equal: plain linear interpolation avoids dividing by ~0.
        a, b = 1.0 - t, t
    else:
        theta = math.acos(cosine)
        sine = math.sqrt(1 - cosine * cosine)
        a = math.sin((1 - t) * theta) / sine
        b = math.sin(t * theta) / sine

    return Quat(v_from * a + v_to * b, a * s_from + b * s_to)


_MAGIC_RLIMIT = 0.70710678118654752440
_TRACKBALL_SIZE = 0.8


def _proj_to_sphere(r: float, x: float, y: float) -> float:
    """Project (x, y) onto a sphere of radius r, or a hyperbolic sheet far out."""
    d = math.hypot(x, y)
    limit = r * _MAGIC_RLIMIT
    if d < limit:
        return math.sqrt(r * r - d * d)
    return limit * limit / d


def trackball(p1x: float, p1y: float, p2x: float, p2y: float) -> Quat:
    """Return the rotation of a virtual trackball dragged from p1 to p2.

    Coordinates are in the normalised window range [-1, 1].
    """
    if p1x == p2x and p1y == p2y:
        return Quat.ident()

    p1 = Vec(p1x, p1y, _proj_to_sphere(_TRACKBALL_SIZE, p1x, p1y))
    p2 = Vec(p2x, p2y, _proj_to_sphere(_TRACKBALL_SIZE, p2x, p2y))

    t = norm(p1 - p2) / (2.0 * _TRACKBALL_SIZE)
    t = max(-1.0, min(1.0, t))

    return axis_to_quat(_cross3(p2, p1), 2.0 * math.asin(t))