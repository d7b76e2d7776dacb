"""Numeric helpers shared across the package: tolerant comparison, random values and CPU timing."""

from __future__ import annotations

import math
import os
import random
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

FEQ_EPS = 1e-6
FEQ_EPS2 = 1e-12


def feq(a: float, b: float, e: float = FEQ_EPS) -> bool:
    """Return True when ``a`` and ``b`` differ by less than ``e``."""
    return math.fabs(a - b) < e


def feq2(a: float, b: float, e: float = FEQ_EPS2) -> bool:
    """Like :func:`feq`, but with a much tighter default tolerance."""
    return math.fabs(a - b) < e


def random1() -> float:
    """Return a uniformly distributed random number in the unit interval."""
    return random.random()


def random_byte() -> int:
    """Return a random signed byte value in the range [-128, 127]."""
    value = random.getrandbits(8)
    return value - 256 if value > 127 else value


def get_cpu_time() -> float:
    """Return the user CPU time consumed by this process, in seconds."""
    return os.times().user


@dataclass
class _TimingResult:
    elapsed: float = 0.0


@contextmanager
def timing() -> Iterator[_TimingResult]:
    """Measure the user CPU time spent inside a ``with`` block.

    The yielded object's ``elapsed`` attribute holds the measured time
    once the block has finished.
    """
    result = _TimingResult()
    start = get_cpu_time()
    try:
        yield result
    finally:
        result.elapsed = get_cpu_time() - start