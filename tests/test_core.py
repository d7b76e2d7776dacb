import pytest

from gfxkit import core
from gfxkit.core import feq, feq2, get_cpu_time, random1, random_byte, timing


def test_feq_within_default_tolerance():
    assert feq(1.0, 1.0 + 1e-7)
    assert not feq(1.0, 1.0 + 1e-5)


def test_feq_is_symmetric():
    assert feq(2.5, 2.5 + 5e-7) == feq(2.5 + 5e-7, 2.5)
    assert not feq(0.0, 3e-6)
    assert not feq(3e-6, 0.0)


def test_feq_custom_tolerance():
    assert feq(1.0, 1.5, 1.0)
    assert not feq(1.0, 1.5, 0.5)


def test_feq2_is_tighter_than_feq():
    assert feq(1.0, 1.0 + 1e-9)
    assert not feq2(1.0, 1.0 + 1e-9)
    assert feq2(1.0, 1.0 + 1e-13)


def test_default_tolerances_are_strict_bounds():
    assert not feq(0.0, core.FEQ_EPS)
    assert feq(0.0, core.FEQ_EPS / 2)
    assert not feq2(0.0, core.FEQ_EPS2)
    assert feq2(0.0, core.FEQ_EPS2 / 2)


def test_random1_in_unit_interval():
    values = [random1() for _ in range(500)]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert len(set(values)) > 1


def test_random_byte_in_signed_range():
    values = [random_byte() for _ in range(2000)]
    assert all(-128 <= v <= 127 for v in values)
    assert min(values) < 0 <= max(values)


def test_cpu_time_is_monotonic():
    first = get_cpu_time()
    sum(i * i for i in range(20000))
    second = get_cpu_time()
    assert first >= 0.0
    assert second >= first


def test_timing_records_elapsed():
    with timing() as t:
        total = sum(i * i for i in range(50000))
    assert total > 0
    assert t.elapsed >= 0.0


def test_timing_records_elapsed_on_error():
    with pytest.raises(RuntimeError):
        with timing() as t:
            raise RuntimeError("boom")
    assert t.elapsed >= 0.0