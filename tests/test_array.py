import pytest

from gfxkit.array import Array2, Array3


def test_array2_shape_and_fill():
    a = Array2(4, 3, fill=7)
    assert a.width == 4
    assert a.height == 3
    assert len(a) == 4 * 3
    assert all(v == 7 for v in a)


def test_array2_default_fill_is_zero():
    a = Array2(2, 2)
    assert list(a) == [0, 0, 0, 0]


def test_array2_row_major_layout():
    a = Array2(5, 4)
    for j in range(a.height):
        for i in range(a.width):
            a[i, j] = (i, j)
    for j in range(a.height):
        for i in range(a.width):
            assert a[j * a.width + i] == (i, j)


def test_array2_set_and_get():
    a = Array2(3, 3)
    a[2, 1] = "x"
    assert a[2, 1] == "x"
    assert a[1, 2] == 0


def test_array2_out_of_range():
    a = Array2(3, 2)
    with pytest.raises(IndexError):
        a[3, 0]
    with pytest.raises(IndexError):
        a[0, 2] = 1
    with pytest.raises(IndexError):
        a[-1, 0]
    with pytest.raises(IndexError):
        a[0, 0, 0]
    assert list(a) == [0] * 6
    assert a[2, 1] == 0


def test_array3_shape():
    a = Array3(2, 3, 4, fill=1.5)
    assert (a.width, a.height, a.depth) == (2, 3, 4)
    assert len(a) == 2 * 3 * 4
    assert all(v == 1.5 for v in a)


def test_array3_layout():
    a = Array3(3, 2, 4)
    for k in range(a.depth):
        for j in range(a.height):
            for i in range(a.width):
                a[i, j, k] = (i, j, k)
    for k in range(a.depth):
        for j in range(a.height):
            for i in range(a.width):
                assert a[k * a.width * a.height + j * a.width + i] == (i, j, k)


def test_array3_out_of_range():
    a = Array3(2, 2, 2, fill=3)
    with pytest.raises(IndexError):
        a[0, 0, 2]
    with pytest.raises(IndexError):
        a[0, 0]
    assert a[1, 1, 1] == 3
    assert list(a) == [3] * 8


def test_negative_extent_rejected():
    with pytest.raises(ValueError):
        Array2(-1, 2)
    with pytest.raises(ValueError):
        Array3(1, 2, -3)


def test_equality():
    a = Array2(2, 2)
    b = Array2(2, 2)
    assert a == b
    b[1, 1] = 9
    assert not a == b
    assert not Array2(2, 3) == Array2(3, 2)