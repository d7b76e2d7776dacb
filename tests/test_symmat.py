import pytest

from gfxkit.matrices import Mat2, Mat4, det, outer_product2, transpose
from gfxkit.symmat import SymMat, sym_identity, sym_outer_product
from gfxkit.vectors import Vec


def _sample(n, offset=1):
    s = SymMat(n)
    for i in range(n):
        for j in range(i, n):
            s[i, j] = i + 2 * j + offset
    return s


def test_storage_is_symmetric():
    s = SymMat(3)
    s[0, 2] = 5
    assert s[2, 0] == 5
    s[1, 0] = -4
    assert s[0, 1] == -4


def test_fill_value():
    s = SymMat(3, 2.5)
    assert all(s[i, j] == 2.5 for i in range(3) for j in range(3))


def test_packed_size():
    assert SymMat(4).size() == 10


def test_rows_equal_columns():
    s = _sample(4)
    assert all(s.row(i) == s.col(i) for i in range(4))


def test_fullmatrix_types_and_symmetry():
    assert isinstance(_sample(2).fullmatrix(), Mat2)
    assert isinstance(_sample(4).fullmatrix(), Mat4)
    for n in (2, 3, 4):
        full = _sample(n).fullmatrix()
        assert transpose(full) == full


def test_identity_matches_dense_identity():
    assert sym_identity(2).fullmatrix() == Mat2().identity()
    assert sym_identity(4).fullmatrix() == Mat4().identity()
    assert sym_identity(3).trace() == 3


def test_outer_product_matches_dense():
    v = Vec(1, 2)
    assert sym_outer_product(v).fullmatrix() == outer_product2(v)
    w = Vec(1, -2, 3)
    s = sym_outer_product(w)
    assert s @ w == w * w.dot(w)


def test_trace_agrees_with_dense_diagonal():
    s = _sample(4)
    full = s.fullmatrix()
    assert s.trace() == sum(full[i, i] for i in range(4))


@pytest.mark.parametrize("n", [2, 3, 4])
def test_determinant_agrees_with_dense(n):
    s = _sample(n)
    s[0, 0] = 7
    assert det(s) == pytest.approx(det(s.fullmatrix()))


@pytest.mark.parametrize("n", [2, 3, 4])
def test_matrix_vector_product(n):
    s = _sample(n)
    v = Vec(range(1, n + 1))
    assert s @ v == s.fullmatrix() @ v


@pytest.mark.parametrize("n", [2, 3, 4])
def test_product_with_identity(n):
    s = _sample(n)
    assert s @ sym_identity(n) == s
    assert sym_identity(n) @ s == s


@pytest.mark.parametrize("n", [2, 3])
def test_product_keeps_upper_triangle(n):
    a = _sample(n)
    b = _sample(n, offset=-2)
    dense = a.fullmatrix() @ b.fullmatrix()
    product = a @ b
    assert product[0, 1] == pytest.approx(dense[0, 1])
    assert all(product[i, i] == pytest.approx(dense[i, i]) for i in range(n))


def test_product_4x4_keeps_lower_triangle():
    a = _sample(4)
    b = _sample(4, offset=-2)
    dense = a.fullmatrix() @ b.fullmatrix()
    product = a @ b
    assert product[0, 1] == pytest.approx(dense[1, 0])
    assert product[2, 3] == pytest.approx(dense[3, 2])
    assert all(product[i, i] == pytest.approx(dense[i, i]) for i in range(4))


def test_arithmetic_round_trips():
    a = _sample(3)
    b = _sample(3, offset=5)
    assert (a + b) - b == a
    assert a * 3 == a + a + a
    assert 3 * a == a * 3
    assert (a * 4) / 4 == a
    assert -a + a == SymMat(3)


def test_in_place_arithmetic():
    a = _sample(3)
    b = _sample(3, offset=5)
    c = a.copy()
    c += b
    assert c == a + b
    c -= b
    assert c == a
    c *= 2
    assert c == a * 2
    c /= 2
    assert c == a


def test_transpose_returns_equal_copy():
    s = _sample(3)
    t = transpose(s)
    assert t == s
    t[0, 0] = 100
    assert s[0, 0] != 100


def test_errors():
    with pytest.raises(ValueError):
        SymMat(0)
    with pytest.raises(IndexError):
        SymMat(3)[3, 0]
    with pytest.raises(ValueError):
        SymMat(3) + SymMat(2)
    with pytest.raises(ValueError):
        SymMat(3) @ Vec(1, 2)


def test_str_lists_rows():
    assert str(sym_identity(2)) == "1 0\n0 1"