import numpy as np
import pytest

from brainnlet.tensor import Tensor


def test_zeros_has_shape_and_no_content():
    t = Tensor.zeros(2, 3)
    assert t.shape == (2, 3)
    assert t.size == 6
    assert t.sum() == 0.0


def test_default_is_empty():
    t = Tensor()
    assert t.rows == 0 and t.cols == 0


def test_non_two_dimensional_data_rejected():
    with pytest.raises(ValueError):
        Tensor([1.0, 2.0])


def test_from_list_is_row_major():
    t = Tensor.from_list([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], 2, 3)
    assert t[0, 2] == 3.0
    assert t[1, 0] == 4.0


def test_from_list_size_mismatch():
    with pytest.raises(ValueError):
        Tensor.from_list([1.0, 2.0, 3.0], 2, 2)


def test_to_list_is_column_major():
    t = Tensor.from_list([1.0, 2.0, 3.0, 4.0], 2, 2)
    assert t.to_list() == [1.0, 3.0, 2.0, 4.0]


def test_setitem_changes_element():
    t = Tensor.zeros(2, 2)
    t[1, 0] = 7.5
    assert t[1, 0] == 7.5
    assert t.sum() == 7.5


def test_add_then_subtract_round_trip():
    a = Tensor([[1.0, 2.0], [3.0, 4.0]])
    b = Tensor([[0.5, -1.0], [2.0, 8.0]])
    result = (a + b) - b
    assert np.allclose(result.data, a.data)


def test_add_shape_mismatch():
    with pytest.raises(ValueError):
        Tensor.zeros(2, 2) + Tensor.zeros(2, 3)


def test_sub_shape_mismatch():
    with pytest.raises(ValueError):
        Tensor.zeros(1, 2) - Tensor.zeros(2, 1)


def test_in_place_add_and_sub():
    a = Tensor([[1.0, 2.0]])
    original = a
    a += Tensor([[3.0, 4.0]])
    a -= Tensor([[3.0, 4.0]])
    assert a is original
    assert a.to_list() == [1.0, 2.0]


def test_in_place_add_shape_mismatch():
    a = Tensor.zeros(2, 2)
    with pytest.raises(ValueError):
        a += Tensor.zeros(3, 3)


def test_matmul_with_identity():
    a = Tensor([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    identity = Tensor(np.eye(3))
    assert np.allclose((a @ identity).data, a.data)


def test_matmul_shape():
    a = Tensor.zeros(2, 3)
    b = Tensor.zeros(3, 4)
    assert (a @ b).shape == (2, 4)


def test_matmul_mismatch():
    with pytest.raises(ValueError):
        Tensor.zeros(2, 3) @ Tensor.zeros(2, 3)


def test_scalar_multiplication_both_sides():
    a = Tensor([[1.0, -2.0]])
    assert (a * 3.0).to_list() == (3.0 * a).to_list()
    assert (a * 3.0)[0, 1] == -6.0


def test_division_inverts_multiplication():
    a = Tensor([[1.5, -2.5], [4.0, 0.25]])
    assert np.allclose(((a * 4.0) / 4.0).data, a.data)


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        Tensor.zeros(1, 1) / 0.0
    t = Tensor.zeros(1, 1)
    with pytest.raises(ZeroDivisionError):
        t /= 1e-12


def test_in_place_scalar_ops():
    t = Tensor([[2.0, 4.0]])
    t *= 2.0
    t /= 4.0
    assert t.to_list() == [1.0, 2.0]


def test_fill_and_statistics():
    t = Tensor.zeros(3, 4)
    t.fill(2.5)
    assert t.sum() == pytest.approx(2.5 * 12)
    assert t.mean() == pytest.approx(2.5)


def test_zero_clears():
    t = Tensor([[1.0, 2.0]])
    t.zero()
    assert t.to_list() == [0.0, 0.0]


def test_norm():
    assert Tensor([[3.0, 4.0]]).norm() == pytest.approx(5.0)


def test_random_within_bounds():
    t = Tensor.zeros(20, 20)
    t.random(-0.5, 0.5)
    assert np.all(t.data >= -0.5)
    assert np.all(t.data < 0.5)
    assert t.norm() > 0.0


def test_transpose_twice_is_identity():
    a = Tensor([[1.0, 2.0, 3.0]])
    assert a.transpose().shape == (3, 1)
    assert np.array_equal(a.transpose().transpose().data, a.data)


def test_resize_to_new_size_gives_new_shape():
    t = Tensor([[1.0, 2.0]])
    t.resize(3, 3)
    assert t.shape == (3, 3)


def test_resize_same_size_keeps_column_major_order():
    t = Tensor.from_list([1.0, 2.0, 3.0, 4.0], 2, 2)
    before = t.to_list()
    t.resize(4, 1)
    assert t.shape == (4, 1)
    assert t.to_list() == before


def test_multiplying_by_tensor_is_type_error():
    with pytest.raises(TypeError):
        Tensor.zeros(1, 1) * Tensor.zeros(1, 1)