import pytest

from nnlite.tensor import Tensor


def test_scalar_creation():
    tensor = Tensor(5.0)
    assert tensor.shape == ()
    assert tensor.stride == ()
    assert tensor.item() == 5.0
    with pytest.raises(ValueError):
        tensor[0]


def test_vector_creation():
    tensor = Tensor([1.0, 2.0, 3.0])
    assert tensor.shape == (3,)
    assert tensor.stride == (1,)
    assert [tensor[0], tensor[1], tensor[2]] == [1.0, 2.0, 3.0]
    with pytest.raises(IndexError):
        tensor[3]
    with pytest.raises(ValueError):
        tensor.item()


def test_matrix_creation():
    tensor = Tensor([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    assert tensor.shape == (2, 3)
    assert tensor.stride == (3, 1)
    assert tensor[0, 0] == 1.0
    assert tensor[0, 1] == 2.0
    assert tensor[0, 2] == 3.0
    assert tensor[1, 0] == 4.0
    assert tensor[1, 1] == 5.0
    assert tensor[1, 2] == 6.0
    with pytest.raises(IndexError):
        tensor[2, 0]
    with pytest.raises(IndexError):
        tensor[0, 3]
    with pytest.raises(ValueError):
        tensor.item()


def test_inconsistent_rows_rejected():
    with pytest.raises(ValueError, match="inconsistent"):
        Tensor([[1.0, 2.0], [3.0]])


def test_index_arity_errors():
    with pytest.raises(ValueError):
        Tensor([[1.0, 2.0]])[0]
    with pytest.raises(ValueError):
        Tensor([1.0, 2.0])[0, 0]


def test_negative_index_is_out_of_bounds():
    with pytest.raises(IndexError):
        Tensor([1.0, 2.0])[-1]


def test_setitem_writes_values():
    vector = Tensor([1.0, 2.0])
    vector[1] = 7.0
    matrix = Tensor([[1.0, 2.0], [3.0, 4.0]])
    matrix[1, 0] = 9.0
    assert list(vector.data) == [1.0, 7.0]
    assert list(matrix.data) == [1.0, 2.0, 9.0, 4.0]


def test_numel_and_grad_initialisation():
    plain = Tensor([[1.0, 2.0], [3.0, 4.0]])
    tracked = Tensor([[1.0, 2.0], [3.0, 4.0]], True)
    assert plain.numel() == 4
    assert list(plain.grad) == []
    assert list(tracked.grad) == [0.0, 0.0, 0.0, 0.0]


def test_data_setter_checks_length():
    tensor = Tensor([1.0, 2.0])
    tensor.data = [3.0, 4.0]
    assert list(tensor.data) == [3.0, 4.0]
    with pytest.raises(ValueError):
        tensor.data = [1.0]


def test_add_to_grad():
    tensor = Tensor([1.0, 2.0], True)
    tensor.add_to_grad([0.5, 1.5])
    tensor.add_to_grad([0.5, 0.5])
    assert list(tensor.grad) == [1.0, 2.0]
    with pytest.raises(ValueError):
        tensor.add_to_grad([1.0])
    tensor.zero_grad()
    assert list(tensor.grad) == [0.0, 0.0]


def test_add_to_grad_ignored_without_tracking():
    tensor = Tensor([1.0, 2.0])
    tensor.add_to_grad([1.0, 1.0])
    assert list(tensor.grad) == []


def test_addition_cases():
    assert (Tensor(1.0) + Tensor(2.0)).item() == 3.0

    scalar_vector = Tensor(1.0) + Tensor([2.0, 3.0, 4.0])
    assert scalar_vector.shape == (3,)
    assert list(scalar_vector.data) == [3.0, 4.0, 5.0]

    vector_vector = Tensor([1.0, 2.0, 3.0]) + Tensor([4.0, 5.0, 6.0])
    assert vector_vector.shape == (3,)
    assert list(vector_vector.data) == [5.0, 7.0, 9.0]

    vector_scalar = Tensor([1.0, 2.0, 3.0]) + Tensor(4.0)
    assert vector_scalar.shape == (3,)
    assert list(vector_scalar.data) == [5.0, 6.0, 7.0]

    matrix_matrix = Tensor([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]) + Tensor(
        [[7.0, 8.0, 9.0], [10.0, 11.0, 12.0]]
    )
    assert matrix_matrix.shape == (2, 3)
    assert list(matrix_matrix.data) == [8.0, 10.0, 12.0, 14.0, 16.0, 18.0]


def test_addition_with_scalar_and_matrix():
    left = Tensor(1.0) + Tensor([[1.0, 2.0], [3.0, 4.0]])
    right = Tensor([[1.0, 2.0], [3.0, 4.0]]) + Tensor(1.0)
    assert left.shape == (2, 2)
    assert list(left.data) == [2.0, 3.0, 4.0, 5.0]
    assert list(right.data) == [2.0, 3.0, 4.0, 5.0]


def test_addition_shape_errors():
    with pytest.raises(ValueError, match="First"):
        Tensor([1.0, 2.0]) + Tensor([1.0, 2.0, 3.0])
    with pytest.raises(ValueError, match="Second"):
        Tensor([[1.0, 2.0]]) + Tensor([[1.0, 2.0, 3.0]])
    with pytest.raises(ValueError):
        Tensor([1.0, 2.0]) + Tensor([[1.0], [2.0]])


def test_addition_tracks_requires_grad():
    assert (Tensor(1.0) + Tensor(2.0)).requires_grad is False
    assert (Tensor(1.0, True) + Tensor(2.0)).requires_grad is True


def test_matmul_rejects_scalars():
    with pytest.raises(ValueError):
        Tensor(1.0) @ Tensor(2.0)
    with pytest.raises(ValueError):
        Tensor(1.0) @ Tensor([2.0, 3.0, 4.0])


def test_matmul_vector_vector():
    result = Tensor([1.0, 2.0, 3.0]) @ Tensor([4.0, 5.0, 6.0])
    assert result.shape == ()
    assert result.item() == 32.0


def test_matmul_dimension_mismatch():
    with pytest.raises(ValueError):
        Tensor([1.0, 2.0, 5.0]) @ Tensor([[4.0, 5.0, 6.0], [7.0, 8.0, 9.0]])
    with pytest.raises(ValueError):
        Tensor([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]) @ Tensor(
            [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]
        )


def test_matmul_vector_matrix():
    result = Tensor([1.0, 2.0]) @ Tensor([[4.0, 5.0, 6.0], [7.0, 8.0, 9.0]])
    assert result.shape == (3,)
    assert list(result.data) == [18.0, 21.0, 24.0]


def test_matmul_matrix_vector():
    result = Tensor([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]) @ Tensor([1.0, 2.0, 3.0])
    assert result.shape == (2,)
    assert list(result.data) == [14.0, 32.0]


def test_matmul_matrix_matrix():
    result = Tensor([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]) @ Tensor(
        [[7.0, 8.0], [9.0, 10.0], [11.0, 12.0]]
    )
    assert result.shape == (2, 2)
    assert result[0, 0] == 58.0
    assert result[0, 1] == 64.0
    assert result[1, 0] == 139.0
    assert result[1, 1] == 154.0


def test_matmul_large():
    left = Tensor([[1.0] * 300 for _ in range(200)])
    right = Tensor([[1.0] * 400 for _ in range(300)])
    result = left @ right
    assert result.shape == (200, 400)
    assert set(result.data) == {300.0}


def test_backward_scalar_addition():
    a = Tensor(2.0, True)
    b = Tensor(3.0, True)
    c = a + b
    c.backward()
    assert a.grad[0] == 1.0
    assert b.grad[0] == 1.0


def test_backward_dot_product():
    x = Tensor([1.0, 2.0, 3.0], True)
    y = Tensor([4.0, 5.0, 6.0], True)
    z = x @ y
    z.backward()
    assert list(x.grad) == pytest.approx([4.0, 5.0, 6.0])
    assert list(y.grad) == pytest.approx([1.0, 2.0, 3.0])


def test_backward_accumulates_over_calls():
    a = Tensor(2.0, True)
    b = Tensor(3.0, True)
    c = a + b
    c.backward()
    c.backward()
    assert list(a.grad) == [2.0]


def test_backward_scalar_plus_vector():
    a = Tensor(2.0, True)
    x = Tensor([1.0, 2.0, 3.0], True)
    result = (a + x) @ Tensor([1.0, 2.0, 3.0])
    result.backward()
    assert list(a.grad) == [6.0]
    assert list(x.grad) == [1.0, 2.0, 3.0]


def test_backward_vector_plus_scalar():
    a = Tensor(2.0, True)
    x = Tensor([1.0, 2.0, 3.0], True)
    result = (x + a) @ Tensor([1.0, 2.0, 3.0])
    result.backward()
    assert list(a.grad) == [6.0]
    assert list(x.grad) == [1.0, 2.0, 3.0]


def test_backward_matrix_plus_scalar_and_matrix():
    a = Tensor(2.0, True)
    m = Tensor([[1.0, 2.0], [3.0, 4.0]], True)
    n = Tensor([[5.0, 6.0], [7.0, 8.0]], True)
    summed = (m + a) + n
    result = (Tensor([1.0, 1.0]) @ summed) @ Tensor([1.0, 1.0])
    result.backward()
    assert list(a.grad) == [4.0]
    assert list(m.grad) == [1.0, 1.0, 1.0, 1.0]
    assert list(n.grad) == [1.0, 1.0, 1.0, 1.0]


def test_backward_matrix_vector():
    a = Tensor([[1.0, 2.0], [3.0, 4.0]], True)
    x = Tensor([1.0, 1.0], True)
    w = Tensor([1.0, 0.0])
    result = (a @ x) @ w
    assert result.item() == 3.0
    result.backward()
    assert list(a.grad) == [1.0, 1.0, 0.0, 0.0]
    assert list(x.grad) == [1.0, 2.0]
    assert list(w.grad) == []


def test_backward_matrix_matrix():
    a = Tensor([[1.0, 2.0]], True)
    b = Tensor([[3.0], [4.0]], True)
    result = (Tensor([1.0]) @ (a @ b)) @ Tensor([1.0])
    assert result.item() == 11.0
    result.backward()
    assert list(a.grad) == [3.0, 4.0]
    assert list(b.grad) == [1.0, 2.0]


def test_backward_errors():
    with pytest.raises(RuntimeError, match="require grad"):
        Tensor(1.0).backward()
    with pytest.raises(RuntimeError, match="scalar"):
        Tensor([1.0, 2.0], True).backward()


def test_string_forms():
    assert str(Tensor(5.0)) == "5"
    assert str(Tensor(2.5)) == "2.5"
    assert str(Tensor([1.0, 2.0])) == "[1.000000, 2.000000]"
    assert (
        str(Tensor([[1.0, 2.0], [3.0, 4.0]]))
        == "[[1.000000, 2.000000], [3.000000, 4.000000]]"
    )