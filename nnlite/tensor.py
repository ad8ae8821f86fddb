"""Small dense tensors (scalar, vector, matrix) with reverse-mode gradients."""

from __future__ import annotations

import operator
from array import array
from collections.abc import Callable, Iterable, Sequence
from numbers import Real
from typing import Any

GradFn = Callable[[Sequence[float]], None]


def _dot(left: Iterable[float], right: Iterable[float]) -> float:
    return sum(map(operator.mul, left, right))


def _chunks(values: Sequence[float], count: int, width: int) -> list[Sequence[float]]:
    return [values[row * width:(row + 1) * width] for row in range(count)]


def _stride_for(shape: tuple[int, ...]) -> tuple[int, ...]:
    if not shape:
        return ()
    if len(shape) == 1:
        return (1,)
    return (shape[1], 1)


class Tensor:
    """A 0-, 1- or 2-dimensional float32 tensor that can track gradients.

    Values are stored flat in row-major order; gradients use the same layout.
    """

    def __init__(
        self,
        data: Any,
        requires_grad: bool = False,
        gradfn: GradFn | None = None,
        parents: Iterable[Tensor] = (),
    ) -> None:
        if isinstance(data, Real):
            values: list[Any] = [data]
            shape: tuple[int, ...] = ()
        else:
            items = list(data)
            if items and not isinstance(items[0], Real):
                rows = [list(row) for row in items]
                width = len(rows[0])
                if any(len(row) != width for row in rows):
                    raise ValueError("Dimensions are inconsistent.")
                values = [value for row in rows for value in row]
                shape = (len(rows), width)
            else:
                values, shape = items, (len(items),)
        self._setup(values, shape, requires_grad, gradfn, parents)

    def _setup(
        self,
        values: Iterable[float],
        shape: tuple[int, ...],
        requires_grad: bool,
        gradfn: GradFn | None,
        parents: Iterable[Tensor],
    ) -> None:
        self._data = array("f", values)
        self._shape = tuple(shape)
        self._stride = _stride_for(self._shape)
        self._requires_grad = bool(requires_grad)
        self._gradfn = gradfn
        self._parents = list(parents)
        self._grad = array("f")
        self._visited = False
        if self._requires_grad:
            self.zero_grad()

    @classmethod
    def _from_flat(
        cls,
        values: Iterable[float],
        shape: tuple[int, ...],
        parents: Sequence[Tensor],
        gradfn: GradFn,
    ) -> Tensor:
        tensor = cls.__new__(cls)
        tracked = any(parent._requires_grad for parent in parents)
        tensor._setup(
            values,
            shape,
            tracked,
            gradfn if tracked else None,
            parents if tracked else (),
        )
        return tensor

    # ----- element access -------------------------------------------------

    def item(self) -> float:
        """Return the only element of a single-element tensor."""
        if len(self._data) != 1:
            raise ValueError("item() can only be called on tensors with a single element")
        return self._data[0]

    def _offset(self, index: Any) -> int:
        if isinstance(index, tuple):
            if len(index) != 2 or len(self._shape) != 2:
                raise ValueError("Can only double index into 2D tensors")
            row, col = map(operator.index, index)
            rows, cols = self._shape
            if not 0 <= row < rows:
                raise IndexError(
                    f"Row index {row} is out of bounds for tensor with {rows} rows"
                )
            if not 0 <= col < cols:
                raise IndexError(
                    f"Column index {col} is out of bounds for tensor with {cols} columns"
                )
            return row * self._stride[0] + col * self._stride[1]
        position = operator.index(index)
        if not self._shape:
            raise ValueError("Can't index into a scalar. Use item() instead")
        if len(self._shape) != 1:
            raise ValueError("Use two indices for 2D tensors.")
        if not 0 <= position < self._shape[0]:
            raise IndexError(
                f"Index {position} is out of bounds for array of size {self._shape[0]}"
            )
        return position

    def __getitem__(self, index: Any) -> float:
        return self._data[self._offset(index)]

    def __setitem__(self, index: Any, value: float) -> None:
        self._data[self._offset(index)] = value

    def _rows(self) -> list[Sequence[float]]:
        rows, cols = self._shape
        return _chunks(self._data, rows, cols)

    # ----- attributes -----------------------------------------------------

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def stride(self) -> tuple[int, ...]:
        return self._stride

    @property
    def requires_grad(self) -> bool:
        return self._requires_grad

    @property
    def grad(self) -> array:
        return self._grad

    @property
    def data(self) -> array:
        return self._data

    @data.setter
    def data(self, values: Iterable[float]) -> None:
        replacement = array("f", values)
        if len(replacement) != len(self._data):
            raise ValueError(
                f"Expected {len(self._data)} values, got {len(replacement)}"
            )
        self._data = replacement

    def numel(self) -> int:
        return len(self._data)

    # ----- gradients ------------------------------------------------------

    def add_to_grad(self, grad_update: Sequence[float]) -> None:
        """Accumulate ``grad_update`` into the gradient, if one is tracked."""
        if not self._requires_grad:
            return
        if len(self._grad) != len(grad_update):
            raise ValueError("Gradient shape mismatch during accumulation.")
        self._grad = array("f", map(operator.add, self._grad, grad_update))

    def zero_grad(self) -> None:
        self._grad = array("f", [0.0]) * len(self._data)

    def backward(self) -> None:
        """Propagate gradients from this scalar through the graph behind it."""
        if not self._requires_grad:
            raise RuntimeError("Element does not require grad.")
        if self._shape:
            raise RuntimeError("Grad can only be calculated for scalar outputs.")
        self._reset_graph_visit()
        self._grad = array("f", [1.0])
        self._propagate()

    def _propagate(self) -> None:
        stack = [self]
        while stack:
            node = stack.pop()
            if not node._requires_grad or node._visited:
                continue
            node._visited = True
            if node._gradfn is not None:
                node._gradfn(node._grad)
            stack.extend(reversed(node._parents))

    def _reset_graph_visit(self) -> None:
        stack = [self]
        while stack:
            node = stack.pop()
            if not node._visited:
                continue
            node._visited = False
            stack.extend(node._parents)

    # ----- arithmetic -----------------------------------------------------

    def __add__(self, other: object) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        left, right = self, other

        if not left._shape:
            scalar = left._data[0]
            values = [scalar + value for value in right._data]
            shape = right._shape

            def gradfn(grad_output: Sequence[float]) -> None:
                # broadcasting forward means summing backward
                left.add_to_grad([sum(grad_output)])
                right.add_to_grad(grad_output)

        elif not right._shape:
            scalar = right._data[0]
            values = [value + scalar for value in left._data]
            shape = left._shape

            def gradfn(grad_output: Sequence[float]) -> None:
                left.add_to_grad(grad_output)
                right.add_to_grad([sum(grad_output)])

        else:
            if left._shape[0] != right._shape[0]:
                raise ValueError("First dimensions are not equal.")
            if len(left._shape) != len(right._shape):
                raise ValueError("Tensors must have the same number of dimensions.")
            if left._shape != right._shape:
                raise ValueError("Second dimensions are not equal.")
            values = list(map(operator.add, left._data, right._data))
            shape = left._shape

            def gradfn(grad_output: Sequence[float]) -> None:
                left.add_to_grad(grad_output)
                right.add_to_grad(grad_output)

        return Tensor._from_flat(values, shape, (left, right), gradfn)

    def __matmul__(self, other: object) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        left, right = self, other
        if not left._shape or not right._shape:
            raise ValueError("Both arguments need to be at least 1D for matmul.")
        if left._shape[-1] != right._shape[0]:
            raise ValueError(
                "Last dimension of first tensor doesn't have same size "
                "as first dimension of second."
            )

        if len(left._shape) == 1 and len(right._shape) == 1:
            values = [_dot(left._data, right._data)]
            shape: tuple[int, ...] = ()

            def gradfn(grad_output: Sequence[float]) -> None:
                scale = grad_output[0]
                left.add_to_grad([value * scale for value in right._data])
                right.add_to_grad([value * scale for value in left._data])

        elif len(left._shape) == 2 and len(right._shape) == 1:
            values = [_dot(row, right._data) for row in left._rows()]
            shape = (left._shape[0],)

            def gradfn(grad_output: Sequence[float]) -> None:
                left.add_to_grad(
                    [value * out for out in grad_output for value in right._data]
                )
                right.add_to_grad(
                    [_dot(column, grad_output) for column in zip(*left._rows())]
                )

        elif len(left._shape) == 1 and len(right._shape) == 2:
            values = [_dot(left._data, column) for column in zip(*right._rows())]
            shape = (right._shape[1],)

            def gradfn(grad_output: Sequence[float]) -> None:
                left.add_to_grad([_dot(row, grad_output) for row in right._rows()])
                right.add_to_grad(
                    [value * out for value in left._data for out in grad_output]
                )

        else:
            columns = list(zip(*right._rows()))
            values = [_dot(row, column) for row in left._rows() for column in columns]
            shape = (left._shape[0], right._shape[1])

            def gradfn(grad_output: Sequence[float]) -> None:
                out_rows = _chunks(grad_output, left._shape[0], right._shape[1])
                right_rows = right._rows()
                left.add_to_grad(
                    [_dot(row, out_row) for out_row in out_rows for row in right_rows]
                )
                out_columns = list(zip(*out_rows))
                right.add_to_grad(
                    [
                        _dot(column, out_column)
                        for column in zip(*left._rows())
                        for out_column in out_columns
                    ]
                )

        return Tensor._from_flat(values, shape, (left, right), gradfn)

    # ----- display --------------------------------------------------------

    def __str__(self) -> str:
        if not self._shape:
            return f"{self._data[0]:g}"
        if len(self._shape) == 1:
            return "[" + ", ".join(f"{value:f}" for value in self._data) + "]"
        rows = (
            "[" + ", ".join(f"{value:f}" for value in row) + "]" for row in self._rows()
        )
        return "[" + ", ".join(rows) + "]"

    def __repr__(self) -> str:
        return f"Tensor({self}, shape={self._shape}, requires_grad={self._requires_grad})"