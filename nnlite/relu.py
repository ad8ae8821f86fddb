"""Rectified linear activation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .module import Module
from .tensor import Tensor


def _shaped(values: list[float], shape: tuple[int, ...]) -> Any:
    if not shape:
        return values[0]
    if len(shape) == 1:
        return values
    rows, cols = shape
    return [values[row * cols:(row + 1) * cols] for row in range(rows)]


class Relu(Module):
    """Element-wise max(x, 0) for scalars, vectors and matrices."""

    def forward(self, input: Tensor) -> Tensor:
        values = [value if value > 0 else 0.0 for value in input.data]
        shaped = _shaped(values, input.shape)
        if not input.requires_grad:
            return Tensor(shaped)

        def gradfn(grad_output: Sequence[float]) -> None:
            input.add_to_grad(
                [out if value > 0 else 0.0 for value, out in zip(input.data, grad_output)]
            )

        return Tensor(shaped, True, gradfn, [input])