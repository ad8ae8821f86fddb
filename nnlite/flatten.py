"""Layer that turns any tensor into a vector."""

from __future__ import annotations

from collections.abc import Sequence

from .module import Module
from .tensor import Tensor


class Flatten(Module):
    """Lay out the input's elements as a 1D tensor in row-major order."""

    def forward(self, input: Tensor) -> Tensor:
        values = list(input.data)
        if not input.requires_grad:
            return Tensor(values)

        def gradfn(grad_output: Sequence[float]) -> None:
            # gradients share the row-major layout, so they pass straight through
            input.add_to_grad(grad_output)

        return Tensor(values, True, gradfn, [input])