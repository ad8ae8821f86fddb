"""Softmax activation over a vector."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .module import Module
from .tensor import Tensor


class Softmax(Module):
    """Map a vector to a probability distribution; a scalar maps to 1."""

    def forward(self, input: Tensor) -> Tensor:
        if not input.shape:
            if not input.requires_grad:
                return Tensor(1.0)

            def scalar_gradfn(grad_output: Sequence[float]) -> None:
                # softmax of a single value is constant
                input.add_to_grad([0.0])

            return Tensor(1.0, True, scalar_gradfn, [input])

        if len(input.shape) != 1:
            raise ValueError("Softmax is only allowed for 1d vectors.")

        values = list(input.data)
        peak = max(values)
        exps = [math.exp(value - peak) for value in values]
        total = sum(exps)
        probs = [value / total for value in exps]
        if not input.requires_grad:
            return Tensor(probs)

        def gradfn(grad_output: Sequence[float]) -> None:
            weighted = sum(out * prob for out, prob in zip(grad_output, probs))
            input.add_to_grad(
                [prob * (out - weighted) for out, prob in zip(grad_output, probs)]
            )

        return Tensor(probs, True, gradfn, [input])