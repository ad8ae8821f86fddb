"""Loss functions that compare a vector of scores with a target class."""

from __future__ import annotations

import math
import operator
import struct
from collections.abc import Sequence

from .module import Module
from .softmax import Softmax
from .tensor import Tensor

# smallest probability fed to the logarithm, in single precision
_MIN_PROB = struct.unpack("f", struct.pack("f", 1e-12))[0]


def _check_inputs(name: str, input: Tensor, target: int) -> int:
    if len(input.shape) != 1:
        raise ValueError(f"{name} expects a 1d input tensor.")
    position = operator.index(target)
    if not 0 <= position < input.numel():
        raise IndexError(f"{name} target out of bounds.")
    return position


class Loss(Module):
    """Base class for losses called as ``loss(input, target)``."""

    def forward(self, input: Tensor, target: int) -> Tensor:
        raise NotImplementedError("Forward not implemented.")

    def __call__(self, input: Tensor, target: int) -> Tensor:  # type: ignore[override]
        return self.forward(input, target)


class NLLLoss(Loss):
    """Negative log of the probability given to the target class."""

    def forward(self, input: Tensor, target: int) -> Tensor:
        position = _check_inputs("NLLLoss", input, target)
        prob = max(input[position], _MIN_PROB)
        loss = -math.log(prob)
        if not input.requires_grad:
            return Tensor(loss)

        def gradfn(grad_output: Sequence[float]) -> None:
            value = input[position]
            local = -1.0 / value if value else -math.inf
            grad_input = [0.0] * input.numel()
            grad_input[position] = grad_output[0] * local
            input.add_to_grad(grad_input)

        return Tensor(loss, True, gradfn, [input])


class CrossEntropyLoss(Loss):
    """Softmax followed by negative log-likelihood."""

    def forward(self, input: Tensor, target: int) -> Tensor:
        position = _check_inputs("CrossEntropyLoss", input, target)
        return NLLLoss()(Softmax()(input), position)