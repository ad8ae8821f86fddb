"""Plain stochastic gradient descent."""

from __future__ import annotations

from collections.abc import Iterable

from .tensor import Tensor


class SGD:
    """Move each parameter against its gradient by a fixed learning rate."""

    def __init__(
        self, params: Iterable[tuple[str, Tensor]], lr: float = 0.001
    ) -> None:
        self.params = list(params)
        self.lr = lr

    def step(self) -> None:
        for _, param in self.params:
            if not param.requires_grad:
                continue
            param.data = [
                value - self.lr * grad for value, grad in zip(param.data, param.grad)
            ]

    def zero_grad(self) -> None:
        for _, param in self.params:
            param.zero_grad()