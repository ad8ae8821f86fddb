"""Fully connected layer with seeded Kaiming-uniform initialisation."""

from __future__ import annotations

import math
import random
import struct

from .module import Module
from .tensor import Tensor

_MT_SIZE = 624


def _f32(value: float) -> float:
    """Round a Python float to the nearest single-precision value."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _mt19937(seed: int) -> random.Random:
    """A Mersenne Twister seeded the way a single-integer seed initialises it."""
    state = [seed & 0xFFFFFFFF]
    for position in range(1, _MT_SIZE):
        previous = state[-1]
        state.append((1812433253 * (previous ^ (previous >> 30)) + position) & 0xFFFFFFFF)
    generator = random.Random()
    generator.setstate((3, tuple(state) + (_MT_SIZE,), None))
    return generator


def _uniform_float(generator: random.Random, low: float, high: float) -> float:
    """Draw one single-precision value from [low, high) using one 32-bit word."""
    canonical = _f32(float(generator.getrandbits(32))) / 2.0**32
    if canonical >= 1.0:
        canonical = _f32(1.0 - 2.0**-24)
    span = _f32(high - low)
    return _f32(_f32(canonical * span) + low)


class Linear(Module):
    """Affine map ``input @ weight + bias`` with weight of shape (in, out)."""

    def __init__(self, in_features: int, out_features: int, seed: int = 7) -> None:
        super().__init__()
        self.in_features = in_features
        self.out_features = out_features
        self.seed = seed
        self._weight = Tensor([[0.0] * out_features for _ in range(in_features)], True)
        self._bias = Tensor([0.0] * out_features, True)
        self.register_parameter("weight", self._weight)
        self.register_parameter("bias", self._bias)
        self.reset_parameters()

    @property
    def weight(self) -> Tensor:
        return self._weight

    @property
    def bias(self) -> Tensor:
        return self._bias

    def reset_parameters(self) -> None:
        """Refill the weight from the seed with a ReLU-gain uniform bound."""
        gain = _f32(math.sqrt(2.0))
        bound = _f32(gain * _f32(math.sqrt(_f32(3.0 / float(self.in_features)))))
        generator = _mt19937(self.seed)
        self._weight.data = [
            _uniform_float(generator, -bound, bound)
            for _ in range(self._weight.numel())
        ]

    def forward(self, input: Tensor) -> Tensor:
        return (input @ self._weight) + self._bias