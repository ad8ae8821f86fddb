"""Run a small fully connected network on a random 28x28 image."""

from __future__ import annotations

import argparse
import random
from collections.abc import Sequence

from .flatten import Flatten
from .linear import Linear
from .module import Module
from .relu import Relu
from .tensor import Tensor

IMAGE_SIZE = 28


class NeuralNetwork(Module):
    """Flatten, then three linear layers with ReLU between them."""

    def __init__(self) -> None:
        super().__init__()
        self._flatten = Flatten()
        self._linear_1 = Linear(IMAGE_SIZE * IMAGE_SIZE, 512)
        self._linear_2 = Linear(512, 512)
        self._linear_3 = Linear(512, 10)
        self._relu = Relu()
        self.register_module("linear_1", self._linear_1)
        self.register_module("linear_2", self._linear_2)
        self.register_module("linear_3", self._linear_3)

    def forward(self, input: Tensor) -> Tensor:
        hidden = self._relu(self._linear_1(self._flatten(input)))
        hidden = self._relu(self._linear_2(hidden))
        return self._linear_3(hidden)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Feed a random image through the network and print its output."
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="seed for the random input image"
    )
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    image = Tensor(
        [[rng.random() for _ in range(IMAGE_SIZE)] for _ in range(IMAGE_SIZE)]
    )
    output = NeuralNetwork()(image)
    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())