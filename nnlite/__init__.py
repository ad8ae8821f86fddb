"""Small tensors with autograd, neural-network layers, losses, SGD and state-dict files."""

__version__ = "0.1.0"