"""Functional forms of tensor addition and matrix multiplication."""

from __future__ import annotations

from collections.abc import Iterable
from numbers import Real
from typing import Any

from .tensor import Tensor


def _as_tensor(value: Any) -> Tensor:
    if isinstance(value, Tensor):
        return value
    if isinstance(value, (str, bytes)):
        raise TypeError(f"Cannot build a tensor from {type(value).__name__}")
    if isinstance(value, (Real, Iterable)):
        return Tensor(value)
    raise TypeError(f"Cannot build a tensor from {type(value).__name__}")


def add(a: Any, b: Any) -> Tensor:
    """Element-wise sum with scalar broadcasting.

    Plain numbers and nested lists are turned into tensors first.
    """
    return _as_tensor(a) + _as_tensor(b)


def matmul(a: Any, b: Any) -> Tensor:
    """Dot, matrix-vector, vector-matrix or matrix-matrix product.

    Plain numbers and nested lists are turned into tensors first.
    """
    return _as_tensor(a) @ _as_tensor(b)