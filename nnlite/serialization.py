"""Binary storage of named tensors."""

from __future__ import annotations

import os
import struct
from collections.abc import Mapping
from typing import BinaryIO

from .tensor import Tensor

MAGIC_NUMBER = 777

_MAGIC = struct.Struct("<i")
_SIZE = struct.Struct("<Q")


def save(
    state_dict: Mapping[str, Tensor], filename: str | os.PathLike[str]
) -> None:
    """Write every named tensor: name, shape and float32 values."""
    with open(filename, "wb") as file:
        file.write(_MAGIC.pack(MAGIC_NUMBER))
        for name, tensor in state_dict.items():
            encoded = name.encode("utf-8")
            file.write(_SIZE.pack(len(encoded)))
            file.write(encoded)
            file.write(_SIZE.pack(len(tensor.shape)))
            file.write(struct.pack(f"<{len(tensor.shape)}Q", *tensor.shape))
            file.write(_SIZE.pack(tensor.numel()))
            file.write(struct.pack(f"<{tensor.numel()}f", *tensor.data))


def _read_exact(file: BinaryIO, count: int) -> bytes:
    chunk = file.read(count)
    if len(chunk) != count:
        raise ValueError("Bad file format: truncated record")
    return chunk


def _read_size(file: BinaryIO) -> int:
    return _SIZE.unpack(_read_exact(file, _SIZE.size))[0]


def _build(raw: list[float], shape: tuple[int, ...]) -> Tensor:
    if not shape:
        if not raw:
            raise ValueError("Bad file format: scalar without a value")
        return Tensor(raw[0])
    if len(shape) == 1:
        return Tensor(raw)
    if len(shape) == 2:
        rows, cols = shape
        if rows * cols != len(raw):
            raise ValueError("Bad file format: shape does not match data length")
        return Tensor([raw[row * cols:(row + 1) * cols] for row in range(rows)])
    raise ValueError(f"Unsupported tensor dimensionality: {len(shape)}")


def load(filename: str | os.PathLike[str]) -> dict[str, Tensor]:
    """Read named tensors written by :func:`save`."""
    state_dict: dict[str, Tensor] = {}
    with open(filename, "rb") as file:
        header = file.read(_MAGIC.size)
        if len(header) != _MAGIC.size or _MAGIC.unpack(header)[0] != MAGIC_NUMBER:
            raise ValueError("Bad file format: wrong magic number")
        while True:
            length_bytes = file.read(_SIZE.size)
            if len(length_bytes) < _SIZE.size:
                break
            name_len = _SIZE.unpack(length_bytes)[0]
            name = _read_exact(file, name_len).decode("utf-8")
            ndim = _read_size(file)
            shape = struct.unpack(f"<{ndim}Q", _read_exact(file, ndim * _SIZE.size))
            count = _read_size(file)
            raw = list(struct.unpack(f"<{count}f", _read_exact(file, count * 4)))
            state_dict[name] = _build(raw, shape)
    return state_dict