"""Base class for layers and networks that own named parameters."""

from __future__ import annotations

import warnings
from collections.abc import Mapping

from .tensor import Tensor


class Module:
    """A callable layer holding parameters and nested sub-modules."""

    def __init__(self) -> None:
        self._parameters: dict[str, Tensor] = {}
        self._modules: dict[str, Module] = {}

    def forward(self, input: Tensor) -> Tensor:
        raise NotImplementedError("Forward not implemented")

    def __call__(self, input: Tensor) -> Tensor:
        return self.forward(input)

    def register_parameter(self, name: str, param: Tensor) -> None:
        if name in self._parameters:
            raise ValueError(f"Parameter '{name}' already registered")
        self._parameters[name] = param

    def register_module(self, name: str, module: Module) -> None:
        if name in self._modules:
            raise ValueError(f"Module '{name}' already registered")
        self._modules[name] = module

    def parameters(self) -> list[tuple[str, Tensor]]:
        """Own parameters first, then those of sub-modules, with dotted names."""
        params = list(self._parameters.items())
        for prefix, module in self._modules.items():
            params.extend(
                (f"{prefix}.{name}" if prefix else name, tensor)
                for name, tensor in module.parameters()
            )
        return params

    def state_dict(self) -> dict[str, Tensor]:
        return dict(self.parameters())

    def load_state_dict(self, state_dict: Mapping[str, Tensor]) -> None:
        """Copy stored values into matching parameters; warn on missing names."""
        for name, param in self.parameters():
            stored = state_dict.get(name)
            if stored is None:
                warnings.warn(
                    f"Parameter '{name}' not found in state_dict", stacklevel=2
                )
                continue
            if param.shape != stored.shape:
                raise ValueError(f"Parameter '{name}' has different shape in state_dict")
            param.data = stored.data