"""
Infrastructure module base class.

This module provides a concrete `Module` implementation that satisfies the
domain-level `IModule` protocol. It implements common conveniences used by
layers and containers, including:

- explicit parameter and child-module registration
- recursive parameter traversal in a stable order (`parameters`,
  `named_parameters`)
- training / evaluation mode switching
- flat value persistence (`state_values`, `load_values`)
- `__call__` forwarding to `forward` for ergonomic invocation

Parameters are discovered only through explicit registration; attributes are
never scanned. The registration order is the parameter order, which in turn is
the optimizer index order and the persistence order.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

import numpy as np

from ..domain._module import IModule
from ._parameter import Parameter
from .module._serialization_weights import extract_flat_values, load_flat_values_


class Module(IModule):
    """
    Infrastructure base class for layers/modules.

    Subclasses typically:
    - create `Parameter` instances and register them via
      `register_parameters`,
    - register child modules (containers only) via `register_module`,
    - implement `forward` to define computation.

    Attributes
    ----------
    training : bool
        Mode flag; True after construction. Affects `Dropout` only.
    _parameters : Dict[str, List[Parameter]]
        Named groups of parameters owned directly by this module, in
        registration order.
    _modules : Dict[str, Module]
        Child modules in registration order.
    """

    def __init__(self) -> None:
        self._parameters: Dict[str, List[Parameter]] = {}
        self._modules: Dict[str, Module] = {}
        self.training: bool = True

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register_parameters(
        self, name: str, params: Sequence[Parameter]
    ) -> List[Parameter]:
        """
        Register a named group of parameters with this module.

        Parameters
        ----------
        name : str
            Group name (e.g., "weight", "bias").
        params : Sequence[Parameter]
            Parameters of the group, in persistence order.

        Returns
        -------
        List[Parameter]
            The registered group.

        Raises
        ------
        TypeError
            If an entry is not a `Parameter`.
        ValueError
            If the group name is already taken.
        """
        if name in self._parameters:
            raise ValueError(f"Duplicate parameter group '{name}'")
        group = list(params)
        for p in group:
            if not isinstance(p, Parameter):
                raise TypeError(f"Expected Parameter, got {type(p)!r}")
        self._parameters[name] = group
        return group

    def register_module(self, name: str, module: Optional["Module"]) -> None:
        """
        Register a child module with this module.

        Parameters
        ----------
        name : str
            Name under which the module will be stored.
        module : Optional[Module]
            Child module to register. If None, registration is skipped.

        Raises
        ------
        TypeError
            If `module` is not a `Module`.
        """
        if module is None:
            return
        if not isinstance(module, Module):
            raise TypeError(f"Expected Module, got {type(module)!r}")
        self._modules[name] = module

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def parameters(self) -> List[Parameter]:
        """
        Return every parameter of this module and its children.

        Returns
        -------
        List[Parameter]
            Own parameter groups first (in registration order), then each
            child's parameters, depth first.
        """
        out: List[Parameter] = []
        for group in self._parameters.values():
            out.extend(group)
        for child in self._modules.values():
            out.extend(child.parameters())
        return out

    def named_parameters(self, prefix: str = "") -> Iterator[tuple[str, Parameter]]:
        """
        Yield `(qualified_name, parameter)` pairs in `parameters()` order.

        Names have the form "<child>.<group>.<index>", e.g. "0.weight.3".
        """
        base = prefix + "." if prefix else ""

        for name, group in self._parameters.items():
            for i, p in enumerate(group):
                yield f"{base}{name}.{i}", p

        for child_name, child in self._modules.items():
            yield from child.named_parameters(f"{base}{child_name}")

    def named_children(self) -> Iterator[tuple[str, "Module"]]:
        """
        Yield `(name, module)` pairs of direct child modules.
        """
        yield from self._modules.items()

    def children(self) -> Iterator["Module"]:
        """
        Yield direct child modules.
        """
        yield from self._modules.values()

    def num_parameters(self) -> int:
        """
        Return the number of scalar parameters.
        """
        return len(self.parameters())

    # ------------------------------------------------------------------
    # Training state
    # ------------------------------------------------------------------
    def zero_grad(self) -> None:
        """
        Reset the gradient of every parameter to zero.

        Notes
        -----
        Only parameter leaves are touched. Intermediate nodes of a graph that
        was already backpropagated keep their gradients, so running
        `backward` a second time on the same graph requires
        `zero_grad(root)` from `scalarnet.infrastructure.autograd` instead.
        A fresh forward pass builds new intermediate nodes and needs only
        this method.
        """
        for p in self.parameters():
            p.zero_grad()

    def train(self, mode: bool = True) -> "Module":
        """
        Set the training flag on this module and all children.

        Returns
        -------
        Module
            `self`, for chaining.
        """
        self.training = bool(mode)
        for child in self._modules.values():
            child.train(mode)
        return self

    def eval(self) -> "Module":
        """
        Switch this module and all children to evaluation mode.
        """
        return self.train(False)

    # ------------------------------------------------------------------
    # Flat persistence
    # ------------------------------------------------------------------
    def state_values(self) -> np.ndarray:
        """
        Return parameter values as a flat float64 array in `parameters()` order.
        """
        return extract_flat_values(self)

    def load_values(self, values: Union[Sequence[float], np.ndarray]) -> None:
        """
        Assign parameter values positionally from a flat sequence.

        Raises
        ------
        ShapeMismatchError
            If `len(values)` differs from the number of parameters.
        """
        load_flat_values_(self, values)

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------
    def forward(self, x: Any) -> Any:
        """
        Execute the forward computation of the module.

        Subclasses must implement this.
        """
        raise NotImplementedError

    def __call__(self, x: Any) -> Any:
        """
        Call the module as a function, delegating to `forward`.
        """
        return self.forward(x)

    def extra_repr(self) -> str:
        """
        Return the argument summary shown inside `repr()`.
        """
        cfg = self.get_config() if _has_config(self) else {}
        return ", ".join(f"{k}={v!r}" for k, v in cfg.items())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.extra_repr()})"

    # ------------------------------------------------------------------
    # Serialization hooks (opt-in contract)
    # ------------------------------------------------------------------
    def get_config(self) -> Dict[str, Any]:
        """
        Return a JSON-serializable configuration for this module.

        Subclasses that participate in JSON-based model save/load MUST
        override this method.

        Raises
        ------
        NotImplementedError
            If the module does not support JSON serialization.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} does not implement get_config(). "
            "This module cannot be serialized to JSON."
        )

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Module":
        """
        Reconstruct a module from a JSON configuration.

        Raises
        ------
        NotImplementedError
            If the module does not support JSON deserialization.
        """
        raise NotImplementedError(
            f"{cls.__name__} does not implement from_config(). "
            "This module cannot be deserialized from JSON."
        )


def _has_config(m: Module) -> bool:
    return type(m).get_config is not Module.get_config
