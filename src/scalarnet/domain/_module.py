"""
Module (layer) interface definitions.

This module defines the domain-level interface for neural network modules
(layers) using structural subtyping via `typing.Protocol`.

Any object that implements the required methods is considered a valid module,
independent of inheritance, enabling flexible composition and clean separation
between domain contracts and infrastructure implementations.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from ._node import INode


@runtime_checkable
class IModule(Protocol):
    """
    Domain-level module (layer) interface.

    A module represents a composable unit of computation (e.g., layers,
    activation functions, or containers of other modules). It maps a
    structure of nodes (a vector, or a nested vector for 2-D and channeled
    data) to a new structure of nodes.

    Notes
    -----
    - Any object implementing both `forward` and `parameters` is considered
      a valid module.
    - `parameters` must return parameters in a stable order: the order is
      shared by optimizers and by flat weight persistence.
    """

    def forward(self, x: Any) -> Any:
        """
        Build the output graph for the given input structure.

        Parameters
        ----------
        x : Any
            A node, a sequence of nodes, or an arbitrarily nested sequence
            of nodes.

        Returns
        -------
        Any
            Newly constructed output nodes. Inputs are never mutated.
        """
        ...

    def parameters(self) -> Sequence[INode]:
        """
        Return the trainable parameters of the module.

        Returns
        -------
        Sequence[INode]
            Owned parameters, depth first, in declaration order.
        """
        ...
