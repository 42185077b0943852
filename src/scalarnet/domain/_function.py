"""
Autograd function interface definitions.

This module defines the abstract base class for differentiable scalar
operations used in the automatic differentiation system. Concrete subclasses
of `Function` implement both the forward computation and the corresponding
local derivative rule.

This design is inspired by function-level autograd systems (e.g., PyTorch's
`autograd.Function`) while remaining lightweight: inputs and outputs are
plain Python floats, and graph wiring is done by the functional wrappers in
the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple


class Function(ABC):
    """
    Abstract base class for differentiable scalar operations.

    A `Function` encapsulates:
    - the forward computation on operand values
    - the backward computation mapping the upstream gradient to one local
      gradient per operand

    Notes
    -----
    - Methods are declared as `@staticmethod` to avoid implicit state on the
      function object itself.
    - The `ctx` argument acts as a per-invocation context, allowing safe reuse
      of `Function` classes across many graph nodes.
    """

    @staticmethod
    @abstractmethod
    def forward(ctx, *inputs: float) -> float:
        """
        Perform the forward computation.

        Parameters
        ----------
        ctx : Context
            A mutable context object used to store values required for the
            backward computation.
        *inputs : float
            Operand values.

        Returns
        -------
        float
            The output value.
        """
        ...

    @staticmethod
    @abstractmethod
    def backward(ctx, grad_out: float) -> Tuple[Any, ...]:
        """
        Compute gradients with respect to the operands.

        Parameters
        ----------
        ctx : Context
            The context object populated during the forward pass.
        grad_out : float
            Gradient of the loss with respect to the output.

        Returns
        -------
        tuple[float, ...]
            One gradient contribution per operand, in operand order.
        """
        ...
