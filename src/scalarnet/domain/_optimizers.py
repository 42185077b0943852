"""
Domain-level optimizer contracts for scalarnet.

This module defines the `IOptimizer` protocol, which specifies the minimal
interface required for optimizer implementations (e.g., SGD, Adam).

Notes
-----
- Domain contracts are backend-agnostic and must not depend on NumPy or
  infrastructure implementations.
- Optimizers are responsible for updating trainable parameters based on their
  accumulated gradients. How gradients are computed (the backward engine) is
  outside the scope of this protocol.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class IOptimizer(Protocol):
    """
    Optimizer interface contract.

    An optimizer holds references to trainable parameters and updates their
    values in place according to a specific optimization rule.

    Required methods
    ----------------
    - `step()` applies one optimization update to managed parameters.
    - `zero_grad()` resets gradients of managed parameters to zero.
    """

    def step(self) -> None:
        """
        Apply one optimization step.
        """
        ...

    def zero_grad(self) -> None:
        """
        Reset gradients for all managed parameters.
        """
        ...

    @property
    def params(self) -> Sequence[object]:
        """
        Return the parameters managed by this optimizer, in update order.
        """
        ...
