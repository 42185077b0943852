"""
Concrete trainable parameter implementation.

This module defines `Parameter`, an infrastructure-level implementation of the
domain contract `IParameter`. A `Parameter` is a leaf `Node` intended to be
optimized by training algorithms (e.g., SGD, Adam). Unlike inputs and
constants, parameters survive across forward passes: each step builds a new
graph on top of the same parameter leaves.

Design notes
------------
- `Parameter` subclasses `Node` so it can be used directly as an operand of
  every catalog operation.
- The `requires_grad` flag enables freezing/unfreezing parameters without
  changing module structure. Frozen parameters ignore incoming gradients and
  are skipped by optimizers.
"""

from __future__ import annotations

from ..domain._parameter import IParameter
from .node import Node, Number


class Parameter(Node, IParameter):
    """
    Trainable scalar leaf.

    Parameters
    ----------
    value : int | float, optional
        Initial value. Defaults to 0.0.
    requires_grad : bool, optional
        Whether this parameter should accumulate gradients. Defaults to True.
    """

    def __init__(self, value: Number = 0.0, *, requires_grad: bool = True) -> None:
        super().__init__(value)
        self._requires_grad: bool = bool(requires_grad)

    @property
    def requires_grad(self) -> bool:
        """
        Indicate whether this parameter should accumulate gradients.

        Returns
        -------
        bool
            True if gradients should be accumulated, False if frozen.
        """
        return self._requires_grad

    @requires_grad.setter
    def requires_grad(self, value: bool) -> None:
        """
        Enable or disable gradient accumulation.

        Parameters
        ----------
        value : bool
            If True, gradients are accumulated into `grad`.
            If False, incoming gradients are ignored.
        """
        self._requires_grad = bool(value)

    def _accumulate_grad(self, g: float) -> None:
        if not self._requires_grad:
            return
        super()._accumulate_grad(g)

    def update(self, lr: float) -> None:
        """
        Apply one plain gradient-descent step to this parameter.

        Implements:

            value <- value - lr * grad

        Parameters
        ----------
        lr : float
            Step size.

        Notes
        -----
        Frozen parameters are left unchanged.
        """
        if not self._requires_grad:
            return
        self._value -= float(lr) * self._grad

    def __repr__(self) -> str:
        frozen = "" if self._requires_grad else ", frozen"
        return f"Parameter(v={self._value:.3f}, g={self._grad:.3f}{frozen})"
