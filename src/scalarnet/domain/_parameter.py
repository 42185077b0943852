"""
Trainable parameter interface definitions.

This module defines the domain-level interface for trainable parameters used
by optimization algorithms. A parameter is a leaf node that persists across
training steps; optimizers read its gradient and overwrite its value.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IParameter(Protocol):
    """
    Domain-level interface for trainable parameters.

    Notes
    -----
    - Parameters may be frozen or unfrozen via the `requires_grad` flag.
    - Optimizers rely on this interface to discover and update parameters.
    """

    # ---- training control ----
    @property
    def requires_grad(self) -> bool:
        """
        Indicate whether this parameter should accumulate gradients.

        Returns
        -------
        bool
            True if gradients should be accumulated for this parameter,
            False if the parameter is frozen.
        """
        ...

    @requires_grad.setter
    def requires_grad(self, value: bool) -> None:
        """
        Enable or disable gradient accumulation for this parameter.
        """
        ...

    # ---- value / gradient access ----
    @property
    def value(self) -> float:
        """
        Return the current value of the parameter.
        """
        ...

    @property
    def grad(self) -> float:
        """
        Return the gradient accumulated during the last backward pass(es).
        """
        ...

    def set_value(self, value: float) -> None:
        """
        Overwrite the value of the parameter.
        """
        ...

    def zero_grad(self) -> None:
        """
        Reset the stored gradient to zero.
        """
        ...
