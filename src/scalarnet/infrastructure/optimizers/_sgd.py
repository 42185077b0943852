"""
Stochastic Gradient Descent (SGD) optimizer implementation.

The optimizer updates `Parameter` leaves in place using their accumulated
gradients and a fixed learning rate, optionally applying classical L2
regularization (coupled weight decay).

Design notes
------------
- The managed parameter list is captured as a tuple at construction.
- Frozen parameters (`requires_grad == False`) are skipped.
- Momentum, Nesterov, and other SGD variants are omitted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Tuple

from .._parameter import Parameter

logger = logging.getLogger(__name__)


@dataclass
class SGD:
    """
    Stochastic Gradient Descent (SGD) optimizer.

    Update rule
    -----------
    For each parameter ``p`` with gradient ``g``:

    - If ``weight_decay > 0`` (classical L2 regularization):
        ``g <- g + weight_decay * p``
    - Parameter update:
        ``p <- p - lr * g``

    Parameters
    ----------
    params : Iterable[Parameter]
        Parameters to be optimized.
    lr : float, optional
        Learning rate. Must be positive. Defaults to 1e-3.
    weight_decay : float, optional
        Classical L2 weight decay coefficient (coupled). Must be non-negative.
        Defaults to 0.0.
    """

    params: Tuple[Parameter, ...]
    lr: float = 1e-3
    weight_decay: float = 0.0

    def __init__(
        self,
        params: Iterable[Parameter],
        lr: float = 1e-3,
        *,
        weight_decay: float = 0.0,
    ) -> None:
        """
        Construct an SGD optimizer.

        Raises
        ------
        ValueError
            If ``lr <= 0`` or ``weight_decay < 0``.
        """
        self.params = tuple(params)
        self.lr = float(lr)
        self.weight_decay = float(weight_decay)

        if self.lr <= 0.0:
            raise ValueError(f"lr must be > 0, got {self.lr}")
        if self.weight_decay < 0.0:
            raise ValueError(f"weight_decay must be >= 0, got {self.weight_decay}")

    def zero_grad(self) -> None:
        """
        Reset gradients of all managed parameters to zero.
        """
        for p in self.params:
            p.zero_grad()

    def step(self) -> None:
        """
        Apply one SGD update step to all managed parameters.
        """
        for p in self.params:
            if not p.requires_grad:
                continue

            g = p.grad
            if self.weight_decay != 0.0:
                g = g + self.weight_decay * p.value

            p.set_value(p.value - self.lr * g)

        logger.debug("SGD step over %d parameters (lr=%g)", len(self.params), self.lr)
