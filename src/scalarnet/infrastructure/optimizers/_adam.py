"""
Adam optimizer implementation.

This module provides a minimal implementation of the Adam optimization
algorithm over scalar `Parameter` leaves. The first and second moment
estimates are kept as NumPy float64 vectors aligned with the managed
parameter tuple, so index `i` of `m` / `v` always belongs to `params[i]`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from .._parameter import Parameter

logger = logging.getLogger(__name__)


@dataclass
class Adam:
    """
    Adam optimizer.

    Update rule
    -----------
    Let ``g_t`` be the gradient at step ``t``:

        m_t = beta1 * m_{t-1} + (1 - beta1) * g_t
        v_t = beta2 * v_{t-1} + (1 - beta2) * (g_t ** 2)

        m_hat = m_t / (1 - beta1^t)
        v_hat = v_t / (1 - beta2^t)

        p <- p - lr * m_hat / (sqrt(v_hat) + eps)

    If ``weight_decay > 0`` (classical L2 regularization):

        g_t <- g_t + weight_decay * p

    Parameters
    ----------
    params : Iterable[Parameter]
        Parameters to be optimized.
    lr : float, optional
        Learning rate. Must be positive. Defaults to 1e-3.
    betas : tuple[float, float], optional
        Exponential decay rates for the first and second moments.
        Each must be in [0, 1). Defaults to (0.9, 0.999).
    eps : float, optional
        Numerical stability epsilon added to the denominator. Must be positive.
        Defaults to 1e-8.
    weight_decay : float, optional
        Classical L2 regularization coefficient (coupled). Must be non-negative.
        Defaults to 0.0.

    Notes
    -----
    - The step counter ``t`` is shared by all parameters.
    - Frozen parameters keep their value and moment estimates unchanged.
    """

    params: Tuple[Parameter, ...]
    lr: float = 1e-3
    betas: Tuple[float, float] = (0.9, 0.999)
    eps: float = 1e-8
    weight_decay: float = 0.0

    def __init__(
        self,
        params: Iterable[Parameter],
        lr: float = 1e-3,
        *,
        betas: Tuple[float, float] = (0.9, 0.999),
        eps: float = 1e-8,
        weight_decay: float = 0.0,
    ) -> None:
        """
        Construct an Adam optimizer.

        Raises
        ------
        ValueError
            If any hyperparameter is outside its valid range.
        """
        self.params = tuple(params)
        self.lr = float(lr)
        self.betas = (float(betas[0]), float(betas[1]))
        self.eps = float(eps)
        self.weight_decay = float(weight_decay)

        b1, b2 = self.betas
        if self.lr <= 0.0:
            raise ValueError(f"lr must be > 0, got {self.lr}")
        if not (0.0 <= b1 < 1.0) or not (0.0 <= b2 < 1.0):
            raise ValueError(f"betas must be in [0,1), got {self.betas}")
        if self.eps <= 0.0:
            raise ValueError(f"eps must be > 0, got {self.eps}")
        if self.weight_decay < 0.0:
            raise ValueError(f"weight_decay must be >= 0, got {self.weight_decay}")

        n = len(self.params)
        self.m = np.zeros(n, dtype=np.float64)
        self.v = np.zeros(n, dtype=np.float64)
        self.t = 0

    def zero_grad(self) -> None:
        """
        Reset gradients of all managed parameters to zero.
        """
        for p in self.params:
            p.zero_grad()

    def step(self) -> None:
        """
        Apply one Adam update step to all managed parameters.
        """
        if not self.params:
            return

        b1, b2 = self.betas
        self.t += 1
        t = self.t

        values = np.fromiter((p.value for p in self.params), dtype=np.float64)
        grads = np.fromiter((p.grad for p in self.params), dtype=np.float64)
        active = np.fromiter((p.requires_grad for p in self.params), dtype=bool)

        if self.weight_decay != 0.0:
            grads = grads + self.weight_decay * values

        self.m[active] = b1 * self.m[active] + (1.0 - b1) * grads[active]
        self.v[active] = b2 * self.v[active] + (1.0 - b2) * grads[active] ** 2

        m_hat = self.m / (1.0 - b1**t)
        v_hat = self.v / (1.0 - b2**t)
        updated = values - self.lr * m_hat / (np.sqrt(v_hat) + self.eps)

        for i in np.flatnonzero(active):
            self.params[i].set_value(float(updated[i]))

        logger.debug("Adam step t=%d over %d parameters", t, len(self.params))
