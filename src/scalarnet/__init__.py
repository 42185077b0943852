"""
scalarnet: a scalar reverse-mode autograd engine with neural-network layers.

Every value is a `Node` holding one float. Operations build a fresh graph on
each forward pass; `Node.backward()` walks it in reverse topological order
and accumulates gradients into the leaves. Layers (`Linear`, `Conv1d`,
`Conv2d`, activations, `Dropout`, `Flatten`, `Sequential`) compose those
operations over nested lists of nodes, and `SGD` / `Adam` update the
`Parameter` leaves they own.
"""

import logging

from .domain import (
    LogDomainError,
    NumericInstabilityError,
    ScalarNetError,
    ShapeMismatchError,
)
from .infrastructure import *  # noqa: F401,F403
from .infrastructure import __all__ as _infrastructure_all

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "LogDomainError",
    "NumericInstabilityError",
    "ScalarNetError",
    "ShapeMismatchError",
    *_infrastructure_all,
]
