"""
Domain contracts: protocols, abstract bases, and error types. This layer
has no third-party dependencies.
"""

from ._errors import (
    LogDomainError,
    NumericInstabilityError,
    ScalarNetError,
    ShapeMismatchError,
)
from ._function import Function
from ._module import IModule
from ._node import INode
from ._optimizers import IOptimizer
from ._parameter import IParameter

__all__ = [
    "Function",
    "IModule",
    "INode",
    "IOptimizer",
    "IParameter",
    "LogDomainError",
    "NumericInstabilityError",
    "ScalarNetError",
    "ShapeMismatchError",
]
