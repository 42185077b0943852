"""
Scalar node package.

Exposes the concrete autograd `Node` and the `Context` record attached to
nodes produced by differentiable operations.
"""

from ._node_context import Context
from ._node import Node, Number

__all__ = [
    Context.__name__,
    Node.__name__,
    "Number",
]
