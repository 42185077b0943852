"""
Scalar node interface definitions.

This module defines the domain-level interface for scalar autograd nodes
using structural subtyping via `typing.Protocol`.

A node holds one floating-point value, a gradient accumulator, and the
operand nodes it was computed from. The interface is deliberately minimal
so the module layer and optimizers can be typed against it without
depending on the concrete infrastructure `Node`.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class INode(Protocol):
    """
    Domain-level scalar node interface.

    Notes
    -----
    - `value` is immutable for nodes produced by operations; only leaves are
      expected to be changed, through `set_value`.
    - `grad` is written by the backward engine (accumulated with `+=`) and by
      explicit zeroing only.
    """

    @property
    def value(self) -> float:
        """
        Return the current forward value of the node.
        """
        ...

    @property
    def grad(self) -> float:
        """
        Return the gradient accumulated into this node.
        """
        ...

    @property
    def children(self) -> Sequence["INode"]:
        """
        Return the operand nodes this node was computed from.

        Leaves (raw inputs, constants, parameters) return an empty sequence.
        """
        ...

    def set_value(self, value: float) -> None:
        """
        Overwrite the value of a leaf node.
        """
        ...

    def backward(self) -> None:
        """
        Run a backward pass with this node as the root.
        """
        ...

    def zero_grad(self) -> None:
        """
        Reset this node's gradient to zero.
        """
        ...
