"""
Concrete scalar Node implementation.

This module provides `Node`, the autograd primitive of scalarnet. A node
holds a single float value and a gradient accumulator. Nodes produced by
differentiable operations additionally carry a `Context` that records their
operands (`children`) and the backward function of the operation.

Design notes
------------
- Operations never mutate their operands: every call builds a brand-new
  output node, so the graph is rebuilt on every forward pass.
- The arithmetic itself lives in the operation catalog
  (`scalarnet.infrastructure._function`); the methods and operator overloads
  on `Node` are thin delegates. The catalog is imported lazily to avoid an
  import cycle.
- Gradients are always accumulated with `+=`. A node reached through several
  parents receives the sum of their contributions.
- Equality is identity: `==` and hashing are not overloaded, so nodes with
  equal values stay distinct graph vertices.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

from ...domain._node import INode
from ._node_context import Context

Number = Union[int, float]


class Node(INode):
    """
    Scalar value participating in reverse-mode automatic differentiation.

    Parameters
    ----------
    value : int | float
        Forward value of the node.
    ctx : Optional[Context], optional
        Backward context. Set internally by differentiable operations;
        leaves (inputs, constants, parameters) have none.

    Notes
    -----
    - `grad` starts at 0.0 and is written only by the backward engine and
      by `zero_grad()`.
    - `set_value` is restricted to leaves; values computed by operations are
      immutable.
    """

    def __init__(self, value: Number, *, ctx: Optional[Context] = None) -> None:
        self._value = float(value)
        self._grad = 0.0
        self._ctx = ctx

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def value(self) -> float:
        """
        Return the forward value of this node.
        """
        return self._value

    @property
    def grad(self) -> float:
        """
        Return the gradient accumulated into this node.
        """
        return self._grad

    @property
    def children(self) -> Tuple["Node", ...]:
        """
        Return the operand nodes of this node (empty for leaves).
        """
        if self._ctx is None:
            return ()
        return tuple(self._ctx.parents)

    @property
    def op(self) -> str:
        """
        Return the name of the operation that produced this node.

        Leaves report "leaf".
        """
        if self._ctx is None:
            return "leaf"
        return self._ctx.op

    @property
    def is_leaf(self) -> bool:
        """
        Return True if this node was not produced by an operation.
        """
        return self._ctx is None

    def _get_ctx(self) -> Optional[Context]:
        return self._ctx

    def set_value(self, value: Number) -> None:
        """
        Overwrite the value of a leaf node.

        Parameters
        ----------
        value : int | float
            New value.

        Raises
        ------
        RuntimeError
            If this node was produced by an operation.
        """
        if self._ctx is not None:
            raise RuntimeError(
                f"set_value is only allowed on leaf nodes; this node was "
                f"produced by '{self._ctx.op}'."
            )
        self._value = float(value)

    def item(self) -> float:
        """
        Return the value as a Python float.
        """
        return self._value

    # ------------------------------------------------------------------
    # Autograd
    # ------------------------------------------------------------------
    def _accumulate_grad(self, g: float) -> None:
        self._grad += float(g)

    def backward_rule(self, upstream_grad: float) -> None:
        """
        Push `upstream_grad` into the gradients of this node's children.

        This replays the local derivative rule of the operation that created
        the node. It is a no-op for leaves.

        Parameters
        ----------
        upstream_grad : float
            Gradient of the root with respect to this node.

        Raises
        ------
        RuntimeError
            If the backward function returns the wrong number of gradients.
        """
        ctx = self._ctx
        if ctx is None:
            return

        parent_grads = ctx.backward_fn(upstream_grad)
        if len(parent_grads) != len(ctx.parents):
            raise RuntimeError(
                "backward_fn must return one grad per parent. "
                f"Got {len(parent_grads)} grads for {len(ctx.parents)} parents."
            )

        for parent, g in zip(ctx.parents, parent_grads):
            parent._accumulate_grad(g)

    def backward(self, grad_out: float = 1.0) -> None:
        """
        Backpropagate from this node through the graph.

        Parameters
        ----------
        grad_out : float, optional
            Seed gradient assigned to this node. Defaults to 1.0.

        Raises
        ------
        NumericInstabilityError
            If a non-finite value or gradient is met during replay.
        """
        from ..autograd._engine import backward

        backward(self, grad_out)

    def zero_grad(self) -> None:
        """
        Reset this node's gradient to zero.
        """
        self._grad = 0.0

    # ------------------------------------------------------------------
    # Operation catalog
    # ------------------------------------------------------------------
    def add(self, other: Union["Node", Number]) -> "Node":
        from .. import _function as F

        return F.add(self, other)

    def sub(self, other: Union["Node", Number]) -> "Node":
        from .. import _function as F

        return F.sub(self, other)

    def neg(self) -> "Node":
        from .. import _function as F

        return F.neg(self)

    def mul(self, other: Union["Node", Number]) -> "Node":
        from .. import _function as F

        return F.mul(self, other)

    def div(self, other: Union["Node", Number]) -> "Node":
        from .. import _function as F

        return F.div(self, other)

    def pow(self, exponent: Number) -> "Node":
        from .. import _function as F

        return F.pow(self, exponent)

    def exp(self) -> "Node":
        from .. import _function as F

        return F.exp(self)

    def log(self) -> "Node":
        from .. import _function as F

        return F.log(self)

    def relu(self) -> "Node":
        from .. import _function as F

        return F.relu(self)

    def sigmoid(self) -> "Node":
        from .. import _function as F

        return F.sigmoid(self)

    def tanh(self) -> "Node":
        from .. import _function as F

        return F.tanh(self)

    # ------------------------------------------------------------------
    # Operator overloads
    # ------------------------------------------------------------------
    def __add__(self, other: Union["Node", Number]) -> "Node":
        return self.add(other)

    def __radd__(self, other: Number) -> "Node":
        from .. import _function as F

        return F.add(other, self)

    def __sub__(self, other: Union["Node", Number]) -> "Node":
        return self.sub(other)

    def __rsub__(self, other: Number) -> "Node":
        from .. import _function as F

        return F.sub(other, self)

    def __mul__(self, other: Union["Node", Number]) -> "Node":
        return self.mul(other)

    def __rmul__(self, other: Number) -> "Node":
        from .. import _function as F

        return F.mul(other, self)

    def __truediv__(self, other: Union["Node", Number]) -> "Node":
        return self.div(other)

    def __rtruediv__(self, other: Number) -> "Node":
        from .. import _function as F

        return F.div(other, self)

    def __pow__(self, exponent: Number) -> "Node":
        if isinstance(exponent, Node):
            return NotImplemented
        return self.pow(exponent)

    def __neg__(self) -> "Node":
        return self.neg()

    def __float__(self) -> float:
        return self._value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(v={self._value:.3f}, g={self._grad:.3f})"
