"""
Reverse-mode backward engine.

The engine turns a scalar root node into gradients on every node reachable
from it:

1. `topological_order` lists the reachable nodes so that every node comes
   after all of its children (post-order DFS).
2. `backward` seeds the root gradient and replays each node's local backward
   rule in reverse of that order, so a node pushes its gradient only after
   every consumer has contributed to it.

The traversal uses an explicit stack, so graph depth is bounded by memory
rather than by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Union

from ...domain._errors import NumericInstabilityError
from ..node import Node

logger = logging.getLogger(__name__)


def topological_order(root: Node) -> List[Node]:
    """
    Return all nodes reachable from `root`, children before parents.

    Parameters
    ----------
    root : Node
        Node to start the traversal from.

    Returns
    -------
    List[Node]
        Reachable nodes in post-order. `root` is the last entry. Each node
        appears exactly once, even when it is shared by several parents.

    Notes
    -----
    Nodes are deduplicated by identity (`id`), never by value.
    """
    order: List[Node] = []
    visited: set[int] = set()
    stack: list[tuple[Node, bool]] = [(root, False)]

    while stack:
        node, expanded = stack.pop()
        if expanded:
            order.append(node)
            continue

        nid = id(node)
        if nid in visited:
            continue
        visited.add(nid)

        stack.append((node, True))
        for child in reversed(node.children):
            if id(child) not in visited:
                stack.append((child, False))

    return order


def backward(root: Node, grad_out: float = 1.0) -> None:
    """
    Backpropagate from `root` to every reachable node.

    Parameters
    ----------
    root : Node
        Scalar output (typically a loss) to differentiate.
    grad_out : float, optional
        Seed gradient. The root's gradient is *set* to this value, not
        accumulated. Defaults to 1.0.

    Raises
    ------
    NumericInstabilityError
        If a node about to be replayed holds a non-finite value or gradient.

    Notes
    -----
    Gradients of all other nodes are accumulated with `+=`, so callers must
    zero parameter gradients between independent backward passes.
    """
    order = topological_order(root)
    logger.debug("backward: %d nodes reachable from root", len(order))

    root._grad = float(grad_out)

    for node in reversed(order):
        value = node.value
        grad = node.grad
        if not (math.isfinite(value) and math.isfinite(grad)):
            raise NumericInstabilityError(node.op, value, grad)
        node.backward_rule(grad)


def zero_grad(root_or_nodes: Union[Node, Iterable[Node]]) -> None:
    """
    Reset gradients to zero.

    Parameters
    ----------
    root_or_nodes : Node | Iterable[Node]
        Either a root node, in which case every node reachable from it is
        zeroed, or an iterable of nodes, in which case exactly those are.
    """
    if isinstance(root_or_nodes, Node):
        nodes: Iterable[Node] = topological_order(root_or_nodes)
    else:
        nodes = root_or_nodes

    for node in nodes:
        node.zero_grad()
