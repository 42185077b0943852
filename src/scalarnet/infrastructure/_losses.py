"""
Loss functions for scalarnet.

Losses are plain functions composed from the operation catalog, so their
gradients come for free from the primitives' backward rules. Each returns a
single scalar `Node` intended to be the root of a backward pass.

Currently implemented losses:
- sse  : Sum of Squared Errors
- mse  : Mean Squared Error
- cross_entropy : negative log-probability of a class index
- categorical_cross_entropy : cross entropy against a target distribution
- binary_cross_entropy : Binary Cross Entropy (probability inputs)

Notes
-----
- Predictions and targets may be nested (e.g. 2-D maps); both are flattened
  before pairing, and their lengths must agree.
- Classification losses operate on probabilities (e.g. `Softmax` or
  `Sigmoid` outputs). A probability of exactly zero that contributes to the
  loss raises `LogDomainError`.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple, Union

from ..domain._errors import ShapeMismatchError
from ._function import div, log, mul, neg, pow, reduce_sum, sub
from .node import Node
from .utils._nested import flatten_nested


def _paired(pred: Any, target: Any, what: str) -> List[Tuple[Any, Any]]:
    p = flatten_nested(pred)
    t = flatten_nested(target)
    if len(p) != len(t):
        raise ShapeMismatchError(f"{what} target length", len(p), len(t))
    if not p:
        raise ShapeMismatchError(f"{what} input length", "at least 1", 0)
    return list(zip(p, t))


def sse(pred: Any, target: Any) -> Node:
    """
    Sum of squared errors, `sum_i (pred_i - target_i) ** 2`.

    Parameters
    ----------
    pred : Any
        Node or nested sequence of nodes.
    target : Any
        Numbers or nodes with the same number of scalars as `pred`.

    Returns
    -------
    Node
        Scalar loss node.

    Raises
    ------
    ShapeMismatchError
        If `pred` and `target` hold different numbers of scalars.
    """
    return reduce_sum([pow(sub(p, t), 2) for p, t in _paired(pred, target, "sse")])


def mse(pred: Any, target: Any) -> Node:
    """
    Mean squared error, `sse(pred, target) / n`.
    """
    n = len(flatten_nested(pred))
    return div(sse(pred, target), float(n))


def cross_entropy(probs: Sequence[Union[Node, float]], label: int) -> Node:
    """
    Negative log-probability of the true class, `-log(probs[label])`.

    Parameters
    ----------
    probs : Sequence[Node | float]
        Class probabilities (e.g. a `Softmax` output).
    label : int
        Index of the true class.

    Raises
    ------
    IndexError
        If `label` is out of range.
    LogDomainError
        If `probs[label]` is not strictly positive.
    """
    label = int(label)
    if not (0 <= label < len(probs)):
        raise IndexError(f"label {label} out of range for {len(probs)} classes")
    return neg(log(probs[label]))


def categorical_cross_entropy(
    probs: Sequence[Union[Node, float]], target: Sequence[float]
) -> Node:
    """
    Cross entropy against a target distribution, `-sum_i t_i * log(p_i)`.

    Entries whose target weight is zero are skipped, so their probability
    may be zero.
    """
    terms = [
        mul(t, log(p)) for p, t in _paired(probs, target, "categorical_cross_entropy")
        if float(t) != 0.0
    ]
    if not terms:
        return Node(0.0)
    return neg(reduce_sum(terms))


def binary_cross_entropy(pred: Any, target: Any) -> Node:
    """
    Mean binary cross entropy over probability predictions.

    Implements:

        -mean_i [ y_i * log(p_i) + (1 - y_i) * log(1 - p_i) ]

    Terms whose weight (`y_i` or `1 - y_i`) is zero are skipped.
    """
    pairs = _paired(pred, target, "binary_cross_entropy")
    terms: List[Node] = []
    for p, y in pairs:
        y = float(y)
        if y != 0.0:
            terms.append(mul(y, log(p)))
        if y != 1.0:
            terms.append(mul(1.0 - y, log(sub(1.0, p))))
    if not terms:
        return Node(0.0)
    return div(neg(reduce_sum(terms)), float(len(pairs)))
