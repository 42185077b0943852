"""
Helpers for nested sequences of scalar nodes.

Modules in scalarnet consume and produce plain Python lists: a vector is a
list of nodes, a 2-D map is a list of rows, a channeled map is a list of
2-D maps. The helpers here walk such structures without caring about their
depth.
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Callable, List, Sequence, Union

import numpy as np

from ...domain._errors import ShapeMismatchError
from ..node import Node


def _is_scalar(x: Any) -> bool:
    return isinstance(x, (Node, Real))


def _is_sequence(x: Any) -> bool:
    return isinstance(x, (list, tuple))


def map_nested(fn: Callable[[Node], Node], x: Any) -> Any:
    """
    Apply `fn` to every scalar of a nested structure.

    Parameters
    ----------
    fn : Callable[[Node], Node]
        Function applied to each scalar. Python numbers are promoted to
        constant nodes first.
    x : Node | float | Sequence
        Scalar or arbitrarily nested sequence of scalars.

    Returns
    -------
    Any
        Structure of the same shape holding the outputs of `fn` (sequences
        come back as lists).

    Raises
    ------
    TypeError
        If a leaf of `x` is neither a node nor a real number.
    """
    if isinstance(x, Node):
        return fn(x)
    if isinstance(x, Real):
        return fn(Node(float(x)))
    if _is_sequence(x):
        return [map_nested(fn, e) for e in x]
    raise TypeError(f"Expected a node, a number, or a sequence, got {type(x)!r}")


def map_vectors(fn: Callable[[List[Any]], List[Any]], x: Any) -> Any:
    """
    Apply `fn` to every innermost vector of a nested structure.

    An innermost vector is a sequence whose entries are all scalars. As in
    `map_nested`, Python numbers are promoted to constant nodes, so `fn`
    always receives a list of nodes.

    Raises
    ------
    TypeError
        If `x` is a bare scalar or contains a non-numeric leaf.
    ValueError
        If a sequence mixes scalars with nested sequences.
    """
    if not _is_sequence(x):
        raise TypeError(f"Expected a sequence of scalars, got {type(x)!r}")

    if len(x) > 0 and all(_is_scalar(e) for e in x):
        return fn([e if isinstance(e, Node) else Node(float(e)) for e in x])
    if any(_is_scalar(e) for e in x):
        raise ValueError("Sequence mixes scalars with nested sequences")
    return [map_vectors(fn, e) for e in x]


def flatten_nested(x: Any) -> List[Any]:
    """
    Collapse arbitrary nesting into one flat list.

    Entries are emitted left to right, outer to inner. A bare scalar yields a
    one-element list.
    """
    out: List[Any] = []
    stack: List[Any] = [x]
    while stack:
        item = stack.pop()
        if _is_sequence(item):
            stack.extend(reversed(item))
        else:
            out.append(item)
    return out


def from_values(x: Union[Real, Sequence[Any], np.ndarray, Node]) -> Any:
    """
    Wrap raw numeric data as leaf nodes.

    Parameters
    ----------
    x : float | Sequence | np.ndarray
        A number, a NumPy array, or a nested sequence of numbers. Existing
        nodes are passed through unchanged.

    Returns
    -------
    Any
        A node or a nested list of nodes mirroring `x`.

    Raises
    ------
    TypeError
        If `x` contains something other than numbers and nodes.
    """
    if isinstance(x, np.ndarray):
        x = x.tolist()
    if isinstance(x, Node):
        return x
    if isinstance(x, (Real, np.generic)):
        return Node(float(x))
    if _is_sequence(x):
        return [from_values(e) for e in x]
    raise TypeError(f"Cannot convert {type(x)!r} to nodes")


def to_values(x: Any) -> Any:
    """
    Read a value snapshot out of a node or nested structure of nodes.

    Returns
    -------
    Any
        A float, or nested lists of floats mirroring `x`.
    """
    if isinstance(x, Node):
        return x.value
    if isinstance(x, Real):
        return float(x)
    if _is_sequence(x):
        return [to_values(e) for e in x]
    raise TypeError(f"Cannot read values from {type(x)!r}")


def to_grads(x: Any) -> Any:
    """
    Read a gradient snapshot out of a node or nested structure of nodes.
    """
    if isinstance(x, Node):
        return x.grad
    if _is_sequence(x):
        return [to_grads(e) for e in x]
    raise TypeError(f"Cannot read gradients from {type(x)!r}")


def argmax(xs: Sequence[Union[Node, Real]]) -> int:
    """
    Return the index of the largest entry (first one on ties).

    Raises
    ------
    ValueError
        If `xs` is empty.
    """
    if len(xs) == 0:
        raise ValueError("argmax of an empty sequence")
    values = [x.value if isinstance(x, Node) else float(x) for x in xs]
    return int(np.argmax(values))


def grid_shape(x: Any, what: str) -> tuple[int, int]:
    """
    Return `(rows, cols)` of a rectangular 2-D map of scalars.

    Raises
    ------
    ShapeMismatchError
        If the map is empty, ragged, or not two-dimensional.
    """
    if not _is_sequence(x) or len(x) == 0:
        raise ShapeMismatchError(what, "non-empty 2-D map", _describe(x))

    rows = len(x)
    first = x[0]
    if not _is_sequence(first) or len(first) == 0:
        raise ShapeMismatchError(what, "non-empty 2-D map", _describe(x))

    cols = len(first)
    for r, row in enumerate(x):
        if not _is_sequence(row) or not all(_is_scalar(e) for e in row):
            raise ShapeMismatchError(what, "rows of scalars", f"row {r}: {_describe(row)}")
        if len(row) != cols:
            raise ShapeMismatchError(f"{what} row {r} length", cols, len(row))
    return rows, cols


def _describe(x: Any) -> str:
    if _is_sequence(x):
        return f"sequence of length {len(x)}"
    return type(x).__name__
