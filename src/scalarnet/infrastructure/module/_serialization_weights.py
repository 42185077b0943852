"""
Flat parameter-value persistence.

A model's weights are persisted as one flat float sequence whose i-th entry
belongs to the i-th entry of `parameters()`. The helpers here move values
between that sequence and the parameter leaves.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

import numpy as np

from ...domain._errors import ShapeMismatchError


def extract_flat_values(model: Any) -> np.ndarray:
    """
    Return the values of `model.parameters()` as a 1-D float64 array.
    """
    return np.fromiter(
        (p.value for p in model.parameters()), dtype=np.float64
    )


def load_flat_values_(model: Any, values: Union[Sequence[float], np.ndarray]) -> None:
    """
    In-place load of parameter values from a flat sequence.

    Parameters
    ----------
    model : Any
        Object exposing `parameters()`.
    values : Sequence[float] | np.ndarray
        One value per parameter, in `parameters()` order. Any array shape is
        accepted and flattened in C order.

    Raises
    ------
    ShapeMismatchError
        If the number of values differs from the number of parameters.
    ValueError
        If a value is not finite.
    """
    params = list(model.parameters())
    arr = np.asarray(values, dtype=np.float64).reshape(-1)

    if arr.size != len(params):
        raise ShapeMismatchError("parameter count", len(params), int(arr.size))
    if not np.all(np.isfinite(arr)):
        raise ValueError("Cannot load non-finite parameter values")

    for p, v in zip(params, arr):
        p.set_value(float(v))
