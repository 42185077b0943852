"""
Uniform and constant weight initializers.

Provided initializers
---------------------
- ``uniform``:
    Independent draws from ``U(-1, 1)``. This is the default of every layer.
- ``zeros`` / ``ones``:
    Constant fills, typically used for tests or deterministic setups.
"""

import numpy as np

from ._base import WeightInitializer, _assign


@WeightInitializer.register_initializer("uniform")
def uniform(params, shape):
    """
    Fill `params` with independent draws from U(-1, 1).
    """
    return _assign(params, np.random.uniform(-1.0, 1.0, size=len(params)))


@WeightInitializer.register_initializer("zeros")
def zeros(params, shape):
    """
    Set every parameter to zero.
    """
    return _assign(params, np.zeros(len(params)))


@WeightInitializer.register_initializer("ones")
def ones(params, shape):
    """
    Set every parameter to one.
    """
    return _assign(params, np.ones(len(params)))
