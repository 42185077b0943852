"""
Xavier/Glorot weight initializers.

Implemented variants
--------------------
- ``xavier``:
    Xavier normal initialization using ``std = sqrt(2 / (fan_in + fan_out))``.
- ``xavier_uniform``:
    Xavier uniform initialization using
    ``U(-sqrt(6/(fan_in+fan_out)), +sqrt(6/(fan_in+fan_out)))``.
- ``xavier_tanh``:
    Xavier normal with tanh gain (``gain = 5/3``).

Notes
-----
Fan-in and fan-out are computed from the logical grid shape via
``_calculate_fan_in_and_fan_out``.
"""

import math

import numpy as np

from ._base import WeightInitializer, _assign
from ....domain.utils._weight_initialization import _calculate_fan_in_and_fan_out


def _fans(shape):
    fan_in, fan_out = _calculate_fan_in_and_fan_out(shape)
    return max(1, int(fan_in)), max(1, int(fan_out))


@WeightInitializer.register_initializer("xavier")
def xavier(params, shape):
    """
    Apply Xavier (Glorot) normal initialization.

    This initializes weights from a zero-mean normal distribution with
    standard deviation:

        std = sqrt(2 / (fan_in + fan_out))

    Parameters
    ----------
    params:
        Parameters to initialize in place.
    shape:
        Logical grid shape of `params`.

    Returns
    -------
    Sequence[Parameter]
        The initialized parameters (same objects).
    """
    fan_in, fan_out = _fans(shape)
    std = math.sqrt(2.0 / float(fan_in + fan_out))
    return _assign(params, np.random.randn(len(params)) * std)


@WeightInitializer.register_initializer("xavier_uniform")
def xavier_uniform(params, shape):
    """
    Apply Xavier (Glorot) uniform initialization.

        U(-bound, +bound), where bound = sqrt(6 / (fan_in + fan_out))
    """
    fan_in, fan_out = _fans(shape)
    bound = math.sqrt(6.0 / float(fan_in + fan_out))
    return _assign(params, np.random.uniform(-bound, bound, size=len(params)))


@WeightInitializer.register_initializer("xavier_tanh")
def xavier_tanh(params, shape):
    """
    Apply Xavier normal initialization with the tanh gain of 5/3.
    """
    fan_in, fan_out = _fans(shape)
    std = (5.0 / 3.0) * math.sqrt(2.0 / float(fan_in + fan_out))
    return _assign(params, np.random.randn(len(params)) * std)
