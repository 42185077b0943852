"""
Kaiming (He) weight initializers.

Implemented variants
--------------------
- ``kaiming``:
    Kaiming normal initialization using ``std = sqrt(2 / fan_in)``.
- ``kaiming_uniform``:
    Kaiming uniform initialization using
    ``U(-sqrt(6 / fan_in), +sqrt(6 / fan_in))``.
- ``kaiming_leaky_relu_*``:
    Kaiming normal adjusted for LeakyReLU-style slopes, registered via a
    helper.

Notes
-----
These are intended for weights feeding ReLU activations.
"""

import math

import numpy as np

from ._base import WeightInitializer, _assign
from ....domain.utils._weight_initialization import _calculate_fan_in_and_fan_out


def _fan_in(shape):
    fan_in, _ = _calculate_fan_in_and_fan_out(shape)
    return max(1, int(fan_in))


@WeightInitializer.register_initializer("kaiming")
def kaiming(params, shape):
    """
    Apply standard Kaiming (He) normal initialization.

        std = sqrt(2 / fan_in)

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
    std = math.sqrt(2.0 / float(_fan_in(shape)))
    return _assign(params, np.random.randn(len(params)) * std)


@WeightInitializer.register_initializer("kaiming_uniform")
def kaiming_uniform(params, shape):
    """
    Apply Kaiming uniform initialization with bound sqrt(6 / fan_in).
    """
    bound = math.sqrt(6.0 / float(_fan_in(shape)))
    return _assign(params, np.random.uniform(-bound, bound, size=len(params)))


def register_kaiming_leaky_relu(name: str, *, negative_slope: float) -> None:
    """
    Register a Kaiming initializer configured for a LeakyReLU-style slope.

    For negative slope ``a``:

        std = sqrt(2 / ((1 + a^2) * fan_in))
    """

    @WeightInitializer.register_initializer(name)
    def _init(params, shape):
        a = float(negative_slope)
        std = math.sqrt(2.0 / ((1.0 + a * a) * _fan_in(shape)))
        return _assign(params, np.random.randn(len(params)) * std)


register_kaiming_leaky_relu("kaiming_leaky_relu_0.2", negative_slope=0.2)
register_kaiming_leaky_relu("kaiming_leaky_relu_0.01", negative_slope=0.01)
