"""
Activation modules.

Each activation is a stateless `Module` that applies a catalog operation to
every scalar of its input, whatever the nesting: a vector, a 2-D map, or a
stack of maps all come back with the same structure.

`Softmax` is the exception: it normalizes every *innermost vector* of the
input as a unit, so a list of vectors yields a list of distributions.
"""

from __future__ import annotations

from typing import Any

from ..domain.model._stateless_mixin import StatelessConfigMixin
from ._function import relu, sigmoid, softmax, tanh
from ._module import Module
from .module._serialization_core import register_module
from .utils._nested import map_nested, map_vectors


@register_module()
class Sigmoid(StatelessConfigMixin, Module):
    """
    Elementwise logistic sigmoid, `1 / (1 + exp(-x))`.
    """

    def forward(self, x: Any) -> Any:
        """
        Apply sigmoid to every scalar of `x`.

        Parameters
        ----------
        x : Any
            Node or nested sequence of nodes.

        Returns
        -------
        Any
            Same structure as `x`, holding new nodes.
        """
        return map_nested(sigmoid, x)


@register_module()
class ReLU(StatelessConfigMixin, Module):
    """
    Elementwise rectified linear unit, `max(0, x)`.

    The derivative at exactly zero is taken as 0.
    """

    def forward(self, x: Any) -> Any:
        return map_nested(relu, x)


@register_module()
class Tanh(StatelessConfigMixin, Module):
    """
    Elementwise hyperbolic tangent.
    """

    def forward(self, x: Any) -> Any:
        return map_nested(tanh, x)


@register_module()
class Softmax(StatelessConfigMixin, Module):
    """
    Softmax over every innermost vector.

    Behavior
    --------
    For each innermost vector `v`:

        out_i = exp(v_i) / sum_j exp(v_j)

    Notes
    -----
    - Entries of each output vector sum to 1 and lie in (0, 1) for moderate
      inputs.
    - The maximum is not subtracted first. Inputs large enough to overflow
      `exp` trigger a `RuntimeWarning`, and the resulting infinities surface
      as `NumericInstabilityError` during backward.
    """

    def forward(self, x: Any) -> Any:
        """
        Normalize every innermost vector of `x`.

        Raises
        ------
        TypeError
            If `x` is a bare scalar.
        ValueError
            If a sequence mixes scalars and nested sequences.
        """
        return map_vectors(softmax, x)
