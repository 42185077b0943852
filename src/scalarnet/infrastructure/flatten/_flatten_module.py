"""
Flatten module.

`Flatten` collapses any nesting of scalars into one flat list, reading the
structure left to right, outer to inner. It is typically used between a
convolution stack (`C x H x W` maps) and a `Linear` layer.

The operation only rearranges references: no node is created, so gradients
flow straight through to the original nodes.
"""

from __future__ import annotations

from typing import Any, List

from ...domain.model._stateless_mixin import StatelessConfigMixin
from .._module import Module
from ..module._serialization_core import register_module
from ..utils._nested import flatten_nested


@register_module()
class Flatten(StatelessConfigMixin, Module):
    """
    Flatten layer.

    Examples
    --------
    A `2 x 2 x 2` input `[[[a, b], [c, d]], [[e, f], [g, h]]]` becomes
    `[a, b, c, d, e, f, g, h]`.
    """

    def forward(self, x: Any) -> List[Any]:
        """
        Return every scalar of `x` in one list.
        """
        return flatten_nested(x)
