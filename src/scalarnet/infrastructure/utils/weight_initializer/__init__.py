"""
Weight initialization public API.

Importing this package registers all built-in initializers (uniform,
constants, Xavier, Kaiming) into the `WeightInitializer` registry as an
import side effect.
"""

from . import _kaiming, _uniform, _xavier
from ._base import WeightInitializer

__all__ = [
    WeightInitializer.__name__,
]
