from ._models import Model
from ._sequential import Sequential

__all__ = [
    Model.__name__,
    Sequential.__name__,
]
