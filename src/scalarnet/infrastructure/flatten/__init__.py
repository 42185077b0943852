from ._flatten_module import Flatten

__all__ = [
    Flatten.__name__,
]
