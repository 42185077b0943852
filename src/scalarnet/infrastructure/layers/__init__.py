from ._dropout import Dropout

__all__ = [
    Dropout.__name__,
]
