from ._adam import Adam
from ._sgd import SGD

__all__ = [
    Adam.__name__,
    SGD.__name__,
]
