from ._engine import backward, topological_order, zero_grad

__all__ = [
    "backward",
    "topological_order",
    "zero_grad",
]
