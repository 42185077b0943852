from ._nested import (
    argmax,
    flatten_nested,
    from_values,
    grid_shape,
    map_nested,
    map_vectors,
    to_grads,
    to_values,
)

__all__ = [
    "argmax",
    "flatten_nested",
    "from_values",
    "grid_shape",
    "map_nested",
    "map_vectors",
    "to_grads",
    "to_values",
]
