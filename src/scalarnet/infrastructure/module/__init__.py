from ._serialization_core import (
    module_from_config,
    module_to_config,
    register_module,
    registered_modules,
)
from ._serialization_weights import extract_flat_values, load_flat_values_

__all__ = [
    "extract_flat_values",
    "load_flat_values_",
    "module_from_config",
    "module_to_config",
    "register_module",
    "registered_modules",
]
