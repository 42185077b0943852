from ._weight_initialization import _calculate_fan_in_and_fan_out, _WeightInitializer

__all__ = [
    "_WeightInitializer",
    "_calculate_fan_in_and_fan_out",
]
