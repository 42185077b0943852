from ._conv1d_module import Conv1d, conv_output_size
from ._conv2d_module import Conv2d

__all__ = [
    Conv1d.__name__,
    Conv2d.__name__,
    "conv_output_size",
]
