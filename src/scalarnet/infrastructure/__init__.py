"""
Concrete runtime implementations: scalar nodes, the operation catalog, the
backward engine, modules, losses, and optimizers.
"""

from .node import Context, Node
from .autograd import backward, topological_order, zero_grad
from ._function import (
    add,
    as_node,
    div,
    exp,
    log,
    mul,
    neg,
    pow,
    reduce_sum,
    relu,
    sigmoid,
    softmax,
    sub,
    tanh,
)
from ._parameter import Parameter
from ._module import Module
from ._linear import Linear
from ._activations import ReLU, Sigmoid, Softmax, Tanh
from .convolution import Conv1d, Conv2d
from .layers import Dropout
from .flatten import Flatten
from .models import Model, Sequential
from ._losses import (
    binary_cross_entropy,
    categorical_cross_entropy,
    cross_entropy,
    mse,
    sse,
)
from .optimizers import SGD, Adam
from .utils import argmax, from_values, to_grads, to_values
from .utils.weight_initializer import WeightInitializer
from .module import register_module

__all__ = [
    "Adam",
    "Context",
    "Conv1d",
    "Conv2d",
    "Dropout",
    "Flatten",
    "Linear",
    "Model",
    "Module",
    "Node",
    "Parameter",
    "ReLU",
    "SGD",
    "Sequential",
    "Sigmoid",
    "Softmax",
    "Tanh",
    "WeightInitializer",
    "add",
    "argmax",
    "as_node",
    "backward",
    "binary_cross_entropy",
    "categorical_cross_entropy",
    "cross_entropy",
    "div",
    "exp",
    "from_values",
    "log",
    "mse",
    "mul",
    "neg",
    "pow",
    "reduce_sum",
    "register_module",
    "relu",
    "sigmoid",
    "softmax",
    "sse",
    "sub",
    "tanh",
    "to_grads",
    "to_values",
    "topological_order",
    "zero_grad",
]
