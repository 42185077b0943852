"""
Scalar operation catalog.

This module contains the infrastructure-level implementations of every
differentiable scalar operation, expressed in a function-style autograd API:

- Each primitive is a `Function` subclass with `forward(ctx, ...)` and
  `backward(ctx, grad_out)` static methods operating on plain floats.
- A `Context` instance stores the values and metadata required by the
  backward computation (`save_for_backward`, `saved_meta`).
- Public functional wrappers (e.g., `mul`, `exp`) are responsible for:
  - promoting Python numbers to constant leaf nodes,
  - constructing the `Context` and wiring `backward_fn`,
  - invoking `forward` and wrapping the result in a new `Node`.

Primitives: add, mul, pow (fixed real exponent), exp, log, relu, sigmoid,
tanh. Composites: neg = mul(x, -1), sub = add(a, neg(b)),
div = mul(a, pow(b, -1)), plus `reduce_sum` and `softmax` over sequences.

Numeric policy
--------------
- `log(x)` with `x <= 0` raises `LogDomainError` at forward time.
- Operations that Python would abort on (`0.0 ** -1`, `exp` overflow,
  fractional power of a negative base) yield `inf` / `nan` instead. The
  backward engine reports such values as `NumericInstabilityError`.
"""

import math
import warnings
from numbers import Real
from typing import Any, List, Sequence, Tuple, Type, Union

from ..domain._errors import LogDomainError
from ..domain._function import Function
from .node import Context, Node, Number

# exp(x) overflows float64 above this bound and underflows to 0 below the
# negative one.
_EXP_OVERFLOW = 709.78
_EXP_UNDERFLOW = -745.13


def as_node(x: Union[Node, Number]) -> Node:
    """
    Return `x` unchanged if it is a Node, otherwise wrap it as a constant leaf.

    Parameters
    ----------
    x : Node | int | float
        Operand to promote.

    Returns
    -------
    Node
        The operand as a node.

    Raises
    ------
    TypeError
        If `x` is neither a Node nor a real number.
    """
    if isinstance(x, Node):
        return x
    if not isinstance(x, Real):
        raise TypeError(f"Expected a Node or a real number, got {type(x)!r}")
    return Node(float(x))


def _safe_exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _safe_pow(base: float, exponent: float) -> float:
    try:
        r = base**exponent
    except (ZeroDivisionError, OverflowError):
        return math.inf
    if isinstance(r, complex):
        return math.nan
    return float(r)


class AddFn(Function):
    """
    Addition of two scalars.

    Backward:

        d(a + b)/da = 1,  d(a + b)/db = 1
    """

    @staticmethod
    def forward(ctx, a: float, b: float) -> float:
        return a + b

    @staticmethod
    def backward(ctx, grad_out: float) -> Tuple[float, float]:
        return grad_out, grad_out


class MulFn(Function):
    """
    Multiplication of two scalars.

    Backward:

        d(a * b)/da = b,  d(a * b)/db = a

    Notes
    -----
    Both operand values are saved in the context; each receives the other's
    value times the upstream gradient.
    """

    @staticmethod
    def forward(ctx, a: float, b: float) -> float:
        ctx.save_for_backward(a, b)
        return a * b

    @staticmethod
    def backward(ctx, grad_out: float) -> Tuple[float, float]:
        a, b = ctx.saved_values
        return grad_out * b, grad_out * a


class PowFn(Function):
    """
    Power with a fixed real exponent.

    Implements:

        out = a ** k

    Backward:

        d(a ** k)/da = k * a ** (k - 1)

    Notes
    -----
    The exponent is a constant stored in `ctx.saved_meta["exponent"]`; no
    gradient flows into it.
    """

    @staticmethod
    def forward(ctx, a: float) -> float:
        k = ctx.saved_meta["exponent"]
        ctx.save_for_backward(a)
        return _safe_pow(a, k)

    @staticmethod
    def backward(ctx, grad_out: float) -> Tuple[float]:
        (a,) = ctx.saved_values
        k = ctx.saved_meta["exponent"]
        if grad_out == 0.0 or k == 0.0:
            return (0.0,)
        return (grad_out * k * _safe_pow(a, k - 1.0),)


class ExpFn(Function):
    """
    Exponential function.

    Backward:

        d(exp(a))/da = exp(a) = out

    Notes
    -----
    The output is saved so the backward pass reuses it instead of
    recomputing `exp`.
    """

    @staticmethod
    def forward(ctx, a: float) -> float:
        out = _safe_exp(a)
        ctx.save_for_backward(out)
        return out

    @staticmethod
    def backward(ctx, grad_out: float) -> Tuple[float]:
        (out,) = ctx.saved_values
        return (grad_out * out,)


class LogFn(Function):
    """
    Natural logarithm.

    Backward:

        d(log(a))/da = 1 / a

    Notes
    -----
    Non-positive inputs are rejected with `LogDomainError`.
    """

    @staticmethod
    def forward(ctx, a: float) -> float:
        if a <= 0.0:
            raise LogDomainError(
                a,
                hint="A probability that underflowed to zero is the usual cause.",
            )
        ctx.save_for_backward(a)
        return math.log(a)

    @staticmethod
    def backward(ctx, grad_out: float) -> Tuple[float]:
        (a,) = ctx.saved_values
        return (grad_out / a,)


class ReLUFn(Function):
    """
    Rectified linear unit.

    Backward:

        d(relu(a))/da = 1 if out > 0 else 0
    """

    @staticmethod
    def forward(ctx, a: float) -> float:
        out = a if a > 0.0 else 0.0
        ctx.save_for_backward(out)
        return out

    @staticmethod
    def backward(ctx, grad_out: float) -> Tuple[float]:
        (out,) = ctx.saved_values
        return (grad_out if out > 0.0 else 0.0,)


class SigmoidFn(Function):
    """
    Logistic sigmoid.

    Implements:

        sigmoid(a) = 1 / (1 + exp(-a))

    Backward:

        d(sigmoid)/da = s * (1 - s), where s is the forward output
    """

    @staticmethod
    def forward(ctx, a: float) -> float:
        out = 1.0 / (1.0 + _safe_exp(-a))
        ctx.save_for_backward(out)
        return out

    @staticmethod
    def backward(ctx, grad_out: float) -> Tuple[float]:
        (s,) = ctx.saved_values
        return (grad_out * s * (1.0 - s),)


class TanhFn(Function):
    """
    Hyperbolic tangent.

    Backward:

        d(tanh)/da = 1 - t ** 2, where t is the forward output
    """

    @staticmethod
    def forward(ctx, a: float) -> float:
        out = math.tanh(a)
        ctx.save_for_backward(out)
        return out

    @staticmethod
    def backward(ctx, grad_out: float) -> Tuple[float]:
        (t,) = ctx.saved_values
        return (grad_out * (1.0 - t * t),)


def _apply(fn: Type[Function], op: str, *parents: Node, **meta: Any) -> Node:
    """
    Run `fn` on the values of `parents` and wrap the result in a new Node.

    Parameters
    ----------
    fn : Type[Function]
        Primitive to apply.
    op : str
        Operation name recorded in the context for diagnostics.
    *parents : Node
        Operand nodes; they become the output's children.
    **meta : Any
        Constant metadata made available to `forward` / `backward`.

    Returns
    -------
    Node
        Output node with an attached `Context`.
    """
    ctx = Context(
        parents=parents,
        backward_fn=lambda grad_out: fn.backward(ctx, grad_out),
    )
    ctx.saved_meta["op"] = op
    ctx.saved_meta.update(meta)

    value = fn.forward(ctx, *(p.value for p in parents))
    return Node(value, ctx=ctx)


def add(a: Union[Node, Number], b: Union[Node, Number]) -> Node:
    """
    Return a node computing `a + b`.
    """
    return _apply(AddFn, "add", as_node(a), as_node(b))


def mul(a: Union[Node, Number], b: Union[Node, Number]) -> Node:
    """
    Return a node computing `a * b`.
    """
    return _apply(MulFn, "mul", as_node(a), as_node(b))


def pow(a: Union[Node, Number], exponent: Number) -> Node:
    """
    Return a node computing `a ** exponent` for a fixed real exponent.

    Raises
    ------
    TypeError
        If `exponent` is a Node or not a real number.
    """
    if isinstance(exponent, Node) or not isinstance(exponent, Real):
        raise TypeError(
            f"pow expects a fixed real exponent, got {type(exponent)!r}"
        )
    return _apply(PowFn, "pow", as_node(a), exponent=float(exponent))


def exp(a: Union[Node, Number]) -> Node:
    """
    Return a node computing `exp(a)`.
    """
    return _apply(ExpFn, "exp", as_node(a))


def log(a: Union[Node, Number]) -> Node:
    """
    Return a node computing the natural logarithm of `a`.

    Raises
    ------
    LogDomainError
        If the value of `a` is not strictly positive.
    """
    return _apply(LogFn, "log", as_node(a))


def relu(a: Union[Node, Number]) -> Node:
    """
    Return a node computing `max(0, a)`.
    """
    return _apply(ReLUFn, "relu", as_node(a))


def sigmoid(a: Union[Node, Number]) -> Node:
    """
    Return a node computing `1 / (1 + exp(-a))`.
    """
    return _apply(SigmoidFn, "sigmoid", as_node(a))


def tanh(a: Union[Node, Number]) -> Node:
    """
    Return a node computing `tanh(a)`.
    """
    return _apply(TanhFn, "tanh", as_node(a))


def neg(a: Union[Node, Number]) -> Node:
    """
    Return a node computing `-a`, expressed as `a * -1`.
    """
    return mul(a, -1.0)


def sub(a: Union[Node, Number], b: Union[Node, Number]) -> Node:
    """
    Return a node computing `a - b`, expressed as `a + (-b)`.
    """
    return add(a, neg(b))


def div(a: Union[Node, Number], b: Union[Node, Number]) -> Node:
    """
    Return a node computing `a / b`, expressed as `a * b ** -1`.

    Notes
    -----
    Dividing by a zero-valued node yields an infinite intermediate value;
    it is reported by the backward engine rather than raised here.
    """
    return mul(a, pow(b, -1.0))


def reduce_sum(xs: Sequence[Union[Node, Number]]) -> Node:
    """
    Sum a non-empty sequence of nodes with a left fold of `add`.

    Parameters
    ----------
    xs : Sequence[Node | int | float]
        Terms to sum.

    Returns
    -------
    Node
        Node holding the sum. A single-element input is returned as is
        (after promotion).

    Raises
    ------
    ValueError
        If `xs` is empty.
    """
    it = iter(xs)
    try:
        total = as_node(next(it))
    except StopIteration:
        raise ValueError("reduce_sum expects at least one term") from None

    for x in it:
        total = add(total, x)
    return total


def softmax(xs: Sequence[Union[Node, Number]]) -> List[Node]:
    """
    Normalize a vector of scalars into probabilities.

    Implements:

        softmax(x)_i = exp(x_i) / sum_j exp(x_j)

    Parameters
    ----------
    xs : Sequence[Node | int | float]
        Non-empty vector of scalars.

    Returns
    -------
    List[Node]
        One probability node per input entry.

    Raises
    ------
    ValueError
        If `xs` is empty.

    Notes
    -----
    The maximum is not subtracted before exponentiation, so the result is
    only well-behaved for modest input magnitudes. A `RuntimeWarning` is
    emitted when `exp` is certain to overflow or underflow; the resulting
    non-finite values surface as `NumericInstabilityError` on backward.
    """
    nodes = [as_node(x) for x in xs]
    if not nodes:
        raise ValueError("softmax expects at least one entry")

    hi = max(n.value for n in nodes)
    if hi > _EXP_OVERFLOW or hi < _EXP_UNDERFLOW:
        warnings.warn(
            f"softmax input magnitude {hi!r} is outside the range where exp is "
            "finite and non-zero; the result will not be usable.",
            RuntimeWarning,
            stacklevel=2,
        )

    exps = [exp(n) for n in nodes]
    total = reduce_sum(exps)
    return [div(e, total) for e in exps]
