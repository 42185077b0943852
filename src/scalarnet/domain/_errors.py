"""
Graph- and numeric-related exceptions for scalarnet.

This module defines the error types raised by the autograd core and the
module layer. They let callers tell apart a structurally wrong model/data
pairing (`ShapeMismatchError`), a diverging or unguarded computation
(`NumericInstabilityError`), and an input outside the domain of `log`
(`LogDomainError`).

All errors derive from `ScalarNetError` and from the closest built-in
exception type, so existing `except ValueError` / `except ArithmeticError`
handlers keep working.
"""

from __future__ import annotations

from typing import Any, Optional


class ScalarNetError(Exception):
    """
    Base class for all scalarnet-specific errors.
    """


class ShapeMismatchError(ScalarNetError, ValueError):
    """
    Raised when a module receives (or produces) a structure whose size
    disagrees with its configuration.

    Typical causes are a `Linear` layer fed a vector of the wrong length,
    a convolution fed a ragged map, or a flat weight vector whose length does
    not match `parameters()`.

    Attributes
    ----------
    what : str
        Short description of the checked quantity (e.g., "Linear input").
    expected : Any
        The size/shape the module was configured for.
    actual : Any
        The size/shape that was actually observed.
    """

    def __init__(self, what: str, expected: Any, actual: Any) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        what : str
            Description of the checked quantity.
        expected : Any
            Expected size or shape.
        actual : Any
            Observed size or shape.
        """
        super().__init__(f"{what} mismatch: expected {expected}, got {actual}.")
        self.what = what
        self.expected = expected
        self.actual = actual


class NumericInstabilityError(ScalarNetError, ArithmeticError):
    """
    Raised when a non-finite value (NaN or infinity) is met during a
    backward pass.

    This usually points at a diverging learning rate, an overflowing `exp`
    (e.g., an unstabilized softmax on large inputs), or a division by zero,
    rather than at a wiring bug.

    Attributes
    ----------
    op : str
        Name of the operation that produced the offending node ("leaf" for
        inputs and parameters).
    value : float
        Forward value of the offending node.
    grad : float
        Accumulated gradient of the offending node at the time of the check.
    """

    def __init__(self, op: str, value: float, grad: float) -> None:
        """
        Initialize the NumericInstabilityError.

        Parameters
        ----------
        op : str
            Operation name of the offending node.
        value : float
            Node value.
        grad : float
            Node gradient.
        """
        super().__init__(
            f"Non-finite value during backward at '{op}' node: "
            f"value={value!r}, grad={grad!r}."
        )
        self.op = op
        self.value = value
        self.grad = grad


class LogDomainError(ScalarNetError, ValueError):
    """
    Raised when `log` is applied to a non-positive value.

    The natural logarithm is undefined for `x <= 0`. scalarnet rejects such
    inputs at forward time instead of substituting a sentinel value, so a
    probability that underflowed to zero is reported where it happens.

    Attributes
    ----------
    value : float
        The rejected input value.
    """

    def __init__(self, value: float, hint: Optional[str] = None) -> None:
        """
        Initialize the LogDomainError.

        Parameters
        ----------
        value : float
            The rejected input value.
        hint : Optional[str], optional
            Extra context appended to the message.
        """
        msg = f"log is undefined for non-positive input {value!r}."
        if hint:
            msg = f"{msg} {hint}"
        super().__init__(msg)
        self.value = value
