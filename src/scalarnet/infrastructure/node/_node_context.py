from typing import Any, Callable, Sequence
from dataclasses import dataclass, field


@dataclass
class Context:
    """
    Backward context attached to a Node produced by an operation.

    A `Context` records the information required to push the gradient of an
    operation's output back into its operands during the backward pass.

    Attributes
    ----------
    parents : Sequence[Node]
        The operand nodes used to compute the output node. These are the
        output node's `children` in graph terms.
    backward_fn : Callable[[float], Sequence[float]]
        A function that takes the gradient w.r.t. the output (`grad_out`) and
        returns one gradient contribution per `parents` entry, in order.
    saved_values : list[float]
        Values explicitly saved during the forward pass for use in backward
        (e.g., the output of `exp` or `sigmoid`).
    saved_meta : dict[str, Any]
        Non-value metadata required for backward (e.g., the fixed exponent
        of `pow`) and the operation name used in diagnostics.
    """

    parents: Sequence[Any]
    backward_fn: Callable[[float], Sequence[float]]
    saved_values: list[float] = field(default_factory=list)
    saved_meta: dict[str, Any] = field(default_factory=dict)

    def save_for_backward(self, *values: float) -> None:
        """
        Save values for use during the backward computation.

        Parameters
        ----------
        *values : float
            Any number of floats to be stored in `saved_values`.
        """
        self.saved_values.extend(values)

    @property
    def op(self) -> str:
        """
        Return the name of the operation that created this context.
        """
        return str(self.saved_meta.get("op", "unknown"))
