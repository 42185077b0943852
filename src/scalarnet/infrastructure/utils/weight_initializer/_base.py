"""
Weight initializer registry and dispatch utilities.

This module defines the concrete `WeightInitializer` used by layers to fill
freshly created parameters with starting values.

Design
------
- Initializers are registered by string name via a decorator-based registry.
- Each initializer is a callable `(params, shape) -> params` that assigns a
  value to every parameter of a logical grid in place. `shape` describes how
  the flat parameter list is laid out (e.g. `(out, in)` for fully connected
  weights, `(1, k, k)` for one square kernel) and drives fan-in / fan-out.
- A zero-argument callable may be used instead of a name; it is called once
  per parameter.

Usage example
-------------
Registering an initializer:

    @WeightInitializer.register_initializer("halves")
    def halves(params, shape):
        for p in params:
            p.set_value(0.5)
        return params

Applying an initializer:

    init = WeightInitializer("xavier")
    init(weights, (out_channels, in_channels))
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Sequence, Tuple, TypeVar, Union

from ....domain.utils._weight_initialization import _WeightInitializer
from ..._parameter import Parameter

InitFn = Callable[[Sequence[Parameter], Tuple[int, ...]], Sequence[Parameter]]
T = TypeVar("T", bound=InitFn)


class WeightInitializer(_WeightInitializer):
    """
    Registry-backed weight initializer dispatcher.

    Parameters
    ----------
    initializer : str | Callable[[], float]
        A registered initializer name, or a zero-argument callable returning
        one value per call.

    Raises
    ------
    ValueError
        If `initializer` is a string that is not registered.
    TypeError
        If `initializer` is neither a string nor a callable.
    """

    INITIALIZERS: ClassVar[Dict[str, InitFn]] = {}

    def __init__(self, initializer: Union[str, Callable[[], float]]) -> None:
        if isinstance(initializer, str):
            try:
                self._initializer: InitFn = self.INITIALIZERS[initializer]
            except KeyError as e:
                available = ", ".join(self.available()) or "<none>"
                raise ValueError(
                    f"Unsupported initializer name: {initializer!r}. "
                    f"Available: {available}"
                ) from e
            self.name = initializer
        elif callable(initializer):
            self._initializer = _from_sampler(initializer)
            self.name = getattr(initializer, "__name__", "custom")
        else:
            raise TypeError(
                f"initializer must be a name or a callable, got {type(initializer)!r}"
            )

    @classmethod
    def register_initializer(
        cls, name: str, *, overwrite: bool = False
    ) -> Callable[[T], T]:
        """
        Decorator to register a weight initializer under `name`.

        Parameters
        ----------
        name:
            Registry key used to retrieve the initializer later.
        overwrite:
            If False (default), raises if `name` is already registered.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Initializer name must be a non-empty string")

        def decorator(func: T) -> T:
            if not overwrite and name in cls.INITIALIZERS:
                raise ValueError(f"Initializer already registered: {name!r}")
            cls.INITIALIZERS[name] = func
            return func

        return decorator

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return registered initializer names (sorted)."""
        return tuple(sorted(cls.INITIALIZERS))

    @classmethod
    def get(cls, name: str) -> InitFn:
        """Get a registered initializer callable by name."""
        return cls.INITIALIZERS[name]

    def __call__(
        self, params: Sequence[Parameter], shape: Tuple[int, ...], *args: Any
    ) -> Sequence[Parameter]:
        expected = 1
        for d in shape:
            expected *= int(d)
        if expected != len(params):
            raise ValueError(
                f"Initializer shape {tuple(shape)} describes {expected} values, "
                f"got {len(params)} parameters"
            )
        return self._initializer(params, tuple(shape), *args)


def _from_sampler(sampler: Callable[[], float]) -> InitFn:
    def _init(params: Sequence[Parameter], shape: Tuple[int, ...]) -> Sequence[Parameter]:
        for p in params:
            p.set_value(float(sampler()))
        return params

    return _init


def _assign(params: Sequence[Parameter], values: Any) -> Sequence[Parameter]:
    for p, v in zip(params, values):
        p.set_value(float(v))
    return params
