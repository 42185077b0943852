"""
Sequential container module.

This module defines `Sequential`, a simple container that composes a list of
child `Module` objects into a single `Model` by applying them in order:

    y = L_n(...L_2(L_1(x)))

Shape checks belong to the stages themselves; the container only threads
outputs into inputs.
"""

from typing import Any, Iterator, Optional, Tuple

from .._module import Module
from ..module._serialization_core import register_module
from ._models import Model


@register_module()
class Sequential(Model):
    """
    Sequential container model.

    Layers are registered as child modules under numeric names ("0", "1",
    ...) so `parameters()` walks them in execution order.
    """

    def __init__(self, *layers: Module) -> None:
        super().__init__()
        for layer in layers:
            self.add(layer)

    def add(self, layer: Module, name: Optional[str] = None) -> "Sequential":
        """
        Append a module to the container.

        Parameters
        ----------
        layer : Module
            The module to append.
        name : Optional[str], optional
            Explicit registration name. Defaults to the insertion index.

        Returns
        -------
        Sequential
            `self`, for chaining.

        Raises
        ------
        TypeError
            If `layer` is not an instance of `Module`.
        ValueError
            If the provided `name` conflicts with an existing layer.
        """
        if not isinstance(layer, Module):
            raise TypeError(f"Sequential.add expects a Module, got: {type(layer)}")

        layer_name = name if name is not None else str(len(self._modules))
        if layer_name in self._modules:
            raise ValueError(f"Duplicate layer name '{layer_name}' in Sequential.")

        self.register_module(layer_name, layer)
        return self

    def add_child(self, name: str, module: Module) -> None:
        """
        Attach a child during deserialization.
        """
        self.add(module, name=name)

    def forward(self, x: Any) -> Any:
        """
        Apply all layers in order.
        """
        out = x
        for layer in self._modules.values():
            out = layer(out)
        return out

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[Module]:
        return iter(self._modules.values())

    def __getitem__(self, idx: int) -> Module:
        """
        Retrieve a layer by position.

        Raises
        ------
        IndexError
            If `idx` is out of range.
        """
        return self.layers()[idx]

    def layers(self) -> Tuple[Module, ...]:
        """
        Return all layers as an immutable tuple, in execution order.
        """
        return tuple(self._modules.values())

    def summary(self) -> str:
        """
        Generate a lightweight textual summary of the container.

        Returns
        -------
        str
            One line per layer with its index, repr, and parameter count,
            followed by the total.
        """
        lines = [f"{self.__class__.__name__}("]
        for i, layer in enumerate(self._modules.values()):
            lines.append(f"  ({i}): {layer!r}  params={layer.num_parameters()}")
        lines.append(f")  total params={self.num_parameters()}")
        return "\n".join(lines)

    def get_config(self) -> dict[str, Any]:
        """
        Return an empty config; children are stored in the module tree.
        """
        return {}

    @classmethod
    def from_config(cls, cfg: dict[str, Any]) -> "Sequential":
        """
        Construct an empty container; the deserializer attaches children.
        """
        _ = cfg
        return cls()
