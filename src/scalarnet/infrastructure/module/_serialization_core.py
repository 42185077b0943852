"""
Architecture (config tree) serialization for modules.

A module tree is described as nested nodes:

    {
      "type": "Linear",
      "config": {...},
      "children": { "0": <node>, "1": <node>, ... }
    }

`config` comes from the module's `get_config()`; `children` mirrors
`named_children()`. Classes are looked up by registered name on the way back.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Type

_MODULE_REGISTRY: Dict[str, Type[Any]] = {}


def register_module(name: Optional[str] = None) -> Callable[[Type[Any]], Type[Any]]:
    """
    Decorator to register a Module class for JSON deserialization.

    Parameters
    ----------
    name : Optional[str], optional
        Registry key. Defaults to the class name.
    """

    def deco(cls: Type[Any]) -> Type[Any]:
        key = name or cls.__name__
        _MODULE_REGISTRY[key] = cls
        return cls

    return deco


def registered_modules() -> tuple[str, ...]:
    """
    Return the registered module type names, sorted.
    """
    return tuple(sorted(_MODULE_REGISTRY))


def module_to_config(m: Any) -> Dict[str, Any]:
    """
    Convert a Module into a JSON-serializable configuration tree.
    """
    children: Dict[str, Any] = {}
    for name, child in m.named_children():
        children[str(name)] = module_to_config(child)

    return {
        "type": m.__class__.__name__,
        "config": m.get_config(),
        "children": children,
    }


def module_from_config(node: Dict[str, Any]) -> Any:
    """
    Rebuild a Module from a configuration tree.

    Raises
    ------
    ValueError
        If a node names an unregistered type, or carries children for a
        module that cannot hold any.
    """
    type_name = str(node["type"])
    if type_name not in _MODULE_REGISTRY:
        raise ValueError(
            f"Unknown module type '{type_name}'. Register it via @register_module. "
            f"Known types: {', '.join(registered_modules())}"
        )

    cls = _MODULE_REGISTRY[type_name]
    cfg = node.get("config", {}) or {}
    m = cls.from_config(cfg)

    children = node.get("children", {}) or {}
    for name, child_node in children.items():
        if not hasattr(m, "add_child"):
            raise ValueError(f"Module '{type_name}' cannot accept children.")
        m.add_child(str(name), module_from_config(child_node))

    return m
