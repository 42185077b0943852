"""
Stateless configuration mixin.

This module defines `StatelessConfigMixin`, a helper mixin for modules whose
behavior does not depend on any configurable hyperparameters (activations,
`Flatten`).

It provides trivial JSON serialization and deserialization hooks, allowing
stateless layers to take part in checkpoint export and reconstruction
without special cases.
"""

from typing import Any, Dict
from typing_extensions import Self


class StatelessConfigMixin:
    """
    Mixin providing configuration hooks for stateless modules.
    """

    def get_config(self) -> Dict[str, Any]:
        """
        Return an empty configuration dictionary.

        Returns
        -------
        Dict[str, Any]
            An empty dictionary; nothing is needed to rebuild the module.
        """
        return {}

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> Self:
        """
        Rebuild the module, ignoring `cfg`.

        Parameters
        ----------
        cfg : Dict[str, Any]
            Configuration dictionary (unused).

        Returns
        -------
        Self
            A default instance of the class.
        """
        return cls()
