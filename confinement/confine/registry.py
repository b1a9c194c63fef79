from __future__ import annotations

"""Confine kind registry.

The registry maps a ``ConfineKind`` to the class implementing it. Collections
resolve criteria keys through ``build``: a key naming a known kind creates that
kind, any other key is a fact name and creates a ``VariableConfine`` bound to
that fact.
"""

from typing import Any, Dict, Iterable, List, Optional, Type

from ..host.environment import HostEnvironment
from ..schemas.domain import ConfineKind, normalize_name
from .base import Confine
from .builtin import BUILTIN_CONFINES, VariableConfine


class ConfineRegistry:
    """
    In-memory mapping of confine kinds to implementations.

    Notes:
        - ``register`` overwrites any existing mapping for the kind.
        - ``lookup`` never raises; unknown names yield ``None``.
        - ``variable`` is not addressable from criteria: a ``variable`` key is a
          fact called "variable" like any other unknown key.
    """

    def __init__(self, kinds: Iterable[Type[Confine]] = ()) -> None:
        """Initialize the registry, optionally with confine classes."""
        self._kinds: Dict[ConfineKind, Type[Confine]] = {}
        for cls in kinds:
            self.register(cls)

    def register(self, cls: Type[Confine]) -> None:
        """
        Register a confine implementation.

        Args:
            cls: The confine class. It must expose a ``kind`` attribute.
        """
        self._kinds[cls.kind] = cls

    def get(self, kind: ConfineKind) -> Type[Confine]:
        """
        Retrieve a registered confine class by kind.

        Raises:
            KeyError: If no confine class is registered for the kind.
        """
        try:
            return self._kinds[kind]
        except KeyError as e:
            raise KeyError(f"unknown confine kind: {kind}") from e

    def kinds(self) -> List[ConfineKind]:
        """Return the registered kinds in registration order."""
        return list(self._kinds)

    def lookup(self, name: Any) -> Optional[Type[Confine]]:
        """
        Resolve a criteria key to a confine class.

        Args:
            name: A ``ConfineKind`` or its string value.

        Returns:
            The confine class, or None when the key is not a kind (a fact name).
        """
        key = normalize_name(name)
        if key == ConfineKind.variable.value:
            return None
        try:
            kind = ConfineKind(key)
        except ValueError:
            return None
        return self._kinds.get(kind)

    def build(
        self,
        key: Any,
        values: Any,
        *,
        label: str = "",
        for_binary: bool = False,
        environment: Optional[HostEnvironment] = None,
    ) -> Confine:
        """
        Construct the confine described by one criteria entry.

        Args:
            key: Kind name or fact name.
            values: Candidate value(s).
            label: Diagnostic label copied from the owning collection.
            for_binary: Applied to ``exists`` confines only.
            environment: Host collaborators for the confine.

        Returns:
            A new confine instance.
        """
        cls = self.lookup(key)
        if cls is not None:
            confine = cls(values, label=label, environment=environment)
            if cls.kind is ConfineKind.exists:
                confine.for_binary = for_binary
            return confine
        else:
            return VariableConfine(values, name=normalize_name(key), label=label, environment=environment)


DEFAULT_CONFINE_REGISTRY = ConfineRegistry(BUILTIN_CONFINES)
