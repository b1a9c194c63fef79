from __future__ import annotations

"""Confine collections.

``ConfineCollection`` holds the confines of one provider and answers "is this
provider usable here". ``FeatureConfineCollection`` holds the confines of one
declared feature and can be cloned so a provider may add requirements to a
feature without touching the type's definition.

Criteria are mappings from a confine kind (or any fact name) to one or more
values::

    collection.confine(exists="/usr/bin/dpkg", osfamily=["debian"])
    collection.confine({"exists": "dpkg", "for_binary": True})

The reserved ``for_binary`` key is stripped and marks the ``exists`` confines
created by the same call as binary lookups.
"""

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..errors import DefinitionError
from ..host.environment import HostEnvironment
from ..schemas.domain import FeatureInfo
from .base import Confine
from .registry import DEFAULT_CONFINE_REGISTRY, ConfineRegistry

logger = logging.getLogger(__name__)

FOR_BINARY = "for_binary"


class ConfineCollection:
    """
    Ordered bag of confines owned by a single provider.

    An empty collection is never valid: something without requirements has
    not been confined, and callers must opt in explicitly instead.
    """

    def __init__(
        self,
        label: str,
        *,
        registry: Optional[ConfineRegistry] = None,
        environment: Optional[HostEnvironment] = None,
    ) -> None:
        self._label = label
        self._registry = registry if registry is not None else DEFAULT_CONFINE_REGISTRY
        self._environment = environment
        self._confines: List[Confine] = []

    @property
    def label(self) -> str:
        return self._label

    @property
    def confines(self) -> List[Confine]:
        """Return the confines in declaration order."""
        return list(self._confines)

    def __len__(self) -> int:
        return len(self._confines)

    def __iter__(self) -> Iterator[Confine]:
        return iter(list(self._confines))

    def is_empty(self) -> bool:
        return not self._confines

    def confine(self, criteria: Optional[Mapping[Any, Any]] = None, **kwargs: Any) -> None:
        """
        Add confines built from ``criteria`` and keyword arguments.

        Args:
            criteria: Mapping of confine kind or fact name to value(s).
            **kwargs: Same as ``criteria``; merged on top of it.
        """
        merged: Dict[Any, Any] = dict(criteria or {})
        merged.update(kwargs)
        for_binary = bool(merged.pop(FOR_BINARY, False))
        for key, values in merged.items():
            confine = self._registry.build(
                key,
                values,
                label=self._label,
                for_binary=for_binary,
                environment=self._environment,
            )
            self._confines.append(confine)

    def valid(self, subject: Any = None) -> bool:
        """
        Check whether every confine in the collection holds.

        Args:
            subject: The provider instance or class being confined.

        Returns:
            True if the collection is non-empty and all confines are valid.
        """
        if not self._confines:
            return False
        return all(confine.valid(subject) for confine in self._confines)

    def summary(self, subject: Any = None) -> Dict[str, Any]:
        """
        Summarize failing confines by kind, for diagnostics and documentation.

        Kinds whose aggregate is empty (0, [] or {}) are omitted. Summaries are
        best-effort: a summarizer that raises is logged and skipped.

        Returns:
            Mapping of kind name to that kind's aggregate of failures.
        """
        grouped: Dict[type, List[Confine]] = {}
        for confine in self._confines:
            grouped.setdefault(type(confine), []).append(confine)

        result: Dict[str, Any] = {}
        for cls, confines in grouped.items():
            try:
                value = cls.summarize(confines, subject)
            except Exception as e:
                logger.warning(f"Failed to summarize {cls.kind.value} confines for '{self._label}': {e}")
                continue
            if not value:
                continue
            result[cls.kind.value] = value
        return result

    def __repr__(self) -> str:
        return f"<{type(self).__name__} label={self._label!r} confines={len(self._confines)}>"


class FeatureConfineCollection(ConfineCollection):
    """
    Confines guarding one declared feature of a type.

    For example a feature X that relies on a method Y being defined holds a
    ``methods`` confine for Y. The type owns the master collection; every
    capability bundle works on ``clone()`` copies.
    """

    def __init__(
        self,
        name: str,
        label: str,
        docs: str,
        *,
        registry: Optional[ConfineRegistry] = None,
        environment: Optional[HostEnvironment] = None,
    ) -> None:
        """
        Args:
            name: Name of the feature.
            label: Diagnostic label, typically ``"<Type>.<feature>"``.
            docs: Human-readable description of what the feature does.

        Raises:
            DefinitionError: If any of the three is empty.
        """
        for field_name, value in (("name", name), ("label", label), ("docs", docs)):
            if not value:
                raise DefinitionError(f"Feature confine collection requires a {field_name}")
        super().__init__(label, registry=registry, environment=environment)
        self._name = name
        self._docs = docs

    @property
    def name(self) -> str:
        return self._name

    @property
    def docs(self) -> str:
        return self._docs

    def available(self, subject: Any = None) -> bool:
        """Alias of ``valid``."""
        return self.valid(subject)

    def clone(self) -> "FeatureConfineCollection":
        """
        Return an independent copy holding deep copies of every confine.

        Confines added to the copy are never visible from this collection or
        from any other copy.
        """
        copy = FeatureConfineCollection(
            self._name,
            self._label,
            self._docs,
            registry=self._registry,
            environment=self._environment,
        )
        copy._confines = [confine.copy() for confine in self._confines]
        return copy

    def describe(self) -> FeatureInfo:
        return FeatureInfo(
            name=self._name,
            label=self._label,
            docs=self._docs,
            confine_kinds=[confine.kind.value for confine in self._confines],
        )
