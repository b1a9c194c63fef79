from __future__ import annotations

"""Per-type feature registry.

Features let a resource type vary in capability with the provider in use and
the host it runs on. A package type may declare an ``upgradeable`` feature;
one provider declares it outright, another only supports it when the
``upgrade`` method exists and the host has a recent enough package manager.

The workflow is:

1) the type declares each feature once with ``declare_feature``, optionally
   with confines that must hold for providers to get it;
2) providers either declare the feature explicitly or extend its confines
   through the type's capability bundle (see ``features.bundle``).
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Mapping, Optional, Protocol

from ..confine.collection import FeatureConfineCollection
from ..confine.registry import ConfineRegistry
from ..errors import DuplicateFeatureError
from ..host.environment import HostEnvironment
from ..schemas.domain import FeatureInfo, normalize_name
from .docs import doctable, scrub

if TYPE_CHECKING:
    from .bundle import CapabilityBundle

logger = logging.getLogger(__name__)

PRESENT_MARKER = "*X*"


class ProviderSource(Protocol):
    """Registered providers of a type, as needed by feature documentation."""

    def provider_names(self) -> List[str]: ...

    def provider(self, name: str) -> Any: ...


class FeatureRegistry:
    """
    Insertion-ordered mapping of feature name to ``FeatureConfineCollection``.

    Attributes:
        owner_name: Name of the owning type, used in feature labels.
    """

    def __init__(
        self,
        owner_name: str,
        *,
        confine_registry: Optional[ConfineRegistry] = None,
        environment: Optional[HostEnvironment] = None,
    ) -> None:
        self.owner_name = owner_name
        self._confine_registry = confine_registry
        self._environment = environment
        self._features: Dict[str, FeatureConfineCollection] = {}

    def declare_feature(
        self,
        name: Any,
        docs: str,
        criteria: Optional[Mapping[Any, Any]] = None,
        **kwargs: Any,
    ) -> FeatureConfineCollection:
        """
        Declare a feature of the owning type.

        Args:
            name: Feature name; enums and strings are accepted.
            docs: Description used in generated documentation.
            criteria: Optional confines that must hold for a provider to have the feature.
            **kwargs: Additional confines, merged on top of ``criteria``.

        Returns:
            The feature's master confine collection.

        Raises:
            DuplicateFeatureError: If the feature is already declared.
        """
        key = normalize_name(name)
        if key in self._features:
            raise DuplicateFeatureError(key)

        collection = FeatureConfineCollection(
            key,
            f"{self.owner_name}.{key}",
            docs,
            registry=self._confine_registry,
            environment=self._environment,
        )
        if criteria or kwargs:
            collection.confine(criteria, **kwargs)
        self._features[key] = collection
        logger.debug(f"Declared feature '{collection.label}'")
        return collection

    def features(self) -> List[str]:
        """Return the declared feature names in declaration order."""
        return list(self._features)

    def provider_feature(self, name: Any) -> Optional[FeatureConfineCollection]:
        """Return the master collection for ``name``, or None. Meant for introspection."""
        return self._features.get(normalize_name(name))

    def items(self) -> List[tuple[str, FeatureConfineCollection]]:
        return list(self._features.items())

    def __contains__(self, name: object) -> bool:
        return normalize_name(name) in self._features

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._features))

    def __len__(self) -> int:
        return len(self._features)

    def describe(self) -> List[FeatureInfo]:
        """Return a description of every feature, sorted by name."""
        return [self._features[name].describe() for name in sorted(self._features)]

    def capability_matrix(self, providers: ProviderSource, bundle: "CapabilityBundle") -> Dict[str, List[bool]]:
        """
        Compute which registered provider has which feature.

        Args:
            providers: Source of the registered provider names and classes.
            bundle: The owning type's capability bundle.

        Returns:
            Mapping of provider name to one flag per feature, features sorted by name.
        """
        names = sorted(self._features)
        return {
            provider_name: [bundle.has_capability(providers.provider(provider_name), name) for name in names]
            for provider_name in providers.provider_names()
        }

    def feature_documentation(
        self,
        providers: Optional[ProviderSource] = None,
        bundle: Optional["CapabilityBundle"] = None,
    ) -> Optional[str]:
        """
        Render documentation for every feature.

        One ``- *name*: docs`` line per feature, sorted by name, followed by a
        provider/feature table when providers and a bundle are given and at
        least one provider is registered.

        Returns:
            The rendered text, or None when no features are declared.
        """
        if not self._features:
            return None

        names = sorted(self._features)
        text = "".join(f"- *{name}*: {scrub(self._features[name].docs)}\n" for name in names)

        if providers is not None and bundle is not None and providers.provider_names():
            matrix = self.capability_matrix(providers, bundle)
            rows = {
                provider_name: [PRESENT_MARKER if present else "" for present in flags]
                for provider_name, flags in matrix.items()
            }
            text += doctable(["Provider", *names], rows)
        return text
