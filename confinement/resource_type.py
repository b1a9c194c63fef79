from __future__ import annotations

"""Resource types.

A ``ResourceType`` is the abstract side of the type/provider split: it owns the
feature registry and knows which providers implement it. Loading types and
providers from disk is left to the embedding application; this class only
holds what the confinement engine needs.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Type

from .confine.collection import FeatureConfineCollection
from .confine.registry import ConfineRegistry
from .errors import DefinitionError
from .features.bundle import BUNDLES, CapabilityBundle, CapabilityBundleRegistry
from .features.registry import FeatureRegistry
from .host.environment import HostEnvironment
from .schemas.domain import FeatureInfo, normalize_name

if TYPE_CHECKING:
    from .provider import Provider

logger = logging.getLogger(__name__)


class ResourceType:
    """
    A named resource type with declared features and registered providers.

    Attributes:
        name: The type name, e.g. ``"package"``.
    """

    def __init__(
        self,
        name: str,
        *,
        bundles: Optional[CapabilityBundleRegistry] = None,
        confine_registry: Optional[ConfineRegistry] = None,
        environment: Optional[HostEnvironment] = None,
    ) -> None:
        if not name:
            raise DefinitionError("Resource type requires a name")
        self.name = name
        self.environment = environment
        self.confine_registry = confine_registry
        self._bundles = bundles if bundles is not None else BUNDLES
        self._features = FeatureRegistry(name, confine_registry=confine_registry, environment=environment)
        self._providers: Dict[str, Type["Provider"]] = {}

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------

    @property
    def feature_registry(self) -> FeatureRegistry:
        return self._features

    def feature(
        self,
        name: Any,
        docs: str,
        criteria: Optional[Mapping[Any, Any]] = None,
        **kwargs: Any,
    ) -> FeatureConfineCollection:
        """
        Declare a feature of providers of this type.

        Example::

            package.feature("installable", "The provider can install packages.", methods=["install"])
        """
        return self._features.declare_feature(name, docs, criteria, **kwargs)

    def features(self) -> List[str]:
        return self._features.features()

    def provider_feature(self, name: Any) -> Optional[FeatureConfineCollection]:
        return self._features.provider_feature(name)

    def describe_features(self) -> List[FeatureInfo]:
        return self._features.describe()

    def capability_bundle(self) -> CapabilityBundle:
        """Return the type's capability bundle, building it on first use."""
        return self._bundles.get_or_build(self._features)

    def feature_documentation(self) -> Optional[str]:
        """Render feature docs plus a provider/feature table when providers exist."""
        if not self._providers:
            return self._features.feature_documentation()
        return self._features.feature_documentation(self, self.capability_bundle())

    # ------------------------------------------------------------------
    # Providers
    # ------------------------------------------------------------------

    def register_provider(self, name: str, provider: Type["Provider"]) -> None:
        """
        Register a provider class under ``name``.

        Raises:
            DefinitionError: If another provider already uses the name.
        """
        key = normalize_name(name)
        existing = self._providers.get(key)
        if existing is not None and existing is not provider:
            raise DefinitionError(f"Provider {key} is already registered for type {self.name}")
        self._providers[key] = provider
        logger.debug(f"Registered provider '{key}' for type '{self.name}'")

    def provider_names(self) -> List[str]:
        return sorted(self._providers)

    def provider(self, name: str) -> Type["Provider"]:
        """
        Retrieve a registered provider class.

        Raises:
            KeyError: If no provider is registered under the name.
        """
        try:
            return self._providers[normalize_name(name)]
        except KeyError as e:
            raise KeyError(f"unknown provider: {name}") from e

    def has_provider(self, name: str) -> bool:
        return normalize_name(name) in self._providers

    def suitable_providers(self) -> List[str]:
        """Return the names of the providers whose own confines hold on this host."""
        return [name for name in self.provider_names() if self._providers[name].suitable()]

    def __repr__(self) -> str:
        return f"<ResourceType {self.name!r} features={len(self._features)} providers={len(self._providers)}>"
