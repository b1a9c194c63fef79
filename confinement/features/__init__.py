"""Per-type feature definitions and the capability bundles built from them.

- ``FeatureRegistry``: the features a type declares, with their confines.
- ``CapabilityBundle``: capability checks every provider of the type exposes.
- ``CapabilityBundleRegistry``/``BUNDLES``: builds each type's bundle once.
"""

from .bundle import BUNDLES, CapabilityBundle, CapabilityBundleRegistry
from .registry import FeatureRegistry, ProviderSource

__all__ = [
    "BUNDLES",
    "CapabilityBundle",
    "CapabilityBundleRegistry",
    "FeatureRegistry",
    "ProviderSource",
]
