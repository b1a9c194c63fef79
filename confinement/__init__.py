"""Capability confinement engine.

This package decides, at runtime, whether a provider (a concrete
implementation of an abstract resource type) is usable on the current host
and which optional features of its type it supports.

High-level architecture
-----------------------

- ``confinement.confine``: confines, the closed set of predicate kinds
  (``true``, ``false``, ``exists``, ``methods``, ``feature`` and the
  fact-based ``variable`` fallback) and the collections that evaluate them.
- ``confinement.features``: per-type feature registries and the capability
  bundles synthesized from them.
- ``confinement.host``: host collaborators (facts, path and binary lookup,
  global features) that confines evaluate against.
- ``ResourceType``/``Provider``: the type/provider pair that ties it together.

Typical workflow
----------------

1. Create a ``ResourceType`` and declare its features, optionally confined.
2. Subclass ``Provider`` for each implementation and attach it to the type.
3. Providers confine themselves, declare capabilities, or extend feature
   confines for themselves.
4. Ask ``provider.has_capability(...)``/``provider.satisfies(...)`` at runtime.

A failed confine is never an error. It shows up as ``False`` and is explained
by the ``summary`` helpers; only malformed declarations raise
``DefinitionError``.
"""

from .confine import ConfineCollection, FeatureConfineCollection
from .errors import (
    ConfinementError,
    DefinitionError,
    DuplicateFeatureError,
    UnknownFeatureError,
)
from .features import BUNDLES, CapabilityBundle, CapabilityBundleRegistry, FeatureRegistry
from .host import GLOBAL_FEATURES, LocalHost, StaticHost, get_environment, use_environment
from .provider import Provider
from .resource_type import ResourceType
from .schemas import ConfineKind

__all__ = [
    "BUNDLES",
    "CapabilityBundle",
    "CapabilityBundleRegistry",
    "ConfineCollection",
    "ConfineKind",
    "ConfinementError",
    "DefinitionError",
    "DuplicateFeatureError",
    "FeatureConfineCollection",
    "FeatureRegistry",
    "GLOBAL_FEATURES",
    "LocalHost",
    "Provider",
    "ResourceType",
    "StaticHost",
    "UnknownFeatureError",
    "get_environment",
    "use_environment",
]
