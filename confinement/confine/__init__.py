"""Confines and confine collections.

A *confine* is a predicate with one or more candidate values that decides
whether a provider, or one of its features, is usable on the current host.

This package exports:

- ``Confine`` and the built-in kinds (``true``, ``false``, ``exists``,
  ``methods``, ``feature`` and the fact-based ``variable`` fallback).
- ``ConfineRegistry``: kind -> implementation mapping used by collections.
- ``ConfineCollection``/``FeatureConfineCollection``: groups of confines
  evaluated together.
"""

from .base import Confine
from .builtin import (
    ExistsConfine,
    FalseConfine,
    FeatureConfine,
    MethodsConfine,
    TrueConfine,
    VariableConfine,
)
from .collection import ConfineCollection, FeatureConfineCollection
from .registry import DEFAULT_CONFINE_REGISTRY, ConfineRegistry

__all__ = [
    "Confine",
    "ConfineCollection",
    "ConfineRegistry",
    "DEFAULT_CONFINE_REGISTRY",
    "ExistsConfine",
    "FalseConfine",
    "FeatureConfine",
    "FeatureConfineCollection",
    "MethodsConfine",
    "TrueConfine",
    "VariableConfine",
]
