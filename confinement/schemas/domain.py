from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import Field

from .base import BaseSchema


class ConfineKind(str, Enum):
    """Closed set of confine kinds understood by the engine.

    ``variable`` is never named in criteria directly: any criteria key that is
    not one of the other kinds is treated as a fact name and checked with a
    ``variable`` confine.
    """

    true = "true"
    false = "false"
    exists = "exists"
    methods = "methods"
    feature = "feature"
    variable = "variable"


def normalize_name(name: Any) -> str:
    """Return the canonical key for a feature, capability or fact name.

    Enum members collapse to their value, everything else to its stripped
    string form, so ``"manages_homedir"`` and an enum whose value is
    ``"manages_homedir"`` address the same feature.
    """
    if isinstance(name, Enum):
        name = name.value
    return str(name).strip()


class FeatureInfo(BaseSchema):
    """
    Read-only description of a declared feature.

    Attributes:
        name: Canonical feature name.
        label: Diagnostic label, ``"<Type>.<feature>"``.
        docs: Human-readable description.
        confine_kinds: Kind names of the confines guarding the feature, in declaration order.
    """

    name: str
    label: str
    docs: str
    confine_kinds: List[str] = Field(default_factory=list)
