"""Pydantic schemas and enums shared across the confinement package."""

from .base import BaseSchema
from .domain import ConfineKind, FeatureInfo, normalize_name

__all__ = [
    "BaseSchema",
    "ConfineKind",
    "FeatureInfo",
    "normalize_name",
]
