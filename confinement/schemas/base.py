"""Shared pydantic base for the read-only descriptions the engine hands out."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base model for confinement descriptions such as ``FeatureInfo``.

    Fields may be filled by name or by alias, and unexpected keys are rejected
    so a typo in a description fails loudly instead of being dropped.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
    )
