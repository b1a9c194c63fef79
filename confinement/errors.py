"""Error types for the confinement package.

Defines a small hierarchy of exceptions raised while *defining* types,
features and providers. A confine that does not pass is never an error: it is
reported as ``False`` by the checks and explained by the summary helpers.
"""

from __future__ import annotations


class ConfinementError(Exception):
    """Base error for all confinement exceptions."""


class DefinitionError(ConfinementError):
    """Raised when a type, feature or provider declaration is malformed.

    These errors indicate a bug in the declaring code and are never retried.
    """


class DuplicateFeatureError(DefinitionError):
    """Raised when a feature name is declared twice on the same type."""

    def __init__(self, name: str) -> None:
        self.feature = name
        super().__init__(f"Feature {name} is already defined")


class UnknownFeatureError(DefinitionError):
    """Raised when a capability name is not declared on the provider's type."""

    def __init__(self, name: str) -> None:
        self.feature = name
        super().__init__(f"Unable to find feature {name}")
