from __future__ import annotations

"""Confine protocol and shared evaluation logic.

A confine is a single predicate with one or more candidate values, e.g.
"file ``/usr/bin/apt-get`` exists" or "fact ``osfamily`` is one of
``debian``, ``redhat``". Concrete kinds live in ``builtin``; collections build
them through ``ConfineRegistry`` and never instantiate kinds by hand.

Evaluation never raises for a negative finding: a value that does not pass is
recorded as ``False`` in the outcome vector and explained by ``message``.
The outcome vector of the last ``valid`` call is kept so that ``summarize``
can report which values failed.
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, List, Optional, Sequence

from ..errors import DefinitionError
from ..host.environment import HostEnvironment, get_environment
from ..schemas.domain import ConfineKind

logger = logging.getLogger(__name__)


def as_value_list(values: Any) -> List[Any]:
    """Normalize confine values to a list; scalars become one-element lists."""
    if isinstance(values, (list, tuple, set, frozenset)):
        return list(values)
    return [values]


class Confine(ABC):
    """
    Base class for every confine kind.

    Attributes:
        values: Candidate values, never empty.
        label: ``"<Type>.<feature>"`` or provider identity, used in diagnostics only.
        for_binary: ``exists`` confines only; look values up on the search path.
        environment: Host collaborators; ``None`` means the process default.
    """

    kind: ClassVar[ConfineKind]

    def __init__(
        self,
        values: Any,
        *,
        label: str = "",
        for_binary: bool = False,
        environment: Optional[HostEnvironment] = None,
    ) -> None:
        self.values: List[Any] = as_value_list(values)
        if not self.values:
            raise DefinitionError(f"{type(self).__name__} requires at least one value")
        self.label = label
        self.for_binary = for_binary
        self.environment = environment
        self._results: Optional[List[bool]] = None

    @property
    def env(self) -> HostEnvironment:
        """Return the environment this confine evaluates against."""
        return self.environment if self.environment is not None else get_environment()

    @abstractmethod
    def pass_value(self, value: Any, subject: Any = None) -> bool:
        """Return whether a single candidate value passes for ``subject``."""

    @abstractmethod
    def message(self, value: Any) -> str:
        """Render a human-readable reason for ``value`` failing."""

    def satisfied(self, outcomes: Sequence[bool]) -> bool:
        """Combine the outcome vector into one verdict; all values must pass."""
        return all(outcomes)

    def evaluate(self, subject: Any = None) -> List[bool]:
        """Evaluate every value against ``subject`` and remember the outcome vector."""
        self._results = [bool(self.pass_value(value, subject)) for value in self.values]
        return list(self._results)

    def results(self, subject: Any = None) -> List[bool]:
        """
        Return an outcome vector for summaries.

        Without a subject the vector of the last ``valid``/``evaluate`` call is
        reused when there is one; otherwise the confine is evaluated again.
        """
        if subject is None and self._results is not None:
            return list(self._results)
        return self.evaluate(subject)

    def reset(self) -> None:
        """Forget the last outcome vector."""
        self._results = None

    def valid(self, subject: Any = None) -> bool:
        """
        Check whether the confine holds for ``subject``.

        Args:
            subject: The provider instance or class being confined.

        Returns:
            True if the confine is satisfied, False otherwise. The first failing
            value is logged at DEBUG level.
        """
        outcomes = self.evaluate(subject)
        if self.satisfied(outcomes):
            return True
        failing = next((v for v, ok in zip(self.values, outcomes) if not ok), self.values[0])
        logger.debug(f"{self.label}: {self.message(failing)}")
        return False

    def failing_values(self, subject: Any = None) -> List[Any]:
        """Return the values whose outcome is False."""
        return [value for value, ok in zip(self.values, self.results(subject)) if not ok]

    @classmethod
    def summarize(cls, confines: Sequence["Confine"], subject: Any = None) -> Any:
        """Aggregate failures across sibling confines of this kind.

        The default aggregate is the deduplicated list of failing values in
        first-seen order.
        """
        missing: List[Any] = []
        for confine in confines:
            for value in confine.failing_values(subject):
                if value not in missing:
                    missing.append(value)
        return missing

    def copy(self) -> "Confine":
        """Return an independent copy; values are copied, collaborators are shared."""
        clone = copy.copy(self)
        clone.values = list(self.values)
        clone._results = None
        return clone

    def __repr__(self) -> str:
        return f"<{type(self).__name__} label={self.label!r} values={self.values!r}>"
