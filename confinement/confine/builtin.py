from __future__ import annotations

import inspect
import os
from typing import Any, Dict, List, Sequence

from ..schemas.domain import ConfineKind, normalize_name
from .base import Confine


def _call_if_predicate(value: Any) -> Any:
    # Predicate code is evaluated lazily, on every check.
    return value() if callable(value) else value


class TrueConfine(Confine):
    """
    Confine passing when every value is truthy.

    Values may be zero-argument callables; they are invoked at evaluation time.
    Summary: the number of failing values across sibling confines.
    """

    kind = ConfineKind.true

    def pass_value(self, value: Any, subject: Any = None) -> bool:
        return bool(_call_if_predicate(value))

    def message(self, value: Any) -> str:
        return "false value when expecting true"

    @classmethod
    def summarize(cls, confines: Sequence[Confine], subject: Any = None) -> int:
        return sum(len(confine.failing_values(subject)) for confine in confines)


class FalseConfine(Confine):
    """
    Confine passing when every value is falsy.

    Summary: the number of failing values across sibling confines.
    """

    kind = ConfineKind.false

    def pass_value(self, value: Any, subject: Any = None) -> bool:
        return not _call_if_predicate(value)

    def message(self, value: Any) -> str:
        return "true value when expecting false"

    @classmethod
    def summarize(cls, confines: Sequence[Confine], subject: Any = None) -> int:
        return sum(len(confine.failing_values(subject)) for confine in confines)


class ExistsConfine(Confine):
    """
    Confine passing when every value names an existing file.

    With ``for_binary`` set the values are executable names looked up on the
    search path instead of literal paths.
    Summary: every value that did not resolve, in declaration order.
    """

    kind = ConfineKind.exists

    def pass_value(self, value: Any, subject: Any = None) -> bool:
        if not value:
            return False
        target = os.fspath(value) if isinstance(value, os.PathLike) else str(value)
        if self.for_binary:
            return self.env.which(target) is not None
        return self.env.path_exists(target)

    def message(self, value: Any) -> str:
        if self.for_binary:
            return f"binary {value} could not be found on the search path"
        return f"file {value} does not exist"

    @classmethod
    def summarize(cls, confines: Sequence[Confine], subject: Any = None) -> List[Any]:
        missing: List[Any] = []
        for confine in confines:
            missing.extend(confine.failing_values(subject))
        return missing


class MethodsConfine(Confine):
    """The class that checks whether the subject provides the named methods.

    A class subject must *define* a public method of that name; an instance
    subject only needs the attribute to be callable.
    Summary: the deduplicated union of missing method names.
    """

    kind = ConfineKind.methods

    def pass_value(self, value: Any, subject: Any = None) -> bool:
        return self.method_available(normalize_name(value), subject)

    @staticmethod
    def method_available(name: str, subject: Any) -> bool:
        """
        Check whether ``subject`` exposes a method called ``name``.

        Args:
            name: The method name.
            subject: A provider class or instance.

        Returns:
            True if the method is defined (class) or callable (instance).
        """
        if isinstance(subject, type):
            if name.startswith("_"):
                return False
            return inspect.isroutine(inspect.getattr_static(subject, name, None))
        return callable(getattr(subject, name, None))

    def message(self, value: Any) -> str:
        return f"method {value} is not defined"


class FeatureConfine(Confine):
    """
    Confine passing when every named global feature is available.

    Summary: the deduplicated union of missing global feature names.
    """

    kind = ConfineKind.feature

    def pass_value(self, value: Any, subject: Any = None) -> bool:
        return self.env.global_feature_available(normalize_name(value))

    def message(self, value: Any) -> str:
        return f"feature {value} is missing"


class VariableConfine(Confine):
    """
    Confine comparing a host fact against a list of accepted values.

    Unlike the other kinds a variable confine holds when the fact matches
    *any* value. Strings compare case-insensitively; a boolean fact matches
    boolean values and their ``"true"``/``"false"`` spellings. A missing fact
    never matches.
    Summary: mapping of fact name to the accepted values of each failing confine.
    """

    kind = ConfineKind.variable

    def __init__(self, values: Any, *, name: str, **kwargs: Any) -> None:
        super().__init__(values, **kwargs)
        self.name = normalize_name(name)

    def fact_value(self) -> Any:
        return self.env.fact_value(self.name)

    @staticmethod
    def matches(fact: Any, value: Any) -> bool:
        if fact is None:
            return False
        if isinstance(fact, bool):
            if isinstance(value, bool):
                return value is fact
            if isinstance(value, str) and value.lower() in ("true", "false"):
                return (value.lower() == "true") is fact
            return False
        return str(fact).lower() == str(value).lower()

    def pass_value(self, value: Any, subject: Any = None) -> bool:
        return self.matches(self.fact_value(), value)

    def evaluate(self, subject: Any = None) -> List[bool]:
        fact = self.fact_value()
        self._results = [self.matches(fact, value) for value in self.values]
        return list(self._results)

    def satisfied(self, outcomes: Sequence[bool]) -> bool:
        return any(outcomes)

    def message(self, value: Any) -> str:
        accepted = ",".join(str(v) for v in self.values)
        return f"fact value '{self.fact_value()}' for '{self.name}' not in required list '{accepted}'"

    @classmethod
    def summarize(cls, confines: Sequence[Confine], subject: Any = None) -> Dict[str, List[Any]]:
        result: Dict[str, List[Any]] = {}
        for confine in confines:
            if not confine.satisfied(confine.results(subject)):
                result.setdefault(getattr(confine, "name", ""), []).extend(confine.values)
        return result


BUILTIN_CONFINES = (
    TrueConfine,
    FalseConfine,
    ExistsConfine,
    MethodsConfine,
    FeatureConfine,
    VariableConfine,
)
