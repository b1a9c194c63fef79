from __future__ import annotations

"""Host environment collaborators used by confines.

Confines never touch the filesystem, the search path, facts or global
features directly; they ask a ``HostEnvironment``. ``LocalHost`` answers for
the machine the process runs on, ``StaticHost`` answers from in-memory data
(useful for tests and for evaluating providers against a described host).

A confine built without an explicit environment uses the process default
returned by ``get_environment`` at evaluation time.
"""

import os
import shutil
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Protocol, Set

from ..core.config import settings
from ..schemas.domain import normalize_name
from .facts import FactSource, HostFacts
from .features import GLOBAL_FEATURES, GlobalFeatureSet


class HostEnvironment(Protocol):
    """Boundary contract between confines and the host they describe."""

    def fact_value(self, name: str) -> Any: ...

    def path_exists(self, path: str) -> bool: ...

    def which(self, name: str) -> Optional[str]: ...

    def global_feature_available(self, name: str) -> bool: ...


class LocalHost(HostEnvironment):
    """HostEnvironment backed by the local machine."""

    def __init__(
        self,
        facts: Optional[FactSource] = None,
        features: Optional[GlobalFeatureSet] = None,
        search_path: Optional[str] = None,
    ) -> None:
        self._facts = facts if facts is not None else HostFacts()
        self._features = features if features is not None else GLOBAL_FEATURES
        self._search_path = search_path if search_path is not None else settings.search_path

    @property
    def facts(self) -> FactSource:
        return self._facts

    def fact_value(self, name: str) -> Any:
        return self._facts.value(name)

    def path_exists(self, path: str) -> bool:
        return os.path.exists(path)

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name, path=self._search_path)

    def global_feature_available(self, name: str) -> bool:
        return self._features.is_available(name)


@dataclass
class StaticHost(HostEnvironment):
    """HostEnvironment backed by in-memory data.

    Fact names are matched case-insensitively; ``binaries`` maps a binary name
    to the path it resolves to.
    """

    facts: Dict[str, Any] = field(default_factory=dict)
    paths: Set[str] = field(default_factory=set)
    binaries: Dict[str, str] = field(default_factory=dict)
    features: Set[str] = field(default_factory=set)

    def fact_value(self, name: str) -> Any:
        wanted = normalize_name(name).lower()
        for key, value in self.facts.items():
            if normalize_name(key).lower() == wanted:
                return value
        return None

    def path_exists(self, path: str) -> bool:
        return path in self.paths

    def which(self, name: str) -> Optional[str]:
        return self.binaries.get(name)

    def global_feature_available(self, name: str) -> bool:
        return normalize_name(name) in self.features


_lock = threading.Lock()
_current: Optional[HostEnvironment] = None


def get_environment() -> HostEnvironment:
    """Return the process-wide default environment, creating ``LocalHost`` on first use."""
    global _current
    if _current is None:
        with _lock:
            if _current is None:
                _current = LocalHost()
    return _current


def set_environment(environment: Optional[HostEnvironment]) -> Optional[HostEnvironment]:
    """Replace the process-wide default environment and return the previous one.

    Passing ``None`` resets to a fresh ``LocalHost`` on next use.
    """
    global _current
    with _lock:
        previous, _current = _current, environment
    return previous


@contextmanager
def use_environment(environment: HostEnvironment) -> Iterator[HostEnvironment]:
    """Temporarily install ``environment`` as the process-wide default."""
    previous = set_environment(environment)
    try:
        yield environment
    finally:
        set_environment(previous)
