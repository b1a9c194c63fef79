from __future__ import annotations

"""Host fact lookup.

Facts are named host attributes (``kernel``, ``operatingsystem`` ...) that
``variable`` confines compare against. ``HostFacts`` resolves them in this
order:

1) explicit overrides passed in code (``set`` or the constructor),
2) environment variables named ``<prefix><fact>`` (``FACTER_`` by default),
3) built-in resolvers backed by ``platform``, ``socket`` and ``os``.

Fact names are case-insensitive. A fact nobody can resolve is ``None``.
"""

import logging
import os
import platform
import socket
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

from ..core.config import settings
from ..schemas.domain import normalize_name

logger = logging.getLogger(__name__)


class FactSource(Protocol):
    """Anything able to answer ``value(name)`` for a host fact."""

    def value(self, name: str) -> Any: ...


def _os_release() -> Dict[str, str]:
    try:
        return platform.freedesktop_os_release()
    except (OSError, AttributeError):
        return {}


def _kernel() -> str:
    return platform.system()


def _operatingsystem() -> str:
    system = platform.system()
    if system == "Linux":
        return _os_release().get("ID") or system
    return system


def _osfamily() -> str:
    system = platform.system()
    if system == "Linux":
        release = _os_release()
        like = release.get("ID_LIKE", "").split()
        return like[0] if like else (release.get("ID") or system)
    return system


def _hostname() -> str:
    return socket.gethostname().split(".")[0]


def _is_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


BUILTIN_FACTS: Dict[str, Callable[[], Any]] = {
    "kernel": _kernel,
    "operatingsystem": _operatingsystem,
    "osfamily": _osfamily,
    "architecture": platform.machine,
    "hostname": _hostname,
    "fqdn": socket.getfqdn,
    "pythonversion": platform.python_version,
    "is_root": _is_root,
}


class HostFacts:
    """Fact source for the local host.

    Built-in facts are resolved once and cached; call ``flush`` to resolve
    them again.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        *,
        env_prefix: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._overrides: Dict[str, Any] = {}
        self._env_prefix = settings.fact_env_prefix if env_prefix is None else env_prefix
        self._environ = environ
        self._cache: Dict[str, Any] = {}
        for name, value in (overrides or {}).items():
            self.set(name, value)

    def set(self, name: str, value: Any) -> None:
        """Pin a fact to a value, shadowing the environment and built-ins."""
        self._overrides[normalize_name(name).lower()] = value

    def flush(self) -> None:
        """Forget cached built-in fact values."""
        self._cache.clear()

    def _from_environ(self, name: str) -> Optional[str]:
        if not self._env_prefix:
            return None
        environ = os.environ if self._environ is None else self._environ
        for key in (self._env_prefix + name, self._env_prefix + name.upper()):
            if key in environ:
                return environ[key]
        return None

    def value(self, name: str) -> Any:
        key = normalize_name(name).lower()
        if key in self._overrides:
            return self._overrides[key]

        env_value = self._from_environ(key)
        if env_value is not None:
            return env_value

        if key in self._cache:
            return self._cache[key]
        resolver = BUILTIN_FACTS.get(key)
        if resolver is None:
            return None
        try:
            result = resolver()
        except OSError as e:
            logger.warning(f"Failed to resolve fact '{key}': {e}")
            result = None
        self._cache[key] = result
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Return every resolvable fact, built-ins first, overrides on top."""
        names = list(BUILTIN_FACTS) + [n for n in self._overrides if n not in BUILTIN_FACTS]
        return {name: self.value(name) for name in names}
