"""Process-wide ("global") feature oracle.

A global feature answers questions such as "is the ``yaml`` library
importable" or "are we running as root". They are unrelated to the per-type
features declared through ``FeatureRegistry``: ``feature`` confines consult
this oracle, nothing else does.
"""

from __future__ import annotations

import importlib.util
import logging
import os
import sys
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..schemas.domain import normalize_name

logger = logging.getLogger(__name__)

FeatureTest = Callable[[], Any]


def _importable(lib: str) -> bool:
    try:
        return importlib.util.find_spec(lib) is not None
    except (ImportError, ValueError):
        return False


class GlobalFeatureSet:
    """
    Registry of named global features and their availability tests.

    A feature is available when every library in ``libs`` can be imported and
    the optional ``test`` callable returns a truthy value. Results are cached
    until ``flush`` is called or the feature is redefined.

    Notes:
        - Unknown feature names are simply unavailable.
        - A test that raises is logged and treated as unavailable.
    """

    def __init__(self) -> None:
        """Initialize an empty feature set."""
        self._libs: Dict[str, List[str]] = {}
        self._tests: Dict[str, Optional[FeatureTest]] = {}
        self._results: Dict[str, bool] = {}

    def add(self, name: str, *, libs: Iterable[str] = (), test: Optional[FeatureTest] = None) -> None:
        """
        Define (or redefine) a global feature.

        Args:
            name: The feature name, e.g. ``"root"`` or ``"yaml"``.
            libs: Importable module names the feature depends on.
            test: Optional zero-argument callable; its truthiness decides availability.
        """
        key = normalize_name(name)
        self._libs[key] = [libs] if isinstance(libs, str) else list(libs)
        self._tests[key] = test
        self._results.pop(key, None)

    def names(self) -> List[str]:
        """Return the defined feature names in definition order."""
        return list(self._tests)

    def flush(self) -> None:
        """Forget every cached availability result."""
        self._results.clear()

    def _evaluate(self, key: str) -> bool:
        if not all(_importable(lib) for lib in self._libs[key]):
            return False
        test = self._tests[key]
        if test is None:
            return True
        try:
            return bool(test())
        except Exception as e:
            logger.warning(f"Global feature test for '{key}' failed: {e}")
            return False

    def is_available(self, name: str) -> bool:
        """
        Check whether the named global feature is present on this process.

        Args:
            name: The feature name.

        Returns:
            True if defined and its libraries and test pass, False otherwise.
        """
        key = normalize_name(name)
        if key not in self._tests:
            return False
        if key not in self._results:
            self._results[key] = self._evaluate(key)
        return self._results[key]

    def __contains__(self, name: object) -> bool:
        return self.is_available(str(name))


GLOBAL_FEATURES = GlobalFeatureSet()
GLOBAL_FEATURES.add("root", test=lambda: hasattr(os, "geteuid") and os.geteuid() == 0)
GLOBAL_FEATURES.add("posix", test=lambda: os.name == "posix")
GLOBAL_FEATURES.add("microsoft_windows", test=lambda: sys.platform.startswith("win"))
