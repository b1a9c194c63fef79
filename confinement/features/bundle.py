from __future__ import annotations

"""Capability bundles.

A capability bundle is the set of feature checks every provider of a type
exposes. It is synthesized once per type from the type's ``FeatureRegistry``
and cached in a ``CapabilityBundleRegistry``:

- ``has_capability``/``capabilities``/``satisfies``: feature queries;
- ``predicate``: one ready-made check per feature;
- ``declare_capabilities``: a provider states it has a feature outright;
- ``extend_confine``: a provider adds confines to a feature, for itself only.

The bundle works on clones of the type's feature collections, so nothing a
provider does through it changes the type's definitions. A provider class
that extends a feature gets a further private clone; its subclasses see the
extension, its siblings do not.

The *subject* of every operation is a provider instance or a provider class.
"""

import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from ..confine.collection import FeatureConfineCollection
from ..errors import UnknownFeatureError
from ..schemas.domain import normalize_name
from .registry import FeatureRegistry

logger = logging.getLogger(__name__)

DECLARED_ATTR = "_declared_capabilities"

CapabilityPredicate = Callable[[Any], bool]


def _flatten(names: Iterable[Any]) -> Iterable[Any]:
    for name in names:
        if isinstance(name, (list, tuple, set, frozenset)):
            yield from _flatten(name)
        else:
            yield name


def _provider_class(subject: Any) -> type:
    return subject if isinstance(subject, type) else type(subject)


class CapabilityBundle:
    """Capability checks shared by every provider of one type."""

    def __init__(self, owner_name: str, features: Iterable[tuple[str, FeatureConfineCollection]]) -> None:
        """
        Args:
            owner_name: Name of the type the bundle belongs to.
            features: ``(name, master collection)`` pairs; each collection is cloned.
        """
        self.owner_name = owner_name
        self._features: Dict[str, FeatureConfineCollection] = {name: c.clone() for name, c in features}
        self._provider_features: Dict[type, Dict[str, FeatureConfineCollection]] = {}

    def sync(self, features: Iterable[tuple[str, FeatureConfineCollection]]) -> List[str]:
        """
        Clone features the bundle has not seen yet; known features are left untouched.

        Returns:
            The names that were added.
        """
        added = []
        for name, collection in features:
            if name not in self._features:
                self._features[name] = collection.clone()
                added.append(name)
        if added:
            logger.debug(f"Added feature(s) {', '.join(added)} to capability bundle for '{self.owner_name}'")
        return added

    def names(self) -> List[str]:
        """Return every feature name known to the bundle, in declaration order."""
        return list(self._features)

    def __contains__(self, name: object) -> bool:
        return normalize_name(name) in self._features

    def _require(self, name: Any) -> str:
        key = normalize_name(name)
        if key not in self._features:
            raise UnknownFeatureError(key)
        return key

    def feature_collection(self, subject: Any, name: Any) -> FeatureConfineCollection:
        """
        Return the collection that decides ``name`` for ``subject``.

        That is the nearest private clone along the provider's MRO, or the
        bundle's own clone when no provider class extended the feature.

        Raises:
            UnknownFeatureError: If the feature is not declared on the type.
        """
        key = self._require(name)
        for klass in _provider_class(subject).__mro__:
            extended = self._provider_features.get(klass)
            if extended is not None and key in extended:
                return extended[key]
        return self._features[key]

    def declare_capabilities(self, subject: Any, *names: Any) -> None:
        """
        Record that ``subject`` has the named capabilities regardless of confines.

        Declarations accumulate and are stored on the subject itself, so an
        instance declaration does not affect other instances.
        """
        declared: Optional[Set[str]] = vars(subject).get(DECLARED_ATTR)
        if declared is None:
            declared = set()
            setattr(subject, DECLARED_ATTR, declared)
        for name in _flatten(names):
            declared.add(normalize_name(name))

    def declared_capabilities(self, subject: Any) -> Set[str]:
        """Return the capabilities declared on the subject and its provider classes."""
        declared: Set[str] = set()
        if not isinstance(subject, type):
            declared.update(getattr(subject, "__dict__", {}).get(DECLARED_ATTR, ()))
        for klass in _provider_class(subject).__mro__:
            declared.update(vars(klass).get(DECLARED_ATTR, ()))
        return declared

    def has_capability(self, subject: Any, name: Any) -> bool:
        """
        Check whether ``subject`` has the named capability.

        Declared capabilities win; otherwise the feature's confines must all
        hold for the subject. Unknown names are simply absent.
        """
        key = normalize_name(name)
        if key in self.declared_capabilities(subject):
            return True
        if key not in self._features:
            return False
        return self.feature_collection(subject, key).valid(subject)

    def capabilities(self, subject: Any) -> List[str]:
        """Return the names of every capability ``subject`` has, sorted."""
        return sorted(name for name in self._features if self.has_capability(subject, name))

    def satisfies(self, subject: Any, *names: Any) -> bool:
        """
        Check whether ``subject`` has all of the named capabilities.

        Names may be nested in lists or tuples. With no names the answer is True.
        """
        for name in _flatten(names):
            if not self.has_capability(subject, name):
                return False
        return True

    def predicate(self, name: Any) -> CapabilityPredicate:
        """
        Return the check for one capability as a callable taking the subject.

        Raises:
            UnknownFeatureError: If the feature is not declared on the type.
        """
        key = self._require(name)

        def check(subject: Any) -> bool:
            return self.has_capability(subject, key)

        check.__name__ = key
        check.__qualname__ = f"{self.owner_name}.{key}"
        return check

    def predicates(self) -> Dict[str, CapabilityPredicate]:
        """Return one predicate per feature, keyed by feature name."""
        return {name: self.predicate(name) for name in self._features}

    def extend_confine(self, subject: Any, name: Any, criteria: Optional[Dict[Any, Any]] = None, **kwargs: Any) -> None:
        """
        Add confines to the named feature for the subject's provider class only.

        Raises:
            UnknownFeatureError: If the feature is not declared on the type.
        """
        key = self._require(name)
        klass = _provider_class(subject)
        extended = self._provider_features.setdefault(klass, {})
        if key not in extended:
            extended[key] = self.feature_collection(klass, key).clone()
        extended[key].confine(criteria, **kwargs)
        logger.debug(f"Extended confines of '{self.owner_name}.{key}' for provider {klass.__name__}")

    def summary(self, subject: Any, name: Any) -> Dict[str, Any]:
        """Summarize why the named capability's confines fail for ``subject``."""
        return self.feature_collection(subject, name).summary(subject)


class CapabilityBundleRegistry:
    """
    Map from a type's ``FeatureRegistry`` to its capability bundle.

    Bundles are built on first request, at most once per type.
    """

    def __init__(self) -> None:
        """Initialize an empty bundle registry."""
        self._bundles: Dict[FeatureRegistry, CapabilityBundle] = {}
        self._lock = threading.Lock()

    def get_or_build(self, features: FeatureRegistry) -> CapabilityBundle:
        """
        Return the bundle for ``features``, building it on first use.

        Features declared after the bundle was built are cloned into it on
        the next request.

        Args:
            features: The owning type's feature registry.

        Returns:
            The memoized capability bundle.
        """
        bundle = self._bundles.get(features)
        if bundle is None:
            with self._lock:
                bundle = self._bundles.get(features)
                if bundle is None:
                    bundle = CapabilityBundle(features.owner_name, features.items())
                    self._bundles[features] = bundle
                    logger.debug(
                        f"Built capability bundle for '{features.owner_name}' with {len(bundle.names())} feature(s)"
                    )
        elif len(bundle.names()) < len(features):
            with self._lock:
                bundle.sync(features.items())
        return bundle

    def has(self, features: FeatureRegistry) -> bool:
        """Check whether a bundle was already built for ``features``."""
        return features in self._bundles

    def clear(self) -> None:
        """Drop every bundle; the next request rebuilds from the registries."""
        with self._lock:
            self._bundles.clear()

    def __len__(self) -> int:
        return len(self._bundles)


BUNDLES = CapabilityBundleRegistry()
