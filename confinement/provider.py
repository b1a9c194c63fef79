from __future__ import annotations

"""Provider base class.

A provider is a concrete implementation of a resource type. Subclasses attach
themselves to a type with class keywords and state their requirements with
confines::

    package = ResourceType("package")
    package.feature("upgradeable", "The provider can upgrade packages.", methods=["update"])

    class Apt(Provider, resource_type=package, name="apt"):
        pass

    Apt.confine(exists="apt-get", for_binary=True, osfamily="debian")
    Apt.declare_capabilities("upgradeable")

Capability queries go to the type's capability bundle; the provider only
forwards to it with itself as the subject.
"""

import types
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional

from .confine.collection import ConfineCollection
from .errors import DefinitionError
from .features.bundle import CapabilityBundle
from .resource_type import ResourceType


class subject_method:
    """Bind a method to the instance it is called on, or to the class when called on the class."""

    def __init__(self, func: Callable[..., Any]) -> None:
        self.__func__ = func
        self.__doc__ = func.__doc__
        self.__name__ = func.__name__

    def __get__(self, instance: Any, owner: type) -> Callable[..., Any]:
        return types.MethodType(self.__func__, owner if instance is None else instance)


class Provider:
    """
    Base class for providers.

    Class keywords:
        resource_type: The type to register with. Subclasses inherit it.
        name: Provider name; defaults to the lower-cased class name.
    """

    resource_type: ClassVar[Optional[ResourceType]] = None
    provider_name: ClassVar[str] = "provider"
    _confine_collection: ClassVar[ConfineCollection] = ConfineCollection("provider")

    def __init_subclass__(cls, resource_type: Optional[ResourceType] = None, name: Optional[str] = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if resource_type is not None:
            cls.resource_type = resource_type
        cls.provider_name = name or cls.__name__.lower()

        owner = cls.resource_type
        label = f"{owner.name}.{cls.provider_name}" if owner is not None else cls.provider_name
        cls._confine_collection = ConfineCollection(
            label,
            registry=owner.confine_registry if owner is not None else None,
            environment=owner.environment if owner is not None else None,
        )
        if resource_type is not None:
            resource_type.register_provider(cls.provider_name, cls)

    def __init__(self, resource: Any = None) -> None:
        self.resource = resource

    # ------------------------------------------------------------------
    # Provider suitability
    # ------------------------------------------------------------------

    @classmethod
    def confine(cls, criteria: Optional[Mapping[Any, Any]] = None, **kwargs: Any) -> None:
        """Add confines that must hold for this provider to be usable at all."""
        cls._confine_collection.confine(criteria, **kwargs)

    @classmethod
    def confine_collection(cls) -> ConfineCollection:
        return cls._confine_collection

    @classmethod
    def suitable(cls) -> bool:
        """Check whether the provider's own confines hold; unconfined providers are not suitable."""
        return cls._confine_collection.valid(cls)

    @classmethod
    def confine_summary(cls) -> Dict[str, Any]:
        return cls._confine_collection.summary(cls)

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    @classmethod
    def capability_bundle(cls) -> CapabilityBundle:
        """
        Return the capability bundle of the provider's type.

        Raises:
            DefinitionError: If the provider is not attached to a resource type.
        """
        if cls.resource_type is None:
            raise DefinitionError(f"Provider {cls.__name__} is not attached to a resource type")
        return cls.resource_type.capability_bundle()

    @subject_method
    def declare_capabilities(subject: Any, *names: Any) -> None:
        """
        Declare that the provider has the named capabilities, whatever the confines say.

        Called on the class the declaration covers every instance and subclass;
        called on an instance it covers that instance only.
        """
        subject.capability_bundle().declare_capabilities(subject, *names)

    @classmethod
    def extend_confine(cls, name: Any, criteria: Optional[Mapping[Any, Any]] = None, **kwargs: Any) -> None:
        """Add confines to one of the type's features, for this provider only."""
        cls.capability_bundle().extend_confine(cls, name, criteria, **kwargs)

    @classmethod
    def class_has_capability(cls, name: Any) -> bool:
        return cls.capability_bundle().has_capability(cls, name)

    def has_capability(self, name: Any) -> bool:
        return self.capability_bundle().has_capability(self, name)

    def capabilities(self) -> List[str]:
        return self.capability_bundle().capabilities(self)

    def satisfies(self, *names: Any) -> bool:
        return self.capability_bundle().satisfies(self, *names)

    def check(self, name: Any) -> bool:
        """Run the named capability's predicate; unknown names raise ``UnknownFeatureError``."""
        return self.capability_bundle().predicate(name)(self)

    def capability_summary(self, name: Any) -> Dict[str, Any]:
        return self.capability_bundle().summary(self, name)
