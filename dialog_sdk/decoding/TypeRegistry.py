"""Wire type tag registry consulted by the tagged decoder."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping

if TYPE_CHECKING:
    from dialog_sdk.decoding.Result import Result
    from dialog_sdk.decoding.TaggedDecoder import TaggedDecoder

TypeFactory = Callable[["TaggedDecoder", str, dict], "Result[Any]"]


class TypeRegistry:
    """
    Maps wire type tags to a zero-arg constructible class (decoded by generic field copy)
    or to a factory function for types that need bespoke construction.

    The registry is filled once at startup and then frozen. After freeze() it is
    read-only, so a single instance can be shared by concurrent decoders.
    """

    def __init__(self) -> None:
        self._classes: dict[str, type] = {}
        self._factories: dict[str, TypeFactory] = {}
        self._frozen = False

    ##########################################
    ############### BUILDING #################
    ##########################################

    def register_class(self, type_tag: str, cls: type) -> TypeRegistry:
        self._ensure_mutable(type_tag)
        self._classes[type_tag] = cls
        return self

    def register_factory(self, type_tag: str, factory: TypeFactory) -> TypeRegistry:
        """
        Registers a factory for a type tag. The factory receives the decoder, the tag and the raw
        envelope and returns a Result. Returning None makes the decoder fall back to the generic path.
        """
        self._ensure_mutable(type_tag)
        self._factories[type_tag] = factory
        return self

    def freeze(self) -> TypeRegistry:
        if not self._frozen:
            self._classes = MappingProxyType(dict(self._classes))
            self._factories = MappingProxyType(dict(self._factories))
            self._frozen = True
        return self

    def _ensure_mutable(self, type_tag: str) -> None:
        if self._frozen:
            raise RuntimeError(f"Cannot register type '{type_tag}': the type registry is frozen.")

    ##########################################
    ################ GETTER ##################
    ##########################################

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def classes(self) -> Mapping[str, type]:
        return MappingProxyType(self._classes) if not self._frozen else self._classes

    def class_for(self, type_tag: str) -> type | None:
        return self._classes.get(type_tag)

    def factory_for(self, type_tag: str) -> TypeFactory | None:
        return self._factories.get(type_tag)

    def knows(self, type_tag: str) -> bool:
        return type_tag in self._classes or type_tag in self._factories
