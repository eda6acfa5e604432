"""Decoder for self-describing dialog service payloads.

Every object the dialog service returns is an envelope carrying a type tag.
An envelope holds exactly one of three things: a server exception, a
redirection the client has to follow instead, or the fields of the expected
value. decode_value() tells these cases apart:

* exception   -> failed Result (SERVER_EXCEPTION)
* redirection -> successful Result holding Either.as_left(redirection)
* value       -> successful Result holding Either.as_right(value)

Values are built by a factory registered for the tag or, when there is none,
by copying the envelope's fields onto a blank instance of the registered class.
"""

import logging
from typing import Any, Callable, Iterable

from dialog_sdk.clients.dialog.models.TypeNames import REDIRECTION_TYPES, TypeNames
from dialog_sdk.decoding.Either import Either
from dialog_sdk.decoding.errors import DecodeError
from dialog_sdk.decoding.field_copy import assign_field, new_instance
from dialog_sdk.decoding.Result import Result
from dialog_sdk.decoding.TypeRegistry import TypeRegistry

TYPE_KEY = "type"
LEGACY_TYPE_KEY = "WS_OTYPE"
LIST_TYPE_KEY = "WS_LTYPE"
LIST_VALUES_KEY = "values"
EXCEPTION_KEY = "exception"
REDIRECTION_KEY = "redirection"

Factory = Callable[[str, dict], "Result[Any] | None"]


def list_element_type(type_name: str) -> str | None:
    """Returns "X" for a list type name "List<X>", otherwise None."""
    if type_name and type_name.startswith("List<") and type_name.endswith(">") and len(type_name) > 6:
        return type_name[5:-1]
    return None


def list_type_of(element_type: str) -> str:
    return f"List<{element_type}>"


def declared_type(raw: dict) -> str | None:
    """Returns the type tag an envelope declares, falling back to the legacy WS_OTYPE key."""
    tag = raw.get(TYPE_KEY) or raw.get(LEGACY_TYPE_KEY)
    return tag if isinstance(tag, str) else None


class TaggedDecoder:
    def __init__(
        self,
        registry: TypeRegistry,
        logger: logging.Logger | None = None,
        redirection_types: Iterable[str] = REDIRECTION_TYPES,
        exception_type: str = TypeNames.DialogExceptionTypeName,
    ):
        self.logging = logger or logging.getLogger("dialog_sdk.decoding")
        self._registry = registry
        self._redirection_types = frozenset(redirection_types)
        self._exception_type = exception_type

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    ##########################################
    ############## ENTRY POINTS ##############
    ##########################################

    def decode_value(
        self,
        raw: Any,
        expected_type: str,
        factory: Factory | None = None,
        ignore_redirection: bool = False,
    ) -> Result[Either]:
        """
        Decodes a raw payload into a value of the expected type, or recognises a redirection or exception in it.

        Args:
            raw: The parsed JSON payload (object, array or scalar).
            expected_type (str): The type tag the payload must declare. Arrays require "List<X>".
            factory: Custom construction hook (type_tag, raw) -> Result | None. Defaults to the registry factories.
                None from the hook means "use generic field copy".
            ignore_redirection (bool): Decode the value even if the envelope carries a redirection.

        Returns:
            Result[Either]: Either.as_left(redirection) or Either.as_right(value) on success,
                a DecodeError on failure. Never raises.
        """
        try:
            return self._decode(raw, expected_type, factory or self.registry_factory, ignore_redirection)
        except Exception as e:
            self.logging.exception("Unexpected error while decoding '%s'", expected_type)
            return Result.failure(DecodeError.factory_failure(f"{type(e).__name__}: {e}"))

    def extract_value(
        self,
        raw: Any,
        expected_type: str,
        factory: Factory | None = None,
        ignore_redirection: bool = False,
    ) -> Result[Any]:
        """Like decode_value(), but a redirection is a failure (UNEXPECTED_REDIRECTION)."""
        result = self.decode_value(raw, expected_type, factory, ignore_redirection)
        return result.bind(lambda either: self._require_value(either, expected_type))

    def extract_value_or_redirect(self, raw: Any, expected_type: str, factory: Factory | None = None) -> Result[Either]:
        """Like decode_value(); the caller branches on the returned Either."""
        return self.decode_value(raw, expected_type, factory, ignore_redirection=False)

    def extract_list(self, raw: Any, element_type: str, factory: Factory | None = None) -> Result[list]:
        """Decodes an array or a WS_LTYPE list envelope whose elements must all be of element_type."""
        return self.extract_value(raw, list_type_of(element_type), factory)

    def decode_any(self, raw: Any) -> Result[Any]:
        """
        Decodes a payload whose type is not known up front (acknowledgements, available values, view modes).
        Tagged objects are decoded against their own tag, arrays element by element, anything else is kept as is.
        """
        try:
            return self._decode_field(raw)
        except Exception as e:
            self.logging.exception("Unexpected error while decoding an untyped payload")
            return Result.failure(DecodeError.factory_failure(f"{type(e).__name__}: {e}"))

    def registry_factory(self, type_tag: str, raw: dict) -> Result[Any] | None:
        factory = self._registry.factory_for(type_tag)
        if factory is None:
            return None
        return factory(self, type_tag, raw)

    ##########################################
    ################ DECODING ################
    ##########################################

    def _decode(self, raw: Any, expected_type: str, factory: Factory, ignore_redirection: bool) -> Result[Either]:
        if raw is None:
            return Result.failure(DecodeError.null_input(f"Cannot decode '{expected_type}' from a null value"))

        if isinstance(raw, list):
            element_type = list_element_type(expected_type)
            if element_type is None:
                return Result.failure(DecodeError.list_type_expected(expected_type))
            return self._decode_elements(raw, element_type, factory, ignore_redirection).map(Either.as_right)

        if not isinstance(raw, dict):
            return Result.success(Either.as_right(raw))

        if LIST_TYPE_KEY in raw:
            return self._decode_list_envelope(raw, expected_type, factory, ignore_redirection)

        found = declared_type(raw)
        if found is None or found != expected_type:
            return Result.failure(DecodeError.type_mismatch(expected_type, found))

        if raw.get(EXCEPTION_KEY) is not None:
            return Result.failure(DecodeError.server_exception(self._decode_exception(raw[EXCEPTION_KEY])))

        if raw.get(REDIRECTION_KEY) is not None and not ignore_redirection:
            return self._decode_redirection(raw[REDIRECTION_KEY]).map(Either.as_left)

        self.logging.debug("Decoding %s", expected_type)
        custom = factory(expected_type, raw)
        if custom is not None:
            if custom.is_failure:
                self.logging.error("Factory failed to produce '%s': %s", expected_type, custom.error.message)
                return Result.failure(
                    DecodeError.factory_failure(
                        f"Factory failed to produce '{expected_type}': {custom.error.message}", cause=custom.error
                    )
                )
            return Result.success(Either.as_right(custom.value))

        return self._copy_fields(raw, expected_type, ignore_redirection).map(Either.as_right)

    def _decode_list_envelope(self, raw: dict, expected_type: str, factory: Factory, ignore_redirection: bool) -> Result[Either]:
        element_type = list_element_type(expected_type) or expected_type
        declared = raw.get(LIST_TYPE_KEY)
        if declared != element_type:
            return Result.failure(DecodeError.type_mismatch(element_type, declared))
        values = raw.get(LIST_VALUES_KEY)
        if values is None:
            return Result.failure(DecodeError.null_input(f"List of '{element_type}' has no values array"))
        if not isinstance(values, list):
            return Result.failure(DecodeError.list_type_expected(expected_type))
        return self._decode_elements(values, element_type, factory, ignore_redirection).map(Either.as_right)

    def _decode_elements(self, values: list, element_type: str, factory: Factory, ignore_redirection: bool) -> Result[list]:
        # fail fast: the first failing element decides the outcome
        decoded = []
        for index, item in enumerate(values):
            if not isinstance(item, (dict, list)):
                decoded.append(item)
                continue
            result = self._decode(item, element_type, factory, ignore_redirection)
            if result.is_failure:
                return Result.failure(result.error.at_index(index))
            if result.value.is_left:
                return Result.failure(DecodeError.unexpected_redirection(element_type).at_index(index))
            decoded.append(result.value.right)
        return Result.success(decoded)

    def _decode_redirection(self, raw: Any) -> Result[Any]:
        if raw is None:
            return Result.failure(DecodeError.null_input("Redirection is null"))
        found = declared_type(raw) if isinstance(raw, dict) else type(raw).__name__
        if found not in self._redirection_types:
            return Result.failure(DecodeError.type_mismatch(TypeNames.RedirectionTypeName, found))
        return self._extract_nested(raw, found)

    def _decode_exception(self, raw: Any) -> Any:
        """Best-effort decode of a server exception; falls back to its string form."""
        if not isinstance(raw, dict):
            return str(raw)
        tag = declared_type(raw)
        payload = raw if tag else {**raw, TYPE_KEY: self._exception_type}
        result = self._decode(payload, tag or self._exception_type, self.registry_factory, True)
        if result.is_failure:
            self.logging.warning("Could not decode server exception: %s", result.error.message)
            return str(raw)
        return result.value.right

    ##########################################
    ############## FIELD COPY ################
    ##########################################

    def _copy_fields(self, raw: dict, type_tag: str, ignore_redirection: bool) -> Result[Any]:
        cls = self._registry.class_for(type_tag)
        if cls is None:
            self.logging.debug("No class registered for %s, decoding into a dict", type_tag)
        target = new_instance(cls)
        for name, value in raw.items():
            if ignore_redirection and name == REDIRECTION_KEY:
                continue
            field_result = self._decode_field(value)
            if field_result.is_failure:
                return Result.failure(field_result.error)
            assign_field(target, name, field_result.value, self.logging, type_tag)
        return Result.success(target)

    def _decode_field(self, value: Any) -> Result[Any]:
        if isinstance(value, dict):
            if LIST_TYPE_KEY in value:
                return self._extract_nested(value, list_type_of(str(value[LIST_TYPE_KEY])))
            tag = declared_type(value)
            if tag:
                return self._extract_nested(value, tag)
            return Result.success(value)
        if isinstance(value, list):
            return self._decode_nested_array(value)
        return Result.success(value)

    def _decode_nested_array(self, values: list) -> Result[list]:
        # untyped arrays inside an object: each tagged element is decoded against its own tag
        decoded = []
        for index, item in enumerate(values):
            result = self._decode_field(item)
            if result.is_failure:
                return Result.failure(result.error.at_index(index))
            decoded.append(result.value)
        return Result.success(decoded)

    def _extract_nested(self, raw: Any, type_tag: str) -> Result[Any]:
        result = self._decode(raw, type_tag, self.registry_factory, False)
        return result.bind(lambda either: self._require_value(either, type_tag))

    @staticmethod
    def _require_value(either: Either, type_tag: str) -> Result[Any]:
        if either.is_left:
            return Result.failure(DecodeError.unexpected_redirection(type_tag))
        return Result.success(either.right)
