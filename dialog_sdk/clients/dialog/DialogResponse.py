from typing import Any

from dialog_sdk.clients.dialog.models.TypeNames import REDIRECTION_TYPES, TypeNames
from dialog_sdk.decoding.Either import Either
from dialog_sdk.decoding.errors import DecodeError, DialogDecodeError, DialogServiceError
from dialog_sdk.decoding.TaggedDecoder import TaggedDecoder, declared_type
from dialog_sdk.models.JsonResponse import JsonResponse

ExpectedType = str | tuple[str, ...] | None


class DialogResponse:
    """
    Interprets a dialog service response by its status band:
    2xx carries the value, 3xx a redirection, 400 and above a DialogMessage.
    """

    def __init__(self, json_response: JsonResponse, decoder: TaggedDecoder):
        self._response = json_response
        self._decoder = decoder

    @property
    def status_code(self) -> int:
        return self._response.statusCode

    @property
    def raw_value(self) -> Any:
        return self._response.value

    ##########################################
    ################ VALUES ##################
    ##########################################

    def response_value(self, expected_type: ExpectedType = None) -> Any:
        """
        Returns the decoded value of a successful response.

        Args:
            expected_type: The expected type tag, a tuple of acceptable tags (the declared one is used),
                or None for an untyped payload.

        Raises:
            DialogServiceError: If the status is 400 or above.
            DialogDecodeError: If the body cannot be decoded into the expected type or holds a redirection.
        """
        self.assert_no_error()
        if self._response.has_redirection:
            raise DialogDecodeError(DecodeError.unexpected_redirection(self._type_label(expected_type)))
        if expected_type is None:
            return self._decoder.decode_any(self._response.value).unwrap()
        tag = self._resolve_expected(expected_type)
        return self._decoder.extract_value(self._response.value, tag).unwrap()

    def response_value_or_redirect(self, expected_type: ExpectedType = None) -> Either:
        """
        Returns Either.as_left(redirection) or Either.as_right(value).
        A redirection arrives either as a 3xx body or embedded in a 2xx envelope.
        """
        self.assert_no_error()
        if self._response.has_redirection:
            return Either.as_left(self.response_redirection())
        if expected_type is None:
            value = self._decoder.decode_any(self._response.value).unwrap()
            return Either.as_left(value) if declared_type_of(value) in REDIRECTION_TYPES else Either.as_right(value)
        tag = self._resolve_expected(expected_type)
        return self._decoder.extract_value_or_redirect(self._response.value, tag).unwrap()

    def response_redirection(self) -> Any:
        """Decodes the body against its declared redirection tag."""
        self.assert_no_error()
        body = self._response.value
        found = declared_type(body) if isinstance(body, dict) else None
        if found not in REDIRECTION_TYPES:
            raise DialogDecodeError(DecodeError.type_mismatch(TypeNames.RedirectionTypeName, found))
        return self._decoder.extract_value(body, found).unwrap()

    def assert_no_error(self) -> None:
        """
        Raises:
            DialogServiceError: If the status is 400 or above, carrying the decoded DialogMessage
                (the raw body when it cannot be decoded).
        """
        if not self._response.has_error:
            return
        body = self._response.value
        message: Any = body
        tag = declared_type(body) if isinstance(body, dict) else None
        if tag and self._decoder.registry.knows(tag):
            result = self._decoder.extract_value(body, tag, ignore_redirection=True)
            if result.ok:
                message = result.value
            else:
                self._decoder.logging.warning("Could not decode error body (status %d): %s", self.status_code, result.error.message)
        raise DialogServiceError(self.status_code, message)

    ##########################################
    ################ HELPER ##################
    ##########################################

    def _resolve_expected(self, expected_type: str | tuple[str, ...]) -> str:
        if isinstance(expected_type, str):
            return expected_type
        body = self._response.value
        found = declared_type(body) if isinstance(body, dict) else None
        return found if found in expected_type else expected_type[0]

    @staticmethod
    def _type_label(expected_type: ExpectedType) -> str:
        if expected_type is None:
            return "value"
        return expected_type if isinstance(expected_type, str) else expected_type[0]


def declared_type_of(value: Any) -> str | None:
    """The wire tag of a decoded value (model or dict), if it has one."""
    if isinstance(value, dict):
        return declared_type(value)
    tag = getattr(value, "type", None)
    return tag if isinstance(tag, str) else None
