"""Failure taxonomy shared by the decoder and the dialog clients.

Decode failures travel as :class:`DecodeError` values inside a ``Result``.
The client boundary turns them into :class:`DialogError` exceptions so that
callers of the async API get one exception hierarchy to catch.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


def describe(obj: Any) -> str:
    """Best human-readable text of a server message or exception (model, dict or anything else)."""
    if isinstance(obj, dict):
        text = obj.get("message") or obj.get("code")
    else:
        text = getattr(obj, "message", None)
    return str(text) if text else str(obj)


class DecodeErrorKind(str, Enum):
    NULL_INPUT = "NULL_INPUT"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    SERVER_EXCEPTION = "SERVER_EXCEPTION"
    UNEXPECTED_REDIRECTION = "UNEXPECTED_REDIRECTION"
    LIST_TYPE_EXPECTED = "LIST_TYPE_EXPECTED"
    FACTORY_FAILURE = "FACTORY_FAILURE"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"


@dataclass(frozen=True)
class DecodeError:
    """A single decode failure.

    Attributes:
        kind:      Which failure case applies.
        message:   Human-readable description, suitable for logs.
        expected:  Expected type tag (TYPE_MISMATCH, LIST_TYPE_EXPECTED).
        found:     Declared type tag found on the wire (TYPE_MISMATCH).
        index:     Position of the failing element in the outermost list.
        path:      Positions from the outermost list down to the failing element, one per nesting level.
        exception: Decoded server exception, or its raw string when it could not be decoded (SERVER_EXCEPTION).
        cause:     The inner error a custom factory returned (FACTORY_FAILURE).
    """

    kind: DecodeErrorKind
    message: str
    expected: str | None = None
    found: str | None = None
    index: int | None = None
    exception: Any = None
    cause: DecodeError | None = None
    path: tuple[int, ...] = ()

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.message} (list element {'/'.join(str(i) for i in self.path)})"

    @classmethod
    def null_input(cls, message: str) -> DecodeError:
        return cls(kind=DecodeErrorKind.NULL_INPUT, message=message)

    @classmethod
    def type_mismatch(cls, expected: str, found: str | None) -> DecodeError:
        return cls(
            kind=DecodeErrorKind.TYPE_MISMATCH,
            message=f"Expected type '{expected}' but found '{found}'",
            expected=expected,
            found=found,
        )

    @classmethod
    def server_exception(cls, exception: Any) -> DecodeError:
        return cls(kind=DecodeErrorKind.SERVER_EXCEPTION, message=f"Server reported an exception: {describe(exception)}", exception=exception)

    @classmethod
    def unexpected_redirection(cls, type_name: str) -> DecodeError:
        return cls(
            kind=DecodeErrorKind.UNEXPECTED_REDIRECTION,
            message=f"Unexpected redirection while extracting '{type_name}'",
            expected=type_name,
        )

    @classmethod
    def list_type_expected(cls, type_name: str) -> DecodeError:
        return cls(
            kind=DecodeErrorKind.LIST_TYPE_EXPECTED,
            message=f"Expected a list type of the form 'List<...>' for an array payload but found '{type_name}'",
            expected=type_name,
        )

    @classmethod
    def factory_failure(cls, message: str, cause: DecodeError | None = None) -> DecodeError:
        return cls(kind=DecodeErrorKind.FACTORY_FAILURE, message=message, cause=cause)

    @classmethod
    def transport_failure(cls, message: str) -> DecodeError:
        return cls(kind=DecodeErrorKind.TRANSPORT_FAILURE, message=message)

    def at_index(self, index: int) -> DecodeError:
        """Return a copy located at list position index, in front of the positions recorded so far."""
        return replace(self, index=index, path=(index, *self.path))


class DialogError(Exception):
    """Base class of every error the dialog clients raise."""

    def __init__(self, error: DecodeError):
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> DecodeErrorKind:
        return self.error.kind


class DialogDecodeError(DialogError):
    """A response body could not be decoded into the expected model."""


class DialogServiceError(DialogError):
    """The service answered with an error status; ``dialog_message`` holds its description."""

    def __init__(self, status_code: int, dialog_message: Any):
        message = describe(dialog_message)
        super().__init__(DecodeError.server_exception(dialog_message))
        self.status_code = status_code
        self.dialog_message = dialog_message
        self.args = (f"Dialog service returned status {status_code}: {message}",)


class DialogTransportError(DialogError):
    """The response could not be read as JSON."""

    def __init__(self, message: str):
        super().__init__(DecodeError.transport_failure(message))
