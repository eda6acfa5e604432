"""Server-side failure descriptions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from dialog_sdk.clients.dialog.models.TypeNames import TypeNames


class UserMessage(BaseModel):
    type: str | None = TypeNames.UserMessageTypeName
    message: str | None = None
    explanation: str | None = None
    messageType: str | None = None
    propertyNames: list[str] = Field(default_factory=list)


class DialogException(BaseModel):
    """
    An exception embedded in a response envelope.

    Attributes:
        message:      Human-readable description.
        name:         Name of the host exception.
        title:        Short title for display.
        iconName:     Icon to show with the message.
        stackTrace:   Host stack trace, for diagnostics only.
        cause:        Nested exception that caused this one.
        userMessages: Messages meant for the end user.
    """
    type: str | None = TypeNames.DialogExceptionTypeName
    message: str | None = None
    name: str | None = None
    title: str | None = None
    iconName: str | None = None
    stackTrace: str | None = None
    cause: DialogException | None = None
    userMessages: list[UserMessage] = Field(default_factory=list)

    def __str__(self) -> str:
        return self.message or self.name or "DialogException"


class DialogMessage(BaseModel):
    """
    Body of an error response (status 400 and above).

    Attributes:
        code:          Short language-independent identifier.
        messageType:   One of "CONFIRM", "ERROR", "INFO", "WARN".
        message:       Human-readable description of the code.
        cause:         Diagnostic hint, e.g. the name of a host exception.
        propertyNames: Properties of the current view the message refers to.
        children:      Individual facets of an aggregated message.
        stackTrace:    Host stack trace, for diagnostics only.
    """
    type: str | None = TypeNames.DialogMessageTypeName
    code: str | None = None
    messageType: str | None = None
    message: str | None = None
    cause: Any = None
    propertyNames: list[str] = Field(default_factory=list)
    children: list[DialogMessage] = Field(default_factory=list)
    stackTrace: str | None = None

    def __str__(self) -> str:
        return self.message or self.code or "DialogMessage"
