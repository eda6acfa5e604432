import logging

import pytest

from dialog_sdk.clients.dialog.DialogResponse import DialogResponse, declared_type_of
from dialog_sdk.clients.dialog.models.DialogException import DialogMessage
from dialog_sdk.clients.dialog.models.Redirection import DialogRedirection, NullRedirection
from dialog_sdk.clients.dialog.models.Session import Session
from dialog_sdk.clients.dialog.models.TypeNames import TypeNames
from dialog_sdk.decoding.errors import DecodeErrorKind, DialogDecodeError, DialogServiceError
from dialog_sdk.models.JsonResponse import JsonResponse

DIALOG_TYPES = (TypeNames.EditorDialogTypeName, TypeNames.QueryDialogTypeName)


@pytest.fixture
def respond(dialog_decoder):
    def _respond(status_code, value=None):
        return DialogResponse(JsonResponse(statusCode=status_code, value=value), dialog_decoder)
    return _respond


def test_status_bands():
    assert JsonResponse(statusCode=204).has_value
    assert JsonResponse(statusCode=303).has_redirection
    assert JsonResponse(statusCode=500).has_error
    assert not JsonResponse(statusCode=200).has_error


def test_value_of_expected_type(respond):
    response = respond(200, {"type": TypeNames.SessionTypeName, "id": "s1"})

    session = response.response_value(TypeNames.SessionTypeName)

    assert isinstance(session, Session)
    assert response.status_code == 200


def test_tuple_resolves_to_declared_tag(respond):
    dialog = respond(200, {"type": TypeNames.QueryDialogTypeName, "id": "d1"}).response_value(DIALOG_TYPES)

    assert dialog.type == TypeNames.QueryDialogTypeName


def test_value_rejects_3xx(respond):
    response = respond(303, {"type": TypeNames.NullRedirectionTypeName, "id": "r1"})

    with pytest.raises(DialogDecodeError) as excinfo:
        response.response_value(TypeNames.SessionTypeName)

    assert excinfo.value.kind == DecodeErrorKind.UNEXPECTED_REDIRECTION


def test_embedded_redirection_becomes_left(respond):
    response = respond(
        200,
        {
            "type": TypeNames.SessionTypeName,
            "id": "s1",
            "redirection": {"type": TypeNames.DialogRedirectionTypeName, "id": "r1", "dialogId": "d9"},
        },
    )

    result = response.response_value_or_redirect(TypeNames.SessionTypeName)

    assert result.is_left
    assert isinstance(result.left, DialogRedirection)
    assert result.left.dialogId == "d9"


def test_untyped_redirection_value_becomes_left(respond):
    result = respond(200, {"type": TypeNames.NullRedirectionTypeName, "id": "r1"}).response_value_or_redirect()

    assert isinstance(result.left, NullRedirection)


def test_untyped_value_becomes_right(respond):
    result = respond(200, {"actionId": "save"}).response_value_or_redirect()

    assert result.right == {"actionId": "save"}


def test_redirection_rejects_other_tags(respond):
    with pytest.raises(DialogDecodeError) as excinfo:
        respond(200, {"type": TypeNames.SessionTypeName}).response_redirection()

    assert excinfo.value.kind == DecodeErrorKind.TYPE_MISMATCH


def test_error_band_decodes_dialog_message(respond):
    response = respond(500, {"type": TypeNames.DialogMessageTypeName, "message": "Boom", "code": "E1"})

    with pytest.raises(DialogServiceError) as excinfo:
        response.response_value(TypeNames.SessionTypeName)

    assert excinfo.value.status_code == 500
    assert isinstance(excinfo.value.dialog_message, DialogMessage)
    assert excinfo.value.kind == DecodeErrorKind.SERVER_EXCEPTION


def test_error_band_keeps_untagged_body(respond):
    with pytest.raises(DialogServiceError) as excinfo:
        respond(401, {"message": "Unauthorized"}).assert_no_error()

    assert excinfo.value.dialog_message == {"message": "Unauthorized"}
    assert "Unauthorized" in str(excinfo.value)


def test_error_band_keeps_undecodable_body(respond, caplog):
    body = {"type": TypeNames.DialogMessageTypeName, "children": [{"type": TypeNames.SessionTypeName, "exception": "x"}]}

    with caplog.at_level(logging.WARNING, logger="dialog_sdk.tests"):
        with pytest.raises(DialogServiceError) as excinfo:
            respond(500, body).assert_no_error()

    assert excinfo.value.dialog_message == body
    assert "Could not decode error body" in caplog.text


def test_no_error_below_400(respond):
    respond(303, None).assert_no_error()
    respond(200, None).assert_no_error()


def test_declared_type_of():
    assert declared_type_of({"type": "A"}) == "A"
    assert declared_type_of(Session(id="s1")) == TypeNames.SessionTypeName
    assert declared_type_of(["A"]) is None
