"""Tests for the REST dialog client against an httpx.MockTransport."""

import json

import httpx
import pytest

from dialog_sdk.clients.dialog.DialogClientManager import DialogClientManager
from dialog_sdk.clients.dialog.models.Dialog import Dialog, ListView
from dialog_sdk.clients.dialog.models.DialogException import DialogMessage
from dialog_sdk.clients.dialog.models.QueryParameters import ActionParameters, QueryDirection, QueryParameters
from dialog_sdk.clients.dialog.models.Record import Record, RecordSet
from dialog_sdk.clients.dialog.models.Redirection import DialogRedirection, WebRedirection
from dialog_sdk.clients.dialog.models.Session import Login, Session, Workbench
from dialog_sdk.clients.dialog.models.TypeNames import TypeNames
from dialog_sdk.clients.dialog.rest.DialogClientRest import DialogClientRest
from dialog_sdk.decoding.errors import DialogDecodeError, DialogServiceError, DialogTransportError

BASE = "https://dialog.test/v0"
SESSION_PATH = f"{BASE}/tenants/acme/sessions/s1"


class _Recorder:
    """Answers every request with the prepared response and remembers the requests."""

    def __init__(self, status_code=200, body=None, content=None):
        self.requests = []
        self._status_code = status_code
        self._body = body
        self._content = content

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._content is not None:
            return httpx.Response(self._status_code, content=self._content)
        if self._body is None:
            return httpx.Response(self._status_code)
        return httpx.Response(self._status_code, json=self._body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self):
        return json.loads(self.last.content)


@pytest.fixture
async def make_client(rest_env, helper_config):
    clients = []

    async def _make(handler):
        client = DialogClientRest(helper_config=helper_config)
        await client.boot(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.close()


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def test_missing_base_url_is_rejected(rest_env, monkeypatch, helper_config):
    monkeypatch.delenv("DIALOG_REST_BASE_URL")

    with pytest.raises(ValueError):
        DialogClientRest(helper_config=helper_config)


def test_manager_defaults_to_rest_engine(rest_env, helper_config):
    manager = DialogClientManager(helper_config)

    client = manager.get_client()

    assert isinstance(client, DialogClientRest)
    assert client.get_engine_name() == "rest"
    assert client.get_client_type() == "dialog"


def test_manager_rejects_unknown_engine(rest_env, monkeypatch, helper_config):
    monkeypatch.setenv("DIALOG_ENGINE", "soap")

    with pytest.raises(ValueError, match="Soap"):
        DialogClientManager(helper_config)


async def test_request_before_boot_fails(rest_env, helper_config):
    client = DialogClientRest(helper_config=helper_config)

    with pytest.raises(RuntimeError):
        await client.do_get_session("acme", "s1")


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


async def test_create_session_returns_session(make_client):
    recorder = _Recorder(body={"type": TypeNames.SessionTypeName, "id": "s1", "tenantId": "acme", "userId": "jane"})
    client = await make_client(recorder)

    result = await client.do_create_session("acme", Login(userId="jane", password="secret"))

    assert result.is_right
    assert isinstance(result.right, Session)
    assert result.right.id == "s1"
    assert recorder.last.method == "POST"
    assert str(recorder.last.url) == f"{BASE}/tenants/acme/sessions"
    assert recorder.last_body["userId"] == "jane"
    assert recorder.last_body["type"] == TypeNames.LoginTypeName
    assert client.last_activity is not None


async def test_create_session_redirects_on_3xx(make_client):
    recorder = _Recorder(
        status_code=303,
        body={"type": TypeNames.WebRedirectionTypeName, "id": "r1", "url": "https://login.test"},
    )
    client = await make_client(recorder)

    result = await client.do_create_session("acme", Login(userId="jane", password="secret"))

    assert result.is_left
    assert isinstance(result.left, WebRedirection)
    assert result.left.url == "https://login.test"


async def test_delete_session_returns_acknowledgement(make_client):
    recorder = _Recorder(body={"tenantId": "acme", "sessionId": "s1"})
    client = await make_client(recorder)

    ack = await client.do_delete_session("acme", "s1")

    assert ack == {"tenantId": "acme", "sessionId": "s1"}
    assert recorder.last.method == "DELETE"
    assert str(recorder.last.url) == SESSION_PATH


async def test_bearer_header_when_api_key_is_set(rest_env, monkeypatch, helper_config):
    monkeypatch.setenv("DIALOG_REST_API_KEY", "k3y")
    recorder = _Recorder(body={"type": TypeNames.SessionTypeName, "id": "s1"})
    client = DialogClientRest(helper_config=helper_config)
    await client.boot(transport=httpx.MockTransport(recorder))

    await client.do_get_session("acme", "s1")
    await client.close()

    assert recorder.last.headers["Authorization"] == "Bearer k3y"
    assert recorder.last.headers["Accept"] == "application/json"


async def test_no_auth_header_without_api_key(make_client):
    recorder = _Recorder(body={"type": TypeNames.SessionTypeName, "id": "s1"})
    client = await make_client(recorder)

    await client.do_get_session("acme", "s1")

    assert "Authorization" not in recorder.last.headers


# ---------------------------------------------------------------------------
# Workbenches
# ---------------------------------------------------------------------------


async def test_get_workbenches_decodes_list_envelope(make_client):
    recorder = _Recorder(
        body={
            "WS_LTYPE": TypeNames.WorkbenchTypeName,
            "values": [
                {"type": TypeNames.WorkbenchTypeName, "id": "w1", "name": "Main"},
                {"type": TypeNames.WorkbenchTypeName, "id": "w2", "name": "Reports"},
            ],
        }
    )
    client = await make_client(recorder)

    workbenches = await client.do_get_workbenches("acme", "s1")

    assert [w.id for w in workbenches] == ["w1", "w2"]
    assert all(isinstance(w, Workbench) for w in workbenches)
    assert str(recorder.last.url) == f"{SESSION_PATH}/workbenches"


async def test_perform_workbench_action_follows_redirection(make_client):
    recorder = _Recorder(
        status_code=303,
        body={"type": TypeNames.DialogRedirectionTypeName, "id": "r1", "dialogId": "d7", "dialogType": TypeNames.QueryDialogTypeName},
    )
    client = await make_client(recorder)

    result = await client.do_perform_workbench_action("acme", "s1", "w1", "open")

    assert isinstance(result.left, DialogRedirection)
    assert result.left.dialogId == "d7"
    assert str(recorder.last.url) == f"{SESSION_PATH}/workbenches/w1/actions/open"
    assert recorder.last_body == {}


# ---------------------------------------------------------------------------
# Dialogs
# ---------------------------------------------------------------------------


async def test_get_dialog_accepts_query_dialog(make_client):
    recorder = _Recorder(
        body={"type": TypeNames.QueryDialogTypeName, "id": "d7", "dialogMode": "LIST", "description": "Customers"}
    )
    client = await make_client(recorder)

    dialog = await client.do_get_dialog("acme", "s1", "d7")

    assert isinstance(dialog, Dialog)
    assert dialog.type == TypeNames.QueryDialogTypeName
    assert dialog.is_query_dialog


async def test_get_dialog_rejects_unrelated_tag(make_client):
    client = await make_client(_Recorder(body={"type": TypeNames.SessionTypeName, "id": "s1"}))

    with pytest.raises(DialogDecodeError):
        await client.do_get_dialog("acme", "s1", "d7")


async def test_missing_dialog_raises_service_error(make_client):
    recorder = _Recorder(
        status_code=404,
        body={"type": TypeNames.DialogMessageTypeName, "code": "404", "message": "Dialog d7 not found"},
    )
    client = await make_client(recorder)

    with pytest.raises(DialogServiceError) as excinfo:
        await client.do_get_dialog("acme", "s1", "d7")

    assert excinfo.value.status_code == 404
    assert isinstance(excinfo.value.dialog_message, DialogMessage)
    assert excinfo.value.dialog_message.message == "Dialog d7 not found"
    assert "Dialog d7 not found" in str(excinfo.value)


async def test_non_json_body_raises_transport_error(make_client):
    client = await make_client(_Recorder(status_code=502, content=b"<html>Bad gateway</html>"))

    with pytest.raises(DialogTransportError):
        await client.do_get_dialog("acme", "s1", "d7")


async def test_connection_errors_propagate(make_client):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = await make_client(refuse)

    with pytest.raises(httpx.ConnectError):
        await client.do_get_session("acme", "s1")


async def test_action_id_is_encoded_as_one_segment(make_client):
    recorder = _Recorder(body={"type": TypeNames.NullRedirectionTypeName, "id": "r0"})
    client = await make_client(recorder)

    await client.do_perform_action("acme", "s1", "d7", "alias/open list", ActionParameters(targets=["1"]))

    assert recorder.last.url.raw_path == b"/v0/tenants/acme/sessions/s1/dialogs/d7/actions/alias%2Fopen%20list"
    assert recorder.last_body["targets"] == ["1"]
    assert "pendingWrites" not in recorder.last_body


async def test_perform_action_acknowledgement_is_right(make_client):
    client = await make_client(_Recorder(body={"actionId": "refresh"}))

    result = await client.do_perform_action("acme", "s1", "d7", "refresh")

    assert result.is_right
    assert result.right == {"actionId": "refresh"}


async def test_get_actions_returns_menus(make_client):
    recorder = _Recorder(
        body={
            "WS_LTYPE": TypeNames.MenuTypeName,
            "values": [{"type": TypeNames.MenuTypeName, "id": "m1", "actionId": "open", "label": "Open"}],
        }
    )
    client = await make_client(recorder)

    menus = await client.do_get_actions("acme", "s1", "d7")

    assert [menu.actionId for menu in menus] == ["open"]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


async def test_get_records_posts_query_parameters(make_client):
    recorder = _Recorder(
        body={
            "type": TypeNames.RecordSetTypeName,
            "hasMore": True,
            "records": [
                {"type": TypeNames.RecordTypeName, "id": 11, "properties": [{"name": "name", "value": "Ada"}]},
                {"type": TypeNames.RecordTypeName, "id": 12, "properties": []},
            ],
        }
    )
    client = await make_client(recorder)
    params = QueryParameters(fetchDirection=QueryDirection.BACKWARD, fetchMaxRecords=2, fromBusinessId="13")

    record_set = await client.do_get_records("acme", "s1", "d7", params)

    assert isinstance(record_set, RecordSet)
    assert record_set.hasMore
    assert [r.id for r in record_set.records] == ["11", "12"]
    assert record_set.records[0].value_at_name("name") == "Ada"
    assert recorder.last.method == "POST"
    assert str(recorder.last.url) == f"{SESSION_PATH}/dialogs/d7/records"
    assert recorder.last_body == {
        "type": TypeNames.QueryParametersTypeName,
        "fetchDirection": "BACKWARD",
        "fetchMaxRecords": 2,
        "fromBusinessId": "13",
    }


async def test_put_record_returns_updated_record(make_client):
    recorder = _Recorder(body={"type": TypeNames.RecordTypeName, "id": "5", "properties": []})
    client = await make_client(recorder)

    result = await client.do_put_record("acme", "s1", "d7", Record(id="5"))

    assert result.is_right
    assert result.right.id == "5"
    assert recorder.last.method == "PUT"
    assert recorder.last_body["id"] == "5"


async def test_available_values_are_untyped(make_client):
    client = await make_client(_Recorder(body=["red", "green"]))

    values = await client.do_get_available_values("acme", "s1", "d7", "colour")

    assert values == ["red", "green"]


async def test_get_mode_returns_plain_string(make_client):
    recorder = _Recorder(body="READ")
    client = await make_client(recorder)

    mode = await client.do_get_mode("acme", "s1", "d7")

    assert mode == "READ"
    assert str(recorder.last.url) == f"{SESSION_PATH}/dialogs/d7/viewMode"


async def test_change_mode_puts_mode_segment(make_client):
    recorder = _Recorder(body={"type": TypeNames.EditorDialogTypeName, "id": "d7", "viewMode": "WRITE"})
    client = await make_client(recorder)

    dialog = await client.do_change_mode("acme", "s1", "d7", "WRITE")

    assert dialog.is_editor_dialog
    assert recorder.last.method == "PUT"
    assert str(recorder.last.url) == f"{SESSION_PATH}/dialogs/d7/viewMode/WRITE"


# ---------------------------------------------------------------------------
# Views and redirections
# ---------------------------------------------------------------------------


async def test_get_view_accepts_any_view_type(make_client):
    recorder = _Recorder(body={"type": TypeNames.ListTypeName, "id": "v1", "name": "customers", "fixedColumnCount": 2})
    client = await make_client(recorder)

    view = await client.do_get_view("acme", "s1", "d7")

    assert isinstance(view, ListView)
    assert view.fixedColumnCount == 2
    assert str(recorder.last.url) == f"{SESSION_PATH}/dialogs/d7/view"


async def test_get_views_and_change_view(make_client):
    views = _Recorder(
        body={
            "WS_LTYPE": TypeNames.ViewDescriptorTypeName,
            "values": [{"type": TypeNames.ViewDescriptorTypeName, "id": "v1", "name": "list"}],
        }
    )
    client = await make_client(views)

    descriptors = await client.do_get_views("acme", "s1", "d7")

    assert [d.id for d in descriptors] == ["v1"]
    assert str(views.last.url) == f"{SESSION_PATH}/dialogs/d7/availableViews"

    change = _Recorder(body={"type": TypeNames.QueryDialogTypeName, "id": "d7", "selectedViewId": "v1"})
    client = await make_client(change)

    dialog = await client.do_change_view("acme", "s1", "d7", "v1")

    assert dialog.selectedViewId == "v1"
    assert change.last.method == "PUT"
    assert str(change.last.url) == f"{SESSION_PATH}/dialogs/d7/selectedView/v1"


async def test_get_redirection(make_client):
    recorder = _Recorder(body={"type": TypeNames.WorkbenchRedirectionTypeName, "id": "r5", "workbenchId": "w1"})
    client = await make_client(recorder)

    redirection = await client.do_get_redirection("acme", "s1", "r5")

    assert redirection.workbenchId == "w1"
    assert str(recorder.last.url) == f"{SESSION_PATH}/redirections/r5"


async def test_delete_dialog(make_client):
    recorder = _Recorder(body={"dialogId": "d7"})
    client = await make_client(recorder)

    assert await client.do_delete_dialog("acme", "s1", "d7") == {"dialogId": "d7"}
    assert recorder.last.method == "DELETE"


# ---------------------------------------------------------------------------
# Raw requests
# ---------------------------------------------------------------------------


async def test_healthcheck_hits_versioned_base_url(make_client):
    recorder = _Recorder(body={"status": "ok"})
    client = await make_client(recorder)

    response = await client.do_healthcheck()

    assert response.status_code == 200
    assert str(recorder.last.url) == BASE


async def test_raise_on_error(make_client):
    client = await make_client(_Recorder(status_code=500, body={"message": "down"}))

    with pytest.raises(httpx.HTTPStatusError):
        await client.do_request(endpoint="/tenants", raise_on_error=True)


async def test_request_body_is_sent_as_json_only(make_client):
    recorder = _Recorder(body={"status": "ok"})
    client = await make_client(recorder)

    await client.do_request(method="POST", endpoint="/tenants", json={"name": "acme"})

    assert recorder.last.headers["content-type"] == "application/json"
    assert recorder.last_body == {"name": "acme"}
    with pytest.raises(TypeError):
        await client.do_request(method="POST", endpoint="/tenants", data={"name": "acme"})
    assert len(recorder.requests) == 1


async def test_empty_body_has_no_value(make_client):
    client = await make_client(_Recorder(status_code=204))

    response = await client.do_json_request("DELETE", "/tenants/acme/sessions/s1")

    assert response.statusCode == 204
    assert response.value is None
