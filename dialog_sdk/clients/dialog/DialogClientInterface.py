from abc import abstractmethod
from typing import Any

from pydantic import BaseModel

from dialog_sdk.clients.ClientInterface import ClientInterface
from dialog_sdk.clients.dialog.DialogResponse import DialogResponse, ExpectedType
from dialog_sdk.clients.dialog.models.Dialog import Dialog, Menu, View, ViewDescriptor
from dialog_sdk.clients.dialog.models.QueryParameters import ActionParameters, QueryParameters
from dialog_sdk.clients.dialog.models.Record import Record, RecordSet
from dialog_sdk.clients.dialog.models.Redirection import Redirection
from dialog_sdk.clients.dialog.models.registry import DIALOG_TYPES, VIEW_TYPES, build_default_registry
from dialog_sdk.clients.dialog.models.Session import Login, Session, Workbench, WorkbenchAction
from dialog_sdk.clients.dialog.models.TypeNames import TypeNames
from dialog_sdk.decoding.Either import Either
from dialog_sdk.decoding.TaggedDecoder import TaggedDecoder, list_type_of
from dialog_sdk.helper.HelperConfig import HelperConfig


class DialogClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig, decoder: TaggedDecoder | None = None):
        super().__init__(helper_config=helper_config)
        self.decoder = decoder or TaggedDecoder(build_default_registry(), logger=self.logging)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "dialog"
        """
        return "dialog"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_sessions(self, tenant_id: str) -> str:
        """
        Returns the endpoint path for creating sessions of a tenant.

        Returns:
            str: The endpoint path (e.g. "/tenants/acme/sessions")

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    @abstractmethod
    def _get_endpoint_session(self, tenant_id: str, session_id: str) -> str:
        """
        Returns the endpoint path of a single session. All other endpoints live below it.

        Returns:
            str: The endpoint path (e.g. "/tenants/acme/sessions/s1")

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    @abstractmethod
    def _get_endpoint_workbenches(self, tenant_id: str, session_id: str) -> str:
        """Returns the endpoint path listing the workbenches of a session."""
        pass

    @abstractmethod
    def _get_endpoint_workbench(self, tenant_id: str, session_id: str, workbench_id: str) -> str:
        """Returns the endpoint path of a single workbench."""
        pass

    @abstractmethod
    def _get_endpoint_workbench_actions(self, tenant_id: str, session_id: str, workbench_id: str) -> str:
        """Returns the endpoint path listing the launch actions of a workbench."""
        pass

    @abstractmethod
    def _get_endpoint_workbench_action(self, tenant_id: str, session_id: str, workbench_id: str, action_id: str) -> str:
        """Returns the endpoint path for performing a workbench action."""
        pass

    @abstractmethod
    def _get_endpoint_redirection(self, tenant_id: str, session_id: str, redirection_id: str) -> str:
        """Returns the endpoint path of a stored redirection."""
        pass

    @abstractmethod
    def _get_endpoint_dialog(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        """
        Returns the endpoint path of a single dialog.

        Returns:
            str: The endpoint path (e.g. "/tenants/acme/sessions/s1/dialogs/d7")

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    @abstractmethod
    def _get_endpoint_dialog_actions(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        """Returns the endpoint path listing the menu actions of a dialog."""
        pass

    @abstractmethod
    def _get_endpoint_dialog_action(self, tenant_id: str, session_id: str, dialog_id: str, action_id: str) -> str:
        """Returns the endpoint path for performing a dialog action. The action id must be URL-encoded."""
        pass

    @abstractmethod
    def _get_endpoint_record(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        """Returns the endpoint path of the current record of an editor dialog."""
        pass

    @abstractmethod
    def _get_endpoint_records(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        """Returns the endpoint path for querying the records of a query dialog."""
        pass

    @abstractmethod
    def _get_endpoint_available_values(self, tenant_id: str, session_id: str, dialog_id: str, property_name: str) -> str:
        """Returns the endpoint path listing the values a property may take."""
        pass

    @abstractmethod
    def _get_endpoint_view_mode(self, tenant_id: str, session_id: str, dialog_id: str, mode: str | None = None) -> str:
        """Returns the endpoint path for reading (mode None) or changing the view mode of a dialog."""
        pass

    @abstractmethod
    def _get_endpoint_view(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        """Returns the endpoint path of the current view of a dialog."""
        pass

    @abstractmethod
    def _get_endpoint_selected_view(self, tenant_id: str, session_id: str, dialog_id: str, view_id: str) -> str:
        """Returns the endpoint path for switching a dialog to another view."""
        pass

    @abstractmethod
    def _get_endpoint_available_views(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        """Returns the endpoint path listing the views a dialog may switch to."""
        pass

    ##########################################
    ################ HELPER ##################
    ##########################################

    @staticmethod
    def to_wire(model: BaseModel | dict | None) -> Any:
        """Serialises a request model to its JSON wire form, dropping unset (None) fields."""
        if model is None or isinstance(model, dict):
            return model
        return model.model_dump(mode="json", exclude_none=True)

    async def _dialog_request(self, method: str, endpoint: str, body: Any = None) -> DialogResponse:
        json_response = await self.do_json_request(method=method, endpoint=endpoint, json=self.to_wire(body))
        return DialogResponse(json_response, self.decoder)

    async def _value(self, method: str, endpoint: str, expected_type: ExpectedType = None, body: Any = None) -> Any:
        response = await self._dialog_request(method, endpoint, body)
        return response.response_value(expected_type)

    async def _value_or_redirect(self, method: str, endpoint: str, expected_type: ExpectedType = None, body: Any = None) -> Either:
        response = await self._dialog_request(method, endpoint, body)
        return response.response_value_or_redirect(expected_type)

    ##########################################
    ############### SESSIONS #################
    ##########################################

    async def do_create_session(self, tenant_id: str, login: Login) -> Either:
        """Creates a server session.

        Args:
            tenant_id (str): The tenant to log in to.
            login (Login): The credentials.

        Returns:
            Either: Either.as_right(Session), or Either.as_left(Redirection) when the server requires
                another step first (e.g. a web redirection for single sign-on).

        Raises:
            DialogServiceError: If the login is rejected.
        """
        self.logging.info("Creating session for user '%s' on tenant '%s'", login.userId, tenant_id)
        return await self._value_or_redirect("POST", self._get_endpoint_sessions(tenant_id), TypeNames.SessionTypeName, login)

    async def do_get_session(self, tenant_id: str, session_id: str) -> Session:
        return await self._value("GET", self._get_endpoint_session(tenant_id, session_id), TypeNames.SessionTypeName)

    async def do_delete_session(self, tenant_id: str, session_id: str) -> dict:
        """Deletes a server session.

        Returns:
            dict: The acknowledgement, e.g. {"sessionId": "s1"}.
        """
        return await self._value("DELETE", self._get_endpoint_session(tenant_id, session_id))

    ##########################################
    ############## WORKBENCHES ###############
    ##########################################

    async def do_get_workbenches(self, tenant_id: str, session_id: str) -> list[Workbench]:
        return await self._value(
            "GET", self._get_endpoint_workbenches(tenant_id, session_id), list_type_of(TypeNames.WorkbenchTypeName)
        )

    async def do_get_workbench(self, tenant_id: str, session_id: str, workbench_id: str) -> Workbench:
        return await self._value(
            "GET", self._get_endpoint_workbench(tenant_id, session_id, workbench_id), TypeNames.WorkbenchTypeName
        )

    async def do_get_workbench_actions(self, tenant_id: str, session_id: str, workbench_id: str) -> list[WorkbenchAction]:
        return await self._value(
            "GET",
            self._get_endpoint_workbench_actions(tenant_id, session_id, workbench_id),
            list_type_of(TypeNames.WorkbenchActionTypeName),
        )

    async def do_perform_workbench_action(self, tenant_id: str, session_id: str, workbench_id: str, action_id: str) -> Either:
        """Performs a workbench launch action.

        Returns:
            Either: Either.as_left(Redirection) to the launched dialog, or Either.as_right(dict)
                with the acknowledgement ({"actionId": ...}).
        """
        return await self._value_or_redirect(
            "POST", self._get_endpoint_workbench_action(tenant_id, session_id, workbench_id, action_id), body={}
        )

    async def do_get_redirection(self, tenant_id: str, session_id: str, redirection_id: str) -> Redirection:
        response = await self._dialog_request("GET", self._get_endpoint_redirection(tenant_id, session_id, redirection_id))
        return response.response_redirection()

    ##########################################
    ################ DIALOGS #################
    ##########################################

    async def do_get_dialog(self, tenant_id: str, session_id: str, dialog_id: str) -> Dialog:
        return await self._value("GET", self._get_endpoint_dialog(tenant_id, session_id, dialog_id), DIALOG_TYPES)

    async def do_delete_dialog(self, tenant_id: str, session_id: str, dialog_id: str) -> dict:
        return await self._value("DELETE", self._get_endpoint_dialog(tenant_id, session_id, dialog_id))

    async def do_get_actions(self, tenant_id: str, session_id: str, dialog_id: str) -> list[Menu]:
        return await self._value(
            "GET", self._get_endpoint_dialog_actions(tenant_id, session_id, dialog_id), list_type_of(TypeNames.MenuTypeName)
        )

    async def do_perform_action(
        self,
        tenant_id: str,
        session_id: str,
        dialog_id: str,
        action_id: str,
        action_parameters: ActionParameters | None = None,
    ) -> Either:
        """Performs a menu action of a dialog.

        Args:
            action_id (str): The action to perform. Encoded by the endpoint builder.
            action_parameters (ActionParameters | None): Target record ids and pending writes.

        Returns:
            Either: Either.as_left(Redirection) when the action navigates, otherwise
                Either.as_right(dict) with the acknowledgement.
        """
        self.logging.debug("Performing action '%s' on dialog '%s'", action_id, dialog_id)
        return await self._value_or_redirect(
            "POST",
            self._get_endpoint_dialog_action(tenant_id, session_id, dialog_id, action_id),
            body=action_parameters or ActionParameters(),
        )

    ##########################################
    ################ RECORDS #################
    ##########################################

    async def do_get_record(self, tenant_id: str, session_id: str, dialog_id: str) -> Record:
        return await self._value("GET", self._get_endpoint_record(tenant_id, session_id, dialog_id), TypeNames.RecordTypeName)

    async def do_put_record(self, tenant_id: str, session_id: str, dialog_id: str, record: Record) -> Either:
        """Writes a record.

        Returns:
            Either: Either.as_right(Record) with the stored record, or Either.as_left(Redirection).
        """
        return await self._value_or_redirect(
            "PUT", self._get_endpoint_record(tenant_id, session_id, dialog_id), TypeNames.RecordTypeName, record
        )

    async def do_get_records(self, tenant_id: str, session_id: str, dialog_id: str, query_parameters: QueryParameters) -> RecordSet:
        """Fetches one page of records.

        Args:
            query_parameters (QueryParameters): Direction, page size and anchor record id.

        Returns:
            RecordSet: The page, with hasMore telling whether the server has more records in that direction.
        """
        return await self._value(
            "POST",
            self._get_endpoint_records(tenant_id, session_id, dialog_id),
            TypeNames.RecordSetTypeName,
            query_parameters,
        )

    async def do_get_available_values(self, tenant_id: str, session_id: str, dialog_id: str, property_name: str) -> list:
        return await self._value(
            "GET", self._get_endpoint_available_values(tenant_id, session_id, dialog_id, property_name)
        )

    ##########################################
    ############ MODES AND VIEWS #############
    ##########################################

    async def do_get_mode(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        return await self._value("GET", self._get_endpoint_view_mode(tenant_id, session_id, dialog_id))

    async def do_change_mode(self, tenant_id: str, session_id: str, dialog_id: str, mode: str) -> Dialog:
        return await self._value("PUT", self._get_endpoint_view_mode(tenant_id, session_id, dialog_id, mode), DIALOG_TYPES)

    async def do_get_view(self, tenant_id: str, session_id: str, dialog_id: str) -> View:
        return await self._value("GET", self._get_endpoint_view(tenant_id, session_id, dialog_id), VIEW_TYPES)

    async def do_change_view(self, tenant_id: str, session_id: str, dialog_id: str, view_id: str) -> Dialog:
        return await self._value(
            "PUT", self._get_endpoint_selected_view(tenant_id, session_id, dialog_id, view_id), DIALOG_TYPES, body={}
        )

    async def do_get_views(self, tenant_id: str, session_id: str, dialog_id: str) -> list[ViewDescriptor]:
        return await self._value(
            "GET",
            self._get_endpoint_available_views(tenant_id, session_id, dialog_id),
            list_type_of(TypeNames.ViewDescriptorTypeName),
        )
