from urllib.parse import quote

from dialog_sdk.clients.dialog.DialogClientInterface import DialogClientInterface
from dialog_sdk.decoding.TaggedDecoder import TaggedDecoder
from dialog_sdk.helper.HelperConfig import HelperConfig
from dialog_sdk.models.config import EnvConfig


def _seg(value: str) -> str:
    return quote(str(value), safe="")


class DialogClientRest(DialogClientInterface):
    def __init__(self, helper_config: HelperConfig, decoder: TaggedDecoder | None = None):
        super().__init__(helper_config=helper_config, decoder=decoder)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="string")
        self._api_version = self.get_config_val("API_VERSION", default="v0", val_type="string")
        self._api_key = self.get_config_val("API_KEY", default="", val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Rest"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=None),
            EnvConfig(env_key="API_VERSION", val_type="string", default="v0"),
            EnvConfig(env_key="API_KEY", val_type="string", default=""),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._api_key:
            return {"Authorization": f"Bearer {self._api_key}"}
        else:
            return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return f"{self._base_url.rstrip('/')}/{self._api_version.strip('/')}"

    def _get_endpoint_healthcheck(self) -> str:
        return ""

    def _get_endpoint_sessions(self, tenant_id: str) -> str:
        return f"/tenants/{_seg(tenant_id)}/sessions"

    def _get_endpoint_session(self, tenant_id: str, session_id: str) -> str:
        return f"{self._get_endpoint_sessions(tenant_id)}/{_seg(session_id)}"

    def _get_endpoint_workbenches(self, tenant_id: str, session_id: str) -> str:
        return f"{self._get_endpoint_session(tenant_id, session_id)}/workbenches"

    def _get_endpoint_workbench(self, tenant_id: str, session_id: str, workbench_id: str) -> str:
        return f"{self._get_endpoint_workbenches(tenant_id, session_id)}/{_seg(workbench_id)}"

    def _get_endpoint_workbench_actions(self, tenant_id: str, session_id: str, workbench_id: str) -> str:
        return f"{self._get_endpoint_workbench(tenant_id, session_id, workbench_id)}/actions"

    def _get_endpoint_workbench_action(self, tenant_id: str, session_id: str, workbench_id: str, action_id: str) -> str:
        return f"{self._get_endpoint_workbench_actions(tenant_id, session_id, workbench_id)}/{_seg(action_id)}"

    def _get_endpoint_redirection(self, tenant_id: str, session_id: str, redirection_id: str) -> str:
        return f"{self._get_endpoint_session(tenant_id, session_id)}/redirections/{_seg(redirection_id)}"

    def _get_endpoint_dialog(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        return f"{self._get_endpoint_session(tenant_id, session_id)}/dialogs/{_seg(dialog_id)}"

    def _get_endpoint_dialog_actions(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        return f"{self._get_endpoint_dialog(tenant_id, session_id, dialog_id)}/actions"

    def _get_endpoint_dialog_action(self, tenant_id: str, session_id: str, dialog_id: str, action_id: str) -> str:
        return f"{self._get_endpoint_dialog_actions(tenant_id, session_id, dialog_id)}/{_seg(action_id)}"

    def _get_endpoint_record(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        return f"{self._get_endpoint_dialog(tenant_id, session_id, dialog_id)}/record"

    def _get_endpoint_records(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        return f"{self._get_endpoint_dialog(tenant_id, session_id, dialog_id)}/records"

    def _get_endpoint_available_values(self, tenant_id: str, session_id: str, dialog_id: str, property_name: str) -> str:
        return f"{self._get_endpoint_record(tenant_id, session_id, dialog_id)}/{_seg(property_name)}/availableValues"

    def _get_endpoint_view_mode(self, tenant_id: str, session_id: str, dialog_id: str, mode: str | None = None) -> str:
        endpoint = f"{self._get_endpoint_dialog(tenant_id, session_id, dialog_id)}/viewMode"
        return f"{endpoint}/{_seg(mode)}" if mode else endpoint

    def _get_endpoint_view(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        return f"{self._get_endpoint_dialog(tenant_id, session_id, dialog_id)}/view"

    def _get_endpoint_selected_view(self, tenant_id: str, session_id: str, dialog_id: str, view_id: str) -> str:
        return f"{self._get_endpoint_dialog(tenant_id, session_id, dialog_id)}/selectedView/{_seg(view_id)}"

    def _get_endpoint_available_views(self, tenant_id: str, session_id: str, dialog_id: str) -> str:
        return f"{self._get_endpoint_dialog(tenant_id, session_id, dialog_id)}/availableViews"
