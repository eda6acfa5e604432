"""Session level models: login, session, application window and workbenches."""

from pydantic import BaseModel, Field

from dialog_sdk.clients.dialog.models.TypeNames import TypeNames


class Login(BaseModel):
    """
    Request body for creating a session.
    """
    type: str = TypeNames.LoginTypeName
    userId: str
    password: str
    clientType: str = "DESKTOP"
    deviceProperties: dict[str, str] = Field(default_factory=dict)


class WorkbenchAction(BaseModel):
    type: str | None = TypeNames.WorkbenchActionTypeName
    id: str | None = None
    actionId: str | None = None
    workbenchId: str | None = None
    name: str | None = None
    alias: str | None = None
    iconBase: str | None = None


class Workbench(BaseModel):
    """
    A named group of launch actions shown on the application's start screen.
    """
    type: str | None = TypeNames.WorkbenchTypeName
    id: str | None = None
    name: str | None = None
    description: str | None = None
    offlineCapable: bool = False
    actions: list[WorkbenchAction] = Field(default_factory=list)

    def action_at_id(self, action_id: str) -> WorkbenchAction | None:
        for action in self.actions:
            if action.id == action_id or action.actionId == action_id:
                return action
        return None


class AppWindow(BaseModel):
    type: str | None = TypeNames.AppWindowTypeName
    windowTitle: str | None = None
    windowWidth: int | None = None
    windowHeight: int | None = None
    initialAction: WorkbenchAction | None = None
    workbenches: list[Workbench] = Field(default_factory=list)


class Session(BaseModel):
    """
    A server session.

    Attributes:
        id:               Session id, part of every dialog request path.
        tenantId:         Tenant the session belongs to.
        userId:           The logged in user.
        appVersion:       Version of the application (business) logic.
        serverVersion:    Version of the dialog middleware.
        serverAssignment: Endpoint serving this session, for diagnostics.
        currentDivision:  Sub-tenant the user is working in.
        tenantProperties: Tenant specific settings.
        appWindow:        Top level window definition with the workbenches.
    """
    type: str | None = TypeNames.SessionTypeName
    id: str | None = None
    tenantId: str | None = None
    userId: str | None = None
    appVersion: str | None = None
    appVendors: list[str] = Field(default_factory=list)
    serverVersion: str | None = None
    serverAssignment: str | None = None
    currentDivision: str | None = None
    tenantProperties: dict[str, str] = Field(default_factory=dict)
    appWindow: AppWindow | None = None
