"""Redirection models: navigation instructions returned in place of an expected value."""

from pydantic import BaseModel, Field

from dialog_sdk.clients.dialog.models.TypeNames import TypeNames


class ReferringObject(BaseModel):
    """
    Describes what caused a redirection (the dialog or workbench whose action was performed).
    """
    type: str | None = None
    actionId: str | None = None

    def is_dialog_referrer(self) -> bool:
        return self.type == TypeNames.ReferringDialogTypeName

    def is_workbench_referrer(self) -> bool:
        return self.type == TypeNames.ReferringWorkbenchTypeName


class ReferringDialog(ReferringObject):
    type: str | None = TypeNames.ReferringDialogTypeName
    dialogId: str | None = None
    dialogMode: str | None = None


class ReferringWorkbench(ReferringObject):
    type: str | None = TypeNames.ReferringWorkbenchTypeName
    workbenchId: str | None = None


class Redirection(BaseModel):
    """
    Base of every redirection. The client follows a redirection instead of using the value it asked for.

    Attributes:
        id:                Server id of the redirection.
        type:              Wire type tag of the concrete redirection.
        sessionId:         Session the redirection belongs to.
        tenantId:          Tenant the redirection belongs to.
        referringObject:   What triggered the redirection.
        dialogProperties:  Free-form settings sent along (e.g. "destroyed", "globalRefresh", "localRefresh").
    """
    id: str | None = None
    type: str | None = None
    sessionId: str | None = None
    tenantId: str | None = None
    referringObject: ReferringObject | None = None
    dialogProperties: dict[str, str] = Field(default_factory=dict)

    def property_flag(self, name: str) -> bool:
        value = self.dialogProperties.get(name) if self.dialogProperties else None
        return bool(value) and str(value).lower() == "true"

    @property
    def is_destroyed(self) -> bool:
        return self.property_flag("destroyed")

    @property
    def is_refresh_needed(self) -> bool:
        return self.property_flag("globalRefresh") or self.property_flag("localRefresh")


class DialogRedirection(Redirection):
    type: str | None = TypeNames.DialogRedirectionTypeName
    dialogId: str | None = None
    dialogDescription: str | None = None
    dialogType: str | None = None
    dialogMode: str | None = None
    viewMode: str | None = None
    recordId: str | None = None
    domainClassName: str | None = None


class WebRedirection(Redirection):
    type: str | None = TypeNames.WebRedirectionTypeName
    url: str | None = None


class WorkbenchRedirection(Redirection):
    type: str | None = TypeNames.WorkbenchRedirectionTypeName
    workbenchId: str | None = None


class NullRedirection(Redirection):
    """A redirection that leads nowhere; the current view stays as it is."""
    type: str | None = TypeNames.NullRedirectionTypeName
