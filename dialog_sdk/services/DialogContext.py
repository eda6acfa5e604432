from datetime import datetime
from typing import Any

from dialog_sdk.clients.dialog.DialogClientInterface import DialogClientInterface
from dialog_sdk.clients.dialog.models.Redirection import Redirection
from dialog_sdk.decoding.Either import Either
from dialog_sdk.services.ActionOutcome import EPOCH, ActionOutcome
from dialog_sdk.services.DialogSession import DialogSession


def _is_true(value: Any) -> bool:
    return value is True or (isinstance(value, str) and value.lower() == "true")


def resolve_settings(settings: dict, redirection: Any) -> dict:
    """Merges the dialog properties a redirection carries into a context's settings."""
    result = dict(settings)
    if isinstance(redirection, Redirection) and redirection.dialogProperties:
        result.update(redirection.dialogProperties)
    if _is_true(result.get("fromDialogDestroyed")):
        result["destroyed"] = "true"
    return result


class DialogContext:
    """Shared state of the query and editor contexts: settings, destroyed state and refresh time."""

    def __init__(self, session: DialogSession, dialog_id: str, settings: dict | None = None):
        self.logging = session.logging
        self._session = session
        self._dialog_id = dialog_id
        self._settings: dict = dict(settings or {})
        self._destroyed = False
        self.last_refresh_time: datetime = EPOCH

    @property
    def session(self) -> DialogSession:
        return self._session

    @property
    def client(self) -> DialogClientInterface:
        return self._session.client

    @property
    def dialog_id(self) -> str:
        return self._dialog_id

    @property
    def settings(self) -> dict:
        return dict(self._settings)

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @property
    def is_refresh_needed(self) -> bool:
        return self.last_refresh_time < self._session.last_maintenance_time

    def _setting_flag(self, name: str) -> bool:
        return _is_true(self._settings.get(name))

    def _conclude(self, result: Either, completed_at: datetime, force_refresh: bool = False) -> ActionOutcome:
        """Folds a redirection's settings into this context, builds the outcome and hands it to the session."""
        refresh_needed = force_refresh
        if result.is_left:
            redirection = result.left
            self._settings = resolve_settings(self._settings, redirection)
            if isinstance(redirection, Redirection) and redirection.is_refresh_needed:
                refresh_needed = True
        if self._setting_flag("destroyed"):
            self.logging.debug("Dialog '%s' was destroyed by the server", self._dialog_id)
            self._destroyed = True
        outcome = ActionOutcome(
            result=result,
            completed_at=completed_at,
            refresh_needed=refresh_needed,
            destroyed=self._destroyed,
        )
        self._session.apply_outcome(outcome)
        return outcome
