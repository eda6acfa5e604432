from __future__ import annotations

from datetime import datetime

from dialog_sdk.clients.dialog.DialogClientInterface import DialogClientInterface
from dialog_sdk.clients.dialog.models.Session import Login, Session
from dialog_sdk.decoding.Either import Either
from dialog_sdk.services.ActionOutcome import EPOCH, ActionOutcome, utc_now


class DialogSession:
    """
    An open server session together with the client that talks to it.

    The session is passed explicitly to every dialog context. It tracks
    last_maintenance_time: the last time an action changed server data in a way
    that may leave other dialogs stale. Contexts compare their own refresh time
    against it.
    """

    def __init__(self, client: DialogClientInterface, tenant_id: str, session: Session):
        self.logging = client.logging
        self.client = client
        self.tenant_id = tenant_id
        self.session = session
        self.last_maintenance_time: datetime = EPOCH

    @property
    def session_id(self) -> str:
        return self.session.id

    ##########################################
    ############### LIFECYCLE ################
    ##########################################

    @classmethod
    async def create(cls, client: DialogClientInterface, tenant_id: str, login: Login) -> Either:
        """
        Logs in and wraps the new server session.

        Returns:
            Either: Either.as_right(DialogSession), or Either.as_left(Redirection) if the server
                requires another step before a session exists.
        """
        either = await client.do_create_session(tenant_id, login)
        return either.fold(Either.as_left, lambda session: Either.as_right(cls(client, tenant_id, session)))

    async def close(self) -> dict:
        """Deletes the server session."""
        self.logging.info("Closing session '%s'", self.session_id)
        return await self.client.do_delete_session(self.tenant_id, self.session_id)

    ##########################################
    ############## MAINTENANCE ###############
    ##########################################

    def record_maintenance(self, at: datetime | None = None) -> datetime:
        at = at or utc_now()
        if at > self.last_maintenance_time:
            self.last_maintenance_time = at
        return self.last_maintenance_time

    def apply_outcome(self, outcome: ActionOutcome) -> None:
        if outcome.refresh_needed:
            self.record_maintenance(outcome.completed_at)

