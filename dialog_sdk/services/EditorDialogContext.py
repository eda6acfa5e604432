from dialog_sdk.clients.dialog.models.QueryParameters import ActionParameters
from dialog_sdk.clients.dialog.models.Record import Record
from dialog_sdk.services.ActionOutcome import ActionOutcome, utc_now
from dialog_sdk.services.DialogContext import DialogContext
from dialog_sdk.services.DialogSession import DialogSession


class EditorDialogContext(DialogContext):
    """
    Client-side handle of an editor dialog: reads and writes its single record.
    """

    def __init__(self, session: DialogSession, dialog_id: str, settings: dict | None = None):
        super().__init__(session, dialog_id, settings)
        self._record: Record | None = None

    @property
    def record(self) -> Record | None:
        return self._record

    async def read(self) -> Record:
        self._record = await self.client.do_get_record(self._session.tenant_id, self._session.session_id, self._dialog_id)
        self.last_refresh_time = utc_now()
        return self._record

    async def write(self, record: Record | None = None) -> ActionOutcome:
        """
        Writes the record (default: the last one read). Any write counts as maintenance.

        Returns:
            ActionOutcome: Either.as_right(stored record) or Either.as_left(redirection).

        Raises:
            ValueError: If there is nothing to write.
        """
        record = record or self._record
        if record is None:
            raise ValueError(f"No record to write for dialog '{self._dialog_id}'. Call read() first or pass a record.")
        result = await self.client.do_put_record(self._session.tenant_id, self._session.session_id, self._dialog_id, record)
        now = utc_now()
        self.last_refresh_time = now
        if result.is_right:
            self._record = result.right
        return self._conclude(result, now, force_refresh=True)

    async def perform_menu_action(self, action_id: str, pending_writes: Record | None = None) -> ActionOutcome:
        result = await self.client.do_perform_action(
            self._session.tenant_id,
            self._session.session_id,
            self._dialog_id,
            action_id,
            ActionParameters(targets=[self._record.id] if self._record and self._record.id else [], pendingWrites=pending_writes),
        )
        return self._conclude(result, utc_now())
