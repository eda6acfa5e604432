from typing import Iterable

from dialog_sdk.clients.dialog.models.QueryParameters import ActionParameters, QueryDirection, QueryParameters
from dialog_sdk.clients.dialog.models.Record import RecordSet
from dialog_sdk.query.QueryScroller import QueryMarkerOption, QueryScroller
from dialog_sdk.services.ActionOutcome import EPOCH, ActionOutcome, utc_now
from dialog_sdk.services.DialogContext import DialogContext
from dialog_sdk.services.DialogSession import DialogSession


class QueryDialogContext(DialogContext):
    """
    Client-side handle of a query dialog. Serves as the scroller's query collaborator.
    """

    def __init__(self, session: DialogSession, dialog_id: str, settings: dict | None = None):
        super().__init__(session, dialog_id, settings)
        self._scroller: QueryScroller | None = None

    ##########################################
    ################ SCROLLER ################
    ##########################################

    @property
    def scroller(self) -> QueryScroller:
        if self._scroller is None:
            page_size = int(self.client.helper_config.get_number_val("DIALOG_QUERY_PAGE_SIZE", default=50))
            self._scroller = self.set_scroller(page_size, None, [QueryMarkerOption.NONE])
        return self._scroller

    def set_scroller(
        self,
        page_size: int,
        first_record_id: str | None = None,
        marker_options: Iterable[QueryMarkerOption] = (),
    ) -> QueryScroller:
        self._scroller = QueryScroller(self, page_size, first_record_id, marker_options, logger=self.logging)
        return self._scroller

    async def refresh(self) -> list:
        records = await self.scroller.refresh()
        self.last_refresh_time = utc_now()
        return records

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def query(self, page_size: int, direction: QueryDirection, from_record_id: str | None) -> RecordSet:
        """Fetches one page of records of this dialog.

        Args:
            page_size (int): Maximum number of records.
            direction (QueryDirection): Paging direction relative to from_record_id.
            from_record_id (str | None): Anchor record id, None for the respective end of the result.

        Returns:
            RecordSet: The page.
        """
        params = QueryParameters(fetchDirection=direction, fetchMaxRecords=page_size, fromBusinessId=from_record_id)
        record_set = await self.client.do_get_records(
            self._session.tenant_id, self._session.session_id, self._dialog_id, params
        )
        if self.last_refresh_time == EPOCH:
            self.last_refresh_time = utc_now()
        return record_set

    async def perform_menu_action(self, action_id: str, targets: Iterable[str] = ()) -> ActionOutcome:
        """Performs a menu action on the given target records.

        Returns:
            ActionOutcome: The redirection or acknowledgement, already applied to the session.
        """
        result = await self.client.do_perform_action(
            self._session.tenant_id,
            self._session.session_id,
            self._dialog_id,
            action_id,
            ActionParameters(targets=list(targets)),
        )
        return self._conclude(result, utc_now())
