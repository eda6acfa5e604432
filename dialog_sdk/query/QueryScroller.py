"""Bidirectional buffered paging over a query dialog."""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Protocol

from pydantic import ConfigDict

from dialog_sdk.clients.dialog.models.QueryParameters import QueryDirection
from dialog_sdk.clients.dialog.models.Record import NullRecord, Record, RecordSet


class QueryMarkerOption(str, Enum):
    NONE = "NONE"
    IS_EMPTY = "IS_EMPTY"
    HAS_MORE = "HAS_MORE"


class HasMoreQueryMarker(NullRecord):
    """Placeholder at an end of the buffer where more records can be paged in."""

    model_config = ConfigDict(frozen=True)


class IsEmptyQueryMarker(NullRecord):
    """Placeholder for a complete query without records."""

    model_config = ConfigDict(frozen=True)


HAS_MORE_MARKER = HasMoreQueryMarker()
IS_EMPTY_MARKER = IsEmptyQueryMarker()


class QueryDialog(Protocol):
    async def query(self, page_size: int, direction: QueryDirection, from_record_id: str | None) -> RecordSet: ...


class QueryScroller:
    """
    Keeps an ascending buffer of records and extends it page by page in either direction.

    Each direction (and refresh) holds at most one in-flight task. A new call chains on
    that task, waits for it to settle (success or failure) and only then reads the
    exhaustion flag and computes its anchor from the buffer, so back-to-back calls never
    request overlapping pages.

    Every page request remembers the generation it was issued in. refresh() starts a new
    generation when it executes; requests of an older generation are discarded and resolve
    to an empty list instead of touching the refreshed buffer. The refreshed state is swapped
    in only once its first page has arrived.

    Records are shared with callers as immutable values; buffer returns a copy of the list.
    """

    def __init__(
        self,
        dialog: QueryDialog,
        page_size: int = 50,
        first_record_id: str | None = None,
        marker_options: Iterable[QueryMarkerOption] = (),
        logger: logging.Logger | None = None,
    ):
        self.logging = logger or logging.getLogger("dialog_sdk.query")
        self._dialog = dialog
        self._page_size = page_size
        self._first_record_id = first_record_id
        self._marker_options = frozenset(marker_options)
        self._pending: dict[str, asyncio.Task | None] = {"forward": None, "backward": None, "refresh": None}
        self._generation = 0
        self._buffer: list[Record] = []
        self._has_more_backward = bool(first_record_id)
        self._has_more_forward = True
        self._first_result_record_id: str | None = None

    ##########################################
    ################ GETTER ##################
    ##########################################

    @property
    def buffer(self) -> list[Record]:
        return list(self._buffer)

    @property
    def buffer_with_markers(self) -> list[Record]:
        """The buffer with marker records added according to the marker options."""
        result = list(self._buffer)
        if self.is_complete:
            if QueryMarkerOption.IS_EMPTY in self._marker_options and self.is_empty:
                result.append(IS_EMPTY_MARKER)
        elif QueryMarkerOption.HAS_MORE in self._marker_options:
            if not result:
                result.append(HAS_MORE_MARKER)
            else:
                if self._has_more_backward:
                    result.insert(0, HAS_MORE_MARKER)
                if self._has_more_forward:
                    result.append(HAS_MORE_MARKER)
        return result

    @property
    def dialog(self) -> QueryDialog:
        return self._dialog

    @property
    def first_record_id(self) -> str | None:
        return self._first_record_id

    @property
    def first_result_record_id(self) -> str | None:
        return self._first_result_record_id

    @property
    def has_more_backward(self) -> bool:
        return self._has_more_backward

    @property
    def has_more_forward(self) -> bool:
        return self._has_more_forward

    @property
    def is_complete(self) -> bool:
        return not self._has_more_backward and not self._has_more_forward

    @property
    def is_complete_and_empty(self) -> bool:
        return self.is_complete and not self._buffer

    @property
    def is_empty(self) -> bool:
        return not self._buffer

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def generation(self) -> int:
        return self._generation

    ##########################################
    ################ PAGING ##################
    ##########################################

    async def page_forward(self, page_size: int | None = None) -> list[Record]:
        """
        Appends the next page after the buffer's last record.

        Returns:
            list[Record]: The records of the page, or an empty list if the forward direction is
                exhausted or the request was superseded by a refresh.

        Raises:
            Exception: Whatever the dialog's query raises. Buffer and flags stay unchanged.
        """
        generation = self._generation
        size = self._page_size if page_size is None else page_size
        return await self._chain(
            "forward", lambda previous: self._fetch_page(previous, QueryDirection.FORWARD, size, generation)
        )

    async def page_backward(self, page_size: int | None = None) -> list[Record]:
        """
        Prepends the page before the buffer's first record. The server returns backward pages in
        descending order; they are reversed so the buffer stays ascending. The returned list keeps
        the server's order.
        """
        generation = self._generation
        size = self._page_size if page_size is None else page_size
        return await self._chain(
            "backward", lambda previous: self._fetch_page(previous, QueryDirection.BACKWARD, size, generation)
        )

    async def refresh(self, page_size: int | None = None) -> list[Record]:
        """
        Loads one forward page from the start of the query and replaces buffer and flags with it.
        Chains on a refresh already in flight. Paging calls made meanwhile wait for the new page.
        If the query fails the exception reaches the caller and buffer and flags stay unchanged.

        Returns:
            list[Record]: The records of the fresh first page.
        """
        size = self._page_size if page_size is None else page_size
        return await self._chain("refresh", lambda previous: self._refresh_after(previous, size))

    def trim_first(self, n: int) -> None:
        """Drops the first n records; the backward direction can be paged again."""
        self._buffer = self._buffer[max(n, 0):]
        self._has_more_backward = True

    def trim_last(self, n: int) -> None:
        """Drops the last n records; the forward direction can be paged again."""
        self._buffer = self._buffer[: max(len(self._buffer) - max(n, 0), 0)]
        self._has_more_forward = True

    ##########################################
    ############### INTERNALS ################
    ##########################################

    async def _chain(self, slot: str, run: Callable[[asyncio.Task | None], Awaitable[Any]]) -> Any:
        previous = self._pending[slot]
        task = asyncio.ensure_future(run(previous))
        self._occupy(slot, task)
        return await task

    def _occupy(self, slot: str, task: asyncio.Task) -> None:
        self._pending[slot] = task
        task.add_done_callback(lambda done: self._release(slot, done))

    def _release(self, slot: str, task: asyncio.Task) -> None:
        if self._pending[slot] is task:
            self._pending[slot] = None

    @staticmethod
    async def _settle(previous: asyncio.Task | None) -> None:
        # only the ordering matters here, the previous caller receives its own outcome
        if previous is not None and not previous.done():
            await asyncio.wait({previous})

    async def _fetch_page(
        self, previous: asyncio.Task | None, direction: QueryDirection, page_size: int, generation: int
    ) -> list[Record]:
        await self._settle(previous)
        forward = direction == QueryDirection.FORWARD

        if generation != self._generation:
            self.logging.debug("Discarding %s page request of generation %d", direction.value, generation)
            return []
        if not (self._has_more_forward if forward else self._has_more_backward):
            return []

        anchor = self._anchor(forward)
        self.logging.debug("Querying %s page of %d records from %s", direction.value, page_size, anchor)
        record_set = await self._dialog.query(page_size, direction, anchor)

        if generation != self._generation:
            self.logging.debug("Dropping %s page of generation %d after refresh", direction.value, generation)
            return []

        records = list(record_set.records)
        if forward:
            self._has_more_forward = record_set.hasMore
            self._buffer = self._buffer + records
        else:
            self._has_more_backward = record_set.hasMore
            self._buffer = list(reversed(records)) + self._buffer
        return records

    async def _refresh_after(self, previous: asyncio.Task | None, page_size: int) -> list[Record]:
        await self._settle(previous)
        self._generation += 1
        # paging in either direction waits for the first page of the new generation
        task = asyncio.ensure_future(self._load_first_page(page_size))
        self._occupy("forward", task)
        self._occupy("backward", task)
        return await task

    async def _load_first_page(self, page_size: int) -> list[Record]:
        self.logging.debug("Refreshing with a first page of %d records", page_size)
        record_set = await self._dialog.query(page_size, QueryDirection.FORWARD, None)

        records = list(record_set.records)
        self._buffer = records
        self._has_more_backward = bool(self._first_record_id)
        self._has_more_forward = record_set.hasMore
        self._first_result_record_id = records[0].id if records else None
        return list(records)

    def _anchor(self, forward: bool) -> str | None:
        if not self._buffer:
            return None
        return self._buffer[-1].id if forward else self._buffer[0].id

