from enum import Enum

from pydantic import BaseModel, Field

from dialog_sdk.clients.dialog.models.Record import Record
from dialog_sdk.clients.dialog.models.TypeNames import TypeNames


class QueryDirection(str, Enum):
    FORWARD = "FORWARD"
    BACKWARD = "BACKWARD"


class QueryParameters(BaseModel):
    """
    Request body of a record query.

    Attributes:
        fetchDirection:  Paging direction relative to fromBusinessId.
        fetchMaxRecords: Page size.
        fromBusinessId:  Anchor record id (exclusive). None starts at the respective end.
    """
    type: str = TypeNames.QueryParametersTypeName
    fetchDirection: QueryDirection = QueryDirection.FORWARD
    fetchMaxRecords: int = 50
    fromBusinessId: str | None = None


class ActionParameters(BaseModel):
    """
    Request body of a dialog action.

    Attributes:
        targets:       Ids of the records the action applies to.
        pendingWrites: Unsaved changes sent along with the action.
    """
    type: str = TypeNames.ActionParametersTypeName
    targets: list[str] = Field(default_factory=list)
    pendingWrites: Record | None = None
