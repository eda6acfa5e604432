from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from dialog_sdk.decoding.Either import Either

EPOCH = datetime.fromtimestamp(0, timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ActionOutcome:
    """
    Result of an action or write performed through a dialog context.

    Attributes:
        result:          Either.as_left(redirection) or Either.as_right(value).
        completed_at:    When the server call returned.
        refresh_needed:  Other dialogs may show stale data now; the session records a maintenance time.
        destroyed:       The dialog that performed the action no longer exists on the server.
    """

    result: Either
    completed_at: datetime
    refresh_needed: bool = False
    destroyed: bool = False

    @property
    def redirection(self) -> Any:
        return self.result.left if self.result.is_left else None

    @property
    def value(self) -> Any:
        return self.result.right if self.result.is_right else None
