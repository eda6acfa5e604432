from typing import Any

from pydantic import BaseModel


class JsonResponse(BaseModel):
    """
    Status code and parsed JSON body of a backend response.

    Attributes:
        statusCode (int): The HTTP status code.
        value (Any): The parsed body. None for an empty body.
    """

    statusCode: int
    value: Any = None

    @property
    def has_value(self) -> bool:
        return 200 <= self.statusCode < 300

    @property
    def has_redirection(self) -> bool:
        return 300 <= self.statusCode < 400

    @property
    def has_error(self) -> bool:
        return self.statusCode >= 400
