from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Describes one environment setting a client needs.

    Attributes:
        env_key (str): The raw key, prefixed by the client with "<CLIENT_TYPE>_<ENGINE>_" (e.g. "BASE_URL").
        val_type (str): "string", "number", "bool" or "list".
        default (str | int | bool | list | None): Value used when the variable is unset. None marks the setting as required.
    """

    env_key: str
    val_type: str
    default: str | int | bool | list | None = None
