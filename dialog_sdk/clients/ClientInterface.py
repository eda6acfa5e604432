from abc import ABC, abstractmethod
from datetime import datetime, timezone

import httpx
from httpx._types import QueryParamTypes
from typing import Any
from dialog_sdk.decoding.errors import DialogTransportError
from dialog_sdk.models.config import EnvConfig
from dialog_sdk.models.JsonResponse import JsonResponse

from dialog_sdk.helper.HelperConfig import HelperConfig


class ClientInterface(ABC):
    def __init__(self, helper_config: HelperConfig):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self.timeout = helper_config.get_number_val(f"{self.get_client_type().upper()}_TIMEOUT", default=30.0)

        # client and config
        self._client: httpx.AsyncClient | None = None
        self.last_activity: datetime | None = None
        self.validate_full_configuration()

    @property
    def helper_config(self) -> HelperConfig:
        return self._helper_config

    ##########################################
    ############### CHECKER ##################
    ##########################################

    def validate_full_configuration(self) -> None:
        """
        Validates that all required configuration values for the client are set and valid.

        Raises:
            ValueError: If any required configuration value is missing or invalid.
        """
        req_config = self._get_required_config()
        for config in req_config:
            _ = self.get_config_val(raw_key=config.env_key, default=config.default, val_type=config.val_type)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def get_client_type(self) -> str:
        """
        Returns the type of the client in lowercase. E.g. "dialog"
        """
        return self._get_client_type().lower()

    @abstractmethod
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "dialog"
        """
        pass

    def get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "rest"
        """
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "Rest"
        """
        pass

    ################ CONFIG ##################
    @abstractmethod
    def _get_required_config(self) -> list[EnvConfig]:
        """
        Returns all required configurations for the client.

        Returns:
            list[EnvConfig]: A list containing the details of each required configuration key.
        """
        pass

    def _get_config_key_name(self, raw_key: str) -> str:
        """
        Returns:
            str: The full configuration key name for the client. E.g. "DIALOG_REST_BASE_URL"
        """
        key_prefix = f"{self.get_client_type().upper()}_{self.get_engine_name().upper()}"
        return f"{key_prefix}_{raw_key.upper()}"

    def get_config_val(self, raw_key: str, default: Any = None, val_type: str = "string") -> Any:
        """
        Retrieves the value of a configuration key for the client.

        Args:
            raw_key (str): The raw configuration key name
            default (Any): The default value to return if the configuration key is not set
            val_type (str): The type of the configuration value ("string", "number", "bool", "list")
        """
        key = self._get_config_key_name(raw_key)
        if val_type == "string":
            return self._helper_config.get_string_val(key, default=default)
        elif val_type == "number":
            return self._helper_config.get_number_val(key, default=default)
        elif val_type == "bool":
            return self._helper_config.get_bool_val(key, default=default)
        elif val_type == "list":
            return self._helper_config.get_list_val(key, default=default)
        else:
            raise ValueError(f"Unsupported config value type '{val_type}' for env key '{raw_key}' in {self.get_client_type().upper()} client '{self.get_engine_name()}'.")

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the authentication header for the backend server, if an API key is set.

        Returns:
            dict: A dictionary containing the auth data
        """
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns the base URL of the backend server from env variables

        Returns:
            str: The base URL of the backend server (e.g. "https://dialog.example.com/v0")

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    @abstractmethod
    def _get_endpoint_healthcheck(self) -> str:
        """
        Returns the endpoint path for healthcheck requests.

        Returns:
            str: The endpoint path for healthcheck requests (e.g. "/health")

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_healthcheck(self) -> httpx.Response:
        """Check if the backend is healthy by sending a test request.

        Returns:
            httpx.Response: The response from the healthcheck request.
        """
        return await self.do_request(method="GET", endpoint=self._get_endpoint_healthcheck())

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialise the HTTP client.

        Args:
            transport: Optional httpx transport, e.g. an httpx.MockTransport in tests.
        """
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client and any other resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def do_request(
        self,
        method: str = "GET",
        json: Any = None,
        params: QueryParamTypes | None = None,
        endpoint: str = "",
        additional_headers: dict | None = None,
        raise_on_error: bool = False,
    ) -> httpx.Response:
        """Send an HTTP request to the backend.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, …).
            json: JSON-serialisable body (sets Content-Type automatically).
            params: URL query parameters.
            endpoint: Path to append to the base URL (leading slash optional).
            additional_headers: Extra headers that override the defaults.
            raise_on_error: Raise on any status of 300 and above.

        Returns:
            The raw httpx.Response.

        Raises:
            RuntimeError: If the client is not initialised.
            httpx.HTTPStatusError: If raise_on_error is set and the status is 300 or above.
            httpx.HTTPError: If the request itself fails.
        """
        if self._client is None:
            raise RuntimeError("HTTP client not initialised. Call boot() before making requests.")

        endpoint = "/" + endpoint.strip().lstrip("/") if endpoint.strip() else ""

        # Do NOT set a default Content-Type: httpx sets it for a json body.
        headers: dict = {"Accept": "application/json"}
        headers.update(self._get_auth_header())
        if additional_headers:
            headers.update(additional_headers)

        kwargs: dict = {
            "url": f"{self._get_base_url().rstrip('/')}{endpoint}",
            "headers": headers,
            "timeout": self.timeout,
            "params": params,
        }

        if json is not None:
            kwargs["json"] = json

        self.logging.debug("%s %s", method, kwargs["url"])
        response = await self._client.request(method, **kwargs)
        self.last_activity = datetime.now(timezone.utc)

        if raise_on_error and response.status_code >= 300:
            self.logging.error(
                "Request to %s failed with status %d: %s",
                kwargs["url"],
                response.status_code,
                response.text,
            )
            raise httpx.HTTPStatusError(
                f"Request to {kwargs['url']} failed with status {response.status_code}",
                request=response.request,
                response=response,
            )

        return response

    async def do_json_request(
        self,
        method: str = "GET",
        endpoint: str = "",
        json: Any = None,
        params: QueryParamTypes | None = None,
    ) -> JsonResponse:
        """Send a request and parse the body as JSON, whatever the status code.

        Returns:
            JsonResponse: Status code and parsed body (None for an empty body).

        Raises:
            DialogTransportError: If the body is not valid JSON.
        """
        response = await self.do_request(method=method, endpoint=endpoint, json=json, params=params)
        if not response.content:
            return JsonResponse(statusCode=response.status_code)
        try:
            value = response.json()
        except ValueError as e:
            self.logging.error("Response of %s %s is not valid JSON: %s", method, endpoint, e)
            raise DialogTransportError(f"Response of {method} {endpoint} (status {response.status_code}) is not valid JSON: {e}")
        return JsonResponse(statusCode=response.status_code, value=value)
