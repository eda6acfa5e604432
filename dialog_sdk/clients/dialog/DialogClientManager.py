from dialog_sdk.helper.HelperConfig import HelperConfig
from dialog_sdk.clients.dialog.DialogClientInterface import DialogClientInterface


class DialogClientManager:
    """
    Manager class that instantiates the dialog client engine named in the configuration.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """
        Reads the dialog engine from ENV configuration (DIALOG_ENGINE, default "rest").

        Returns:
            str: The engine name with the first letter uppercased, e.g. "Rest".
        """
        engine = self.helper_config.get_string_val("DIALOG_ENGINE", default="rest")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> DialogClientInterface:
        """
        Instantiates the dialog client of the configured engine.

        Returns:
            DialogClientInterface: The client instance.

        Raises:
            ValueError: If the engine is unsupported.
        """
        engine = self._get_engine_from_env()
        className = f"DialogClient{engine}"
        # import the class from dialog_sdk.clients.dialog.{engine}
        try:
            module = __import__(
                f"dialog_sdk.clients.dialog.{engine.lower()}.{className}",
                fromlist=[className],
            )
            client_class = getattr(module, className)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported dialog engine specified: '{engine}'. Error: {e}")
        client = client_class(helper_config=self.helper_config)
        self.logging.debug(f"Instantiated dialog client for engine: {engine}")
        return client

    def get_client(self) -> DialogClientInterface:
        """
        Returns the instantiated dialog client.

        Returns:
            DialogClientInterface: The dialog client instance.
        """
        return self.client
