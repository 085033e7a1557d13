"""Application bootstrap - wires configuration, logging, the Azure client and resource types."""
import logging
from typing import Any, Dict, List, Optional

from azprov.config.defaults import ConfigurationManager
from azprov.domain.base.finder import Finder
from azprov.domain.base.resource import Resource
from azprov.helpers.logger import setup_logging
from azprov.infrastructure.registry.resource_registry import ResourceRegistry
from azprov.providers.azure.azure_client import AzureClient
from azprov.providers.azure.registration import register_azure_resources

logger = logging.getLogger(__name__)


class ProviderApplication:
    """Provider context handed to the configuration engine."""

    def __init__(self, config_path: Optional[str] = None,
                 client: Optional[AzureClient] = None,
                 registry: Optional[ResourceRegistry] = None):
        """
        Initialize the provider.

        Args:
            config_path: Optional path to a JSON configuration file
            client: Optional pre-built Azure client
            registry: Optional registry; defaults to the process-wide instance
        """
        self.config_path = config_path
        self._initialized = False
        self._config_manager: Optional[ConfigurationManager] = None
        self._client = client
        self.registry = registry or ResourceRegistry.get_instance()

    def initialize(self) -> bool:
        """Load configuration, configure logging and register resource types."""
        if self._initialized:
            return True

        self._config_manager = ConfigurationManager(self.config_path)
        setup_logging(self._config_manager.get_logging_config())

        if self._client is None:
            self._client = AzureClient(self._config_manager.get_azure_config())
        register_azure_resources(self.registry)

        self._initialized = True
        logger.info(
            f"Azure provider initialized in region {self._client.region} "
            f"with resource types: {', '.join(self.registry.get_registered_types())}"
        )
        return True

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.initialize()

    @property
    def client(self) -> AzureClient:
        self._ensure_initialized()
        return self._client

    @property
    def config(self) -> Dict[str, Any]:
        self._ensure_initialized()
        return self._config_manager.get_config()

    def create_resource(self, type_name: str, **fields: Any) -> Resource:
        """Build an adapter of the given type bound to the provider's client."""
        self._ensure_initialized()
        return self.registry.create_resource(type_name, self._client, **fields)

    def finder(self, type_name: str) -> Finder:
        """Build a finder of the given type bound to the provider's client."""
        self._ensure_initialized()
        return self.registry.create_finder(type_name, self._client)

    def find(self, type_name: str, filters: Optional[Dict[str, Any]] = None) -> List[Resource]:
        """Query existing objects of the given type."""
        return self.finder(type_name).find(filters)
