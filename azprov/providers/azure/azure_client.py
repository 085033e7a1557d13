import configparser
import logging
import os
from typing import Any, Dict, Optional, Sequence

from azure.core.credentials import TokenCredential
from azure.identity import ClientSecretCredential, DefaultAzureCredential
from azure.mgmt.cosmosdb import CosmosDBManagementClient
from azure.mgmt.resource import ResourceManagementClient

from azprov.config.schemas import AzureConfig
from azprov.infrastructure.exceptions import CredentialsError

logger = logging.getLogger(__name__)

CREDENTIAL_FILE_SECTION = "azure"
REQUIRED_CREDENTIAL_KEYS = ("tenant", "client", "key")


def load_credential_file(path: str, required: Sequence[str] = REQUIRED_CREDENTIAL_KEYS) -> Dict[str, str]:
    """
    Read a ``key=value`` credential properties file.

    Expected keys are ``tenant``, ``client``, ``key`` and optionally ``subscription``.

    Args:
        path: Path to the properties file
        required: Keys that must be present and non-empty

    Raises:
        CredentialsError: If the file cannot be read or lacks a required key
    """
    expanded = os.path.expanduser(os.path.expandvars(path))
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(expanded, 'r') as f:
            parser.read_string(f"[{CREDENTIAL_FILE_SECTION}]\n" + f.read())
    except (OSError, configparser.Error) as e:
        raise CredentialsError(f"Failed to read Azure credential file {expanded}: {str(e)}")

    properties = {k: v.strip() for k, v in parser[CREDENTIAL_FILE_SECTION].items()}
    missing = [k for k in required if not properties.get(k)]
    if missing:
        raise CredentialsError(
            f"Azure credential file {expanded} is missing: {', '.join(missing)}",
            details=missing
        )
    return properties


class AzureClient:
    """
    Centralized Azure client management.

    Builds the credential once and creates each management client on first use.
    Transport retry and connection timeout live here; resource adapters never retry.
    """

    def __init__(self, config: AzureConfig, credential: Optional[TokenCredential] = None,
                 subscription_id: Optional[str] = None):
        """
        Initialize Azure client with configuration.

        Args:
            config: Azure provider configuration
            credential: Optional pre-built credential, bypassing the credential file
            subscription_id: Optional subscription, overriding configuration
        """
        self.config = config
        self.region = config.region
        self._credential = credential
        self._subscription_id = subscription_id or config.subscription_id
        self._cosmosdb_client: Optional[CosmosDBManagementClient] = None
        self._resource_client: Optional[ResourceManagementClient] = None

    def _load_credential(self) -> None:
        if self.config.credential_file:
            # A configured tenant stands in for a credential file without one
            required = [k for k in REQUIRED_CREDENTIAL_KEYS if k != "tenant" or not self.config.tenant_id]
            properties = load_credential_file(self.config.credential_file, required)
            self._credential = ClientSecretCredential(
                tenant_id=properties.get("tenant") or self.config.tenant_id,
                client_id=properties["client"],
                client_secret=properties["key"]
            )
            self._subscription_id = self._subscription_id or properties.get("subscription")
            logger.debug(f"Using client secret credential from {self.config.credential_file}")
        else:
            self._credential = DefaultAzureCredential()
            logger.debug("No credential file configured, using default Azure credential chain")

    @property
    def credential(self) -> TokenCredential:
        if self._credential is None:
            self._load_credential()
        return self._credential

    @property
    def subscription_id(self) -> str:
        if self._subscription_id is None and self._credential is None:
            self._load_credential()
        if not self._subscription_id:
            raise CredentialsError(
                "No Azure subscription configured: set AZURE_SUBSCRIPTION_ID "
                "or 'subscription' in the credential file"
            )
        return self._subscription_id

    def _client_kwargs(self) -> Dict[str, Any]:
        return {
            'retry_total': self.config.retry_total,
            'connection_timeout': self.config.connection_timeout_seconds,
        }

    @property
    def cosmosdb(self) -> CosmosDBManagementClient:
        """Lazy-load Cosmos DB Management Client."""
        if self._cosmosdb_client is None:
            self._cosmosdb_client = CosmosDBManagementClient(
                self.credential,
                self.subscription_id,
                **self._client_kwargs()
            )
        return self._cosmosdb_client

    @property
    def resources(self) -> ResourceManagementClient:
        """Lazy-load Resource Management Client."""
        if self._resource_client is None:
            self._resource_client = ResourceManagementClient(
                self.credential,
                self.subscription_id,
                **self._client_kwargs()
            )
        return self._resource_client
