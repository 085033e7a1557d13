"""Azure provider: client factory, resource adapters and finders."""

from .azure_client import AzureClient
from .exceptions import ProviderFault, is_not_found
from .registration import register_azure_resources

__all__ = [
    'AzureClient',
    'ProviderFault',
    'is_not_found',
    'register_azure_resources'
]
