"""Azure resource adapters and finders."""

from .base import AzureFinder, AzureResource
from .cosmosdb import CosmosDBAccountFinder, CosmosDBAccountResource
from .resource_group import ResourceGroupFinder, ResourceGroupResource

__all__ = [
    'AzureFinder',
    'AzureResource',
    'CosmosDBAccountFinder',
    'CosmosDBAccountResource',
    'ResourceGroupFinder',
    'ResourceGroupResource'
]
