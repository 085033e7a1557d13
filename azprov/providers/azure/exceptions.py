"""Azure provider faults.

Faults raised by the Azure SDK reach the caller unchanged. Only "not found"
gets special treatment, and only where the lifecycle contract says so.
"""
from azure.core.exceptions import AzureError, HttpResponseError, ResourceNotFoundError

# Any failure reported by the Azure management API
ProviderFault = AzureError


def is_not_found(error: BaseException) -> bool:
    """True if the provider reported that the addressed object does not exist."""
    if isinstance(error, ResourceNotFoundError):
        return True
    return isinstance(error, HttpResponseError) and error.status_code == 404


__all__ = [
    "ProviderFault",
    "ResourceNotFoundError",
    "is_not_found",
]
