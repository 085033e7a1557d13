"""Base Azure resource and finder with client binding."""
from abc import abstractmethod
from enum import Enum
from typing import Any, ClassVar, Generic, Optional, Type, TypeVar

from pydantic import PrivateAttr

from azprov.domain.base.finder import Finder, M
from azprov.domain.base.resource import Resource
from azprov.infrastructure.exceptions import InfrastructureError
from azprov.providers.azure.azure_client import AzureClient

T = TypeVar('T', bound='AzureResource')


def enum_text(value: Any) -> Optional[str]:
    """Plain string form of an SDK enum member or string."""
    if isinstance(value, Enum):
        return value.value
    return value


class AzureResource(Resource):
    """
    Base class for Azure resource adapters.

    The client is supplied at construction and is not a declared field, so it
    never takes part in field comparison.
    """

    _client: Optional[AzureClient] = PrivateAttr(default=None)

    def __init__(self, client: Optional[AzureClient] = None, **data: Any):
        super().__init__(**data)
        self._client = client

    @property
    def client(self) -> AzureClient:
        if self._client is None:
            raise InfrastructureError(f"{self.to_display_string()} is not bound to an Azure client")
        return self._client

    def bind(self: T, client: AzureClient) -> T:
        self._client = client
        return self

    @classmethod
    def from_model(cls: Type[T], client: AzureClient, model: Any) -> T:
        """Build a resource populated from an Azure SDK model."""
        resource = cls(client=client)
        resource.copy_from(model)
        return resource

    @abstractmethod
    def copy_from(self, model: Any) -> None:
        """Overwrite every field with values decoded from an Azure SDK model."""


R = TypeVar('R', bound=AzureResource)


class AzureFinder(Finder[M, R], Generic[M, R]):
    """Base class for Azure finders; results are bound to the finder's client."""

    resource_class: ClassVar[Type[AzureResource]]

    def __init__(self, client: AzureClient):
        self.client = client

    def _new_resource(self, model: M) -> R:
        return self.resource_class.from_model(self.client, model)
