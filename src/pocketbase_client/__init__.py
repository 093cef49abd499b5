"""
PocketBase Python SDK

Typed client for the PocketBase REST API: collections, records, request
logs and password authentication.
"""

from .config import ClientConfig, __version__
from .client import AnonymousClient, AuthenticatedClient, BaseClient, Client
from .transport import RequestsTransport, Transport, TransportResponse
from .builders import (
    ListOptions,
    ListRequestBuilder,
    ViewRequestBuilder,
    CreateRequestBuilder,
    UpdateRequestBuilder,
    DestroyRequestBuilder,
)
from .collections import CollectionsManager, AuthenticatedCollectionsManager, CollectionCreateRequestBuilder
from .logs import LogsManager, LogStatisticsRequestBuilder
from .records import RecordsManager, DeleteAllRequestBuilder
from .pagination import fetch_all, iter_pages
from .models import *
from .errors import *

__all__ = [
    "__version__",
    "ClientConfig",

    # Clients
    "Client",
    "BaseClient",
    "AnonymousClient",
    "AuthenticatedClient",

    # Transport
    "Transport",
    "TransportResponse",
    "RequestsTransport",

    # Builders and managers
    "ListOptions",
    "ListRequestBuilder",
    "ViewRequestBuilder",
    "CreateRequestBuilder",
    "UpdateRequestBuilder",
    "DestroyRequestBuilder",
    "CollectionsManager",
    "AuthenticatedCollectionsManager",
    "CollectionCreateRequestBuilder",
    "LogsManager",
    "LogStatisticsRequestBuilder",
    "RecordsManager",
    "DeleteAllRequestBuilder",

    # Pagination
    "fetch_all",
    "iter_pages",

    # Models
    "ValidationError",
    "ErrorResponse",
    "Page",
    "HealthCheckResponse",
    "CreateResponse",
    "Field",
    "FieldDeclaration",
    "Collection",
    "CollectionDetails",
    "LogListItem",
    "LogStatDataPoint",

    # Errors
    "ErrorCode",
    "PocketBaseError",
    "ConfigurationError",
    "TransportError",
    "HttpStatusError",
    "NotFoundError",
    "ValidationFailure",
    "DecodeError",
    "PaginationError",
    "AuthError",
    "RecordViewError",
]
