"""datapipe - Describe and query Data Pipeline objects."""

__version__ = "0.1.0"

from datapipe.client import DataPipelineClient, create_client
from datapipe.config import ClientConfig, QueryOptions, Sphere, load_client_config
from datapipe.pagination import PaginatedQueryCollector, QueryPage, QueryRequest

__all__ = [
    "DataPipelineClient",
    "create_client",
    "ClientConfig",
    "QueryOptions",
    "Sphere",
    "load_client_config",
    "PaginatedQueryCollector",
    "QueryPage",
    "QueryRequest",
    "__version__",
]
