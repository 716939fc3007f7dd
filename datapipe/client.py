"""Client facade for pipeline object description and querying."""

from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from datapipe.backends.base import BaseBackend
from datapipe.backends.factory import register_builtins
from datapipe.config import ClientConfig, QueryOptions, Sphere
from datapipe.exceptions import BackendNotFoundError
from datapipe.pagination import PaginatedQueryCollector, QueryPage, QueryRequest
from datapipe.plugins import get_backend_factory, load_plugins, registered_backends
from datapipe.utils.logging import logger

MAX_DESCRIBE_IDS = 25

Options = Union[QueryOptions, Dict[str, Any], None]


class DataPipelineClient:
    """Describe and query the objects of a pipeline.

    Example:
        ```python
        client = DataPipelineClient(HttpBackend("https://datapipeline.us-east-1.amazonaws.com/"))
        failed = client.query_all_objects(
            "df-0123456789",
            Sphere.INSTANCE,
            {"query": {"selectors": [
                {"fieldName": "@status", "operator": {"type": "EQ", "values": ["FAILED"]}},
            ]}},
        )
        ```
    """

    def __init__(self, backend: BaseBackend, max_pages: Optional[int] = None):
        self.backend = backend
        self.max_pages = max_pages

    def describe_objects(
        self,
        pipeline_id: str,
        object_ids: Sequence[str],
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Return the definitions of up to 25 pipeline objects.

        Args:
            pipeline_id: The ID of the pipeline
            object_ids: Identifiers of the objects to describe (1 to 25)
            options: Extra request keys, e.g. ``{"evaluateExpressions": True}``

        Returns:
            Decoded response, with ``pipelineObjects`` holding the definitions.
        """
        if not pipeline_id:
            raise ValueError("pipeline_id must be a non-empty string")
        object_ids = list(object_ids)
        if not object_ids or len(object_ids) > MAX_DESCRIBE_IDS:
            raise ValueError(
                f"object_ids must hold 1 to {MAX_DESCRIBE_IDS} identifiers, got {len(object_ids)}"
            )

        params: Dict[str, Any] = {"pipelineId": pipeline_id, "objectIds": object_ids}
        params.update(options or {})
        return self.backend.describe_objects(params)

    def query_objects(
        self, pipeline_id: str, sphere: Union[Sphere, str], options: Options = None
    ) -> Dict[str, Any]:
        """Run one query call and return the raw page.

        The page holds ``ids``, ``hasMoreResults`` and, when more results
        remain, the ``marker`` to pass back for the next page.
        """
        request = QueryRequest.build(pipeline_id, sphere, options)
        return self.backend.query_objects(request.to_wire())

    def iter_query_pages(
        self,
        pipeline_id: str,
        sphere: Union[Sphere, str],
        options: Options = None,
        max_pages: Optional[int] = None,
    ) -> Iterator[QueryPage]:
        """Yield every page of a query, following markers."""
        request = QueryRequest.build(pipeline_id, sphere, options)
        return self._collector(max_pages).iter_pages(request)

    def query_all_objects(
        self,
        pipeline_id: str,
        sphere: Union[Sphere, str],
        options: Options = None,
        max_pages: Optional[int] = None,
    ) -> List[str]:
        """Return the ids of all objects matching a query, across every page.

        Args:
            pipeline_id: The ID of the pipeline
            sphere: COMPONENT, INSTANCE or ATTEMPT
            options: ``limit``, starting ``marker`` and selector ``query``
            max_pages: Overrides the client's page bound for this call

        Raises:
            PaginationLimitError: If the page bound is hit while more results remain
        """
        request = QueryRequest.build(pipeline_id, sphere, options)
        return self._collector(max_pages).collect(request)

    def close(self) -> None:
        self.backend.close()

    def _collector(self, max_pages: Optional[int]) -> PaginatedQueryCollector:
        bound = max_pages if max_pages is not None else self.max_pages
        return PaginatedQueryCollector(self.backend.query_objects, max_pages=bound)


def create_client(config: Optional[ClientConfig] = None, auth: Any = None) -> DataPipelineClient:
    """Build a client for the backend named in ``config``.

    Args:
        config: Client configuration (defaults apply when omitted)
        auth: Optional ``requests`` auth object handed to the backend factory

    Raises:
        BackendNotFoundError: If no factory is registered for the backend
    """
    config = config or ClientConfig()

    register_builtins()
    factory = get_backend_factory(config.backend)
    if factory is None:
        load_plugins()
        factory = get_backend_factory(config.backend)
    if factory is None:
        raise BackendNotFoundError(config.backend, registered_backends())

    backend = factory(config, auth=auth) if auth is not None else factory(config)
    logger.debug("Client created", backend=config.backend, max_pages=config.max_pages)
    return DataPipelineClient(backend, max_pages=config.max_pages)
