"""Cursor pagination over the object query operation.

The query operation returns at most one page of identifiers. When the
service reports ``hasMoreResults`` the page also carries an opaque
``marker`` that must be echoed back verbatim to get the next page, so pages
are fetched strictly one after another.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from datapipe.config import QueryOptions, Sphere
from datapipe.exceptions import PaginationLimitError
from datapipe.utils.logging import logger


@dataclass(frozen=True)
class QueryRequest:
    """One query call: pipeline, sphere and options."""

    pipeline_id: str
    sphere: str
    options: QueryOptions = field(default_factory=QueryOptions)

    @classmethod
    def build(
        cls,
        pipeline_id: str,
        sphere: Union[Sphere, str],
        options: Union[QueryOptions, Dict[str, Any], None] = None,
    ) -> "QueryRequest":
        if not pipeline_id:
            raise ValueError("pipeline_id must be a non-empty string")
        # Unknown spheres are left for the service to reject
        sphere_value = sphere.value if isinstance(sphere, Sphere) else sphere
        return cls(pipeline_id, sphere_value, QueryOptions.coerce(options))

    def with_marker(self, marker: str) -> "QueryRequest":
        """Return a new request that starts at ``marker``."""
        return QueryRequest(
            self.pipeline_id,
            self.sphere,
            self.options.model_copy(update={"marker": marker}),
        )

    def to_wire(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"pipelineId": self.pipeline_id, "sphere": self.sphere}
        params.update(self.options.to_wire())
        return params


@dataclass
class QueryPage:
    """A single page of query results."""

    ids: List[str]
    has_more_results: bool
    raw: Dict[str, Any]
    request: QueryRequest

    @classmethod
    def from_response(cls, body: Dict[str, Any], request: QueryRequest) -> "QueryPage":
        return cls(
            ids=list(body["ids"]),
            has_more_results=bool(body["hasMoreResults"]),
            raw=body,
            request=request,
        )

    @property
    def marker(self) -> str:
        """Cursor for the next page; only meaningful while more results remain."""
        return self.raw["marker"]


PageFetcher = Callable[[Dict[str, Any]], Dict[str, Any]]


class PaginatedQueryCollector:
    """Collects every identifier matching a query by following markers.

    Args:
        fetch_page: Single-page query operation. Takes the wire request body
            and returns the decoded response mapping.
        max_pages: Optional bound on the number of pages per query. When the
            bound is reached and the service still reports more results,
            PaginationLimitError is raised. None means unbounded.
    """

    def __init__(self, fetch_page: PageFetcher, max_pages: Optional[int] = None):
        if max_pages is not None and max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {max_pages}")
        self.fetch_page = fetch_page
        self.max_pages = max_pages

    def iter_pages(self, request: QueryRequest) -> Iterator[QueryPage]:
        """Yield each page in server order."""
        page_num = 0
        ids_seen = 0
        current: Optional[QueryRequest] = request

        while current is not None:
            page_num += 1
            logger.debug(
                "Fetching page",
                pipeline_id=current.pipeline_id,
                sphere=current.sphere,
                page=page_num,
                marker=current.options.marker,
            )

            page = QueryPage.from_response(self.fetch_page(current.to_wire()), current)
            ids_seen += len(page.ids)
            yield page

            if not page.has_more_results:
                current = None
            elif self.max_pages is not None and page_num >= self.max_pages:
                logger.error(
                    "Page limit reached with results remaining",
                    pipeline_id=current.pipeline_id,
                    max_pages=self.max_pages,
                    ids_collected=ids_seen,
                )
                raise PaginationLimitError(self.max_pages, page_num, ids_seen)
            else:
                current = current.with_marker(page.marker)

    def collect(self, request: QueryRequest) -> List[str]:
        """Return all identifiers across all pages, in order."""
        ids: List[str] = []
        pages = 0
        for page in self.iter_pages(request):
            ids.extend(page.ids)
            pages += 1

        logger.info(
            "Query complete",
            pipeline_id=request.pipeline_id,
            sphere=request.sphere,
            pages=pages,
            total_ids=len(ids),
        )
        return ids
