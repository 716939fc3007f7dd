"""Backend interface for the Data Pipeline API."""

from abc import ABC, abstractmethod
from typing import Any, Dict

DESCRIBE_OBJECTS = "DataPipeline.DescribeObjects"
QUERY_OBJECTS = "DataPipeline.QueryObjects"


class BaseBackend(ABC):
    """Executes one API operation per call.

    Request bodies and responses are plain mappings in the service's wire
    format. Backends do not retry or interpret responses.
    """

    name = "base"

    @abstractmethod
    def describe_objects(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Return object definitions for the ids listed in ``params``."""

    @abstractmethod
    def query_objects(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Return a single page of object ids matching ``params``."""

    def close(self) -> None:
        """Release transport resources."""
