"""Backend implementations for datapipe."""

from datapipe.backends.base import DESCRIBE_OBJECTS, QUERY_OBJECTS, BaseBackend
from datapipe.backends.http import HttpBackend
from datapipe.backends.mock import MockBackend

__all__ = ["BaseBackend", "HttpBackend", "MockBackend", "DESCRIBE_OBJECTS", "QUERY_OBJECTS"]
