"""Test-double backend."""

from typing import Any, Dict

from datapipe.backends.base import DESCRIBE_OBJECTS, QUERY_OBJECTS, BaseBackend
from datapipe.exceptions import OperationNotImplementedError


class MockBackend(BaseBackend):
    """Backend for environments without service access.

    None of the object operations are simulated; each one raises
    OperationNotImplementedError instead of returning made-up data.
    """

    name = "mock"

    def describe_objects(self, params: Dict[str, Any]) -> Dict[str, Any]:
        raise OperationNotImplementedError(self.name, DESCRIBE_OBJECTS)

    def query_objects(self, params: Dict[str, Any]) -> Dict[str, Any]:
        raise OperationNotImplementedError(self.name, QUERY_OBJECTS)
