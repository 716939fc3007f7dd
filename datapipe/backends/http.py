"""HTTP backend speaking the service's JSON 1.1 protocol."""

from typing import Any, Dict, Optional

import requests

from datapipe.backends.base import DESCRIBE_OBJECTS, QUERY_OBJECTS, BaseBackend
from datapipe.exceptions import ServiceError
from datapipe.utils.logging import logger

CONTENT_TYPE = "application/x-amz-json-1.1"


class HttpBackend(BaseBackend):
    """Posts each operation to the service endpoint over a requests session.

    Request signing is not done here: pass any ``requests`` auth object
    (for example one that applies SigV4) as ``auth``. Headers and auth are
    sent with each request, so a shared ``session`` is left unchanged.
    """

    name = "http"

    def __init__(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[Any] = None,
        timeout_s: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.timeout_s = timeout_s
        self.headers = dict(headers or {})
        self.auth = auth
        self._session = session or requests.Session()

    def _request(self, target: str, params: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug("API request", target=target, endpoint=self.endpoint)

        response = self._session.post(
            self.endpoint,
            json=params,
            headers={**self.headers, "Content-Type": CONTENT_TYPE, "X-Amz-Target": target},
            auth=self.auth,
            timeout=self.timeout_s,
        )

        if not response.ok:
            error_type, message = _parse_error(response)
            logger.error(
                "API request failed",
                target=target,
                status=response.status_code,
                error_type=error_type,
            )
            raise ServiceError(target, response.status_code, error_type, message)

        return response.json()

    def describe_objects(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(DESCRIBE_OBJECTS, params)

    def query_objects(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(QUERY_OBJECTS, params)

    def close(self) -> None:
        self._session.close()


def _parse_error(response: requests.Response):
    """Pull the error type and message out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return None, response.text or None

    if not isinstance(body, dict):
        return None, response.text or None

    error_type = body.get("__type")
    if error_type and "#" in error_type:
        error_type = error_type.rsplit("#", 1)[1]
    message = body.get("message") or body.get("Message")
    return error_type, message
