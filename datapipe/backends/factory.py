"""Backend factories for built-in backend types."""

from typing import Any

from datapipe.config import BackendType, ClientConfig
from datapipe.plugins import get_backend_factory, register_backend_factory
from datapipe.utils.logging import logger


def create_http_backend(config: ClientConfig, auth: Any = None) -> Any:
    """Factory for HttpBackend."""
    from datapipe.backends.http import HttpBackend

    for value in config.headers.values():
        logger.register_secret(value)

    return HttpBackend(
        endpoint=config.endpoint_url,
        headers=config.headers,
        auth=auth,
        timeout_s=config.timeout_s,
    )


def create_mock_backend(config: ClientConfig, auth: Any = None) -> Any:
    """Factory for MockBackend."""
    from datapipe.backends.mock import MockBackend

    return MockBackend()


def register_builtins():
    """Register built-in backend factories under names not already taken."""
    builtins = {
        BackendType.HTTP.value: create_http_backend,
        BackendType.MOCK.value: create_mock_backend,
    }
    for name, factory in builtins.items():
        if get_backend_factory(name) is None:
            register_backend_factory(name, factory)
