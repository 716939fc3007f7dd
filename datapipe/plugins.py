"""Plugin system for datapipe backends."""

import logging
from importlib.metadata import entry_points
from typing import Any, Dict, List, Optional

# (config: ClientConfig) -> BaseBackend
# Any avoids a circular import with the backends package
BackendFactory = Any

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "datapipe.backends"

_BACKEND_FACTORIES: Dict[str, BackendFactory] = {}


def register_backend_factory(type_name: str, factory: BackendFactory):
    """Register a backend factory.

    Args:
        type_name: The 'backend' string used in config (e.g., 'http')
        factory: Function that takes a ClientConfig and returns a backend
    """
    _BACKEND_FACTORIES[type_name] = factory
    logger.debug(f"Registered backend factory: {type_name}")


def get_backend_factory(type_name: str) -> Optional[BackendFactory]:
    """Get a registered backend factory, or None."""
    return _BACKEND_FACTORIES.get(type_name)


def registered_backends() -> List[str]:
    return sorted(_BACKEND_FACTORIES)


def load_plugins():
    """Load backend factories from the 'datapipe.backends' entry point group.

    The entry point name is used as the backend name.
    """
    try:
        eps = entry_points(group=ENTRY_POINT_GROUP)
    except Exception as e:
        logger.error(f"Plugin discovery failed: {e}")
        return

    for ep in eps:
        try:
            factory = ep.load()
            register_backend_factory(ep.name, factory)
            logger.info(f"Loaded plugin: {ep.name}")
        except Exception as e:
            logger.error(f"Failed to load plugin {ep.name}: {e}")
