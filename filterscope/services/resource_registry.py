"""Resource Registry — explicit routing from resource name to Resource configuration.

Invariants:
    - Every resource is registered by name — no auto-discovery
    - Registering a name twice replaces the earlier resource
    - Unknown names raise ResourceNotFoundError (404)

Design Decisions:
    - Explicit dict over model scanning: every exposed resource visible in one place
    - Module-level singleton, populated by the application at startup
"""

import logging

from filterscope.core.errors import ResourceNotFoundError
from filterscope.core.resource import Resource

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """Routes resource name -> Resource. Explicit registration only."""

    def __init__(self) -> None:
        self._resources: dict[str, Resource] = {}

    def register(self, resource: Resource) -> None:
        if resource.name in self._resources:
            logger.warning(f"Replacing registered resource '{resource.name}'")
        self._resources[resource.name] = resource

    def unregister(self, name: str) -> None:
        self._resources.pop(name, None)

    def get(self, name: str) -> Resource:
        resource = self._resources.get(name)
        if resource is None:
            raise ResourceNotFoundError(name)
        return resource

    def names(self) -> list[str]:
        return sorted(self._resources)


resource_registry = ResourceRegistry()
