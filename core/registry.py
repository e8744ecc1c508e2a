from __future__ import annotations

from core.resource import Resource


class ResourceRegistry:
    """The set of resources a run watches, owned by the entry point.

    The reactor, the busy-wait poller and the scheduler all receive the
    same registry, so there is exactly one place resources are added.
    Names must be unique; they are how event sources address a resource.
    """

    def __init__(self) -> None:
        self._resources: dict[str, Resource] = {}

    def register(self, resource: Resource) -> None:
        if resource.name in self._resources:
            raise ValueError(f"Resource {resource.name!r} already registered")
        self._resources[resource.name] = resource

    def get(self, name: str) -> Resource:
        try:
            return self._resources[name]
        except KeyError:
            raise KeyError(f"Unknown resource {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    @property
    def resources(self) -> list[Resource]:
        return list(self._resources.values())
