from typing import Protocol, List

from status_api.domain.container import ContainerDetail, ContainerSummary


class EngineError(Exception):
    """The container engine could not answer (unreachable, refused, timed out)."""


class ContainerNotFound(EngineError):
    """The engine does not know the requested container."""


class ContainerEngine(Protocol):
    async def list_containers(self) -> List[ContainerSummary]:
        """List every container, running or not, in engine order."""
        ...

    async def inspect_container(self, container_id: str) -> ContainerDetail:
        """Inspect one container by full id, short id or name."""
        ...

    def close(self) -> None:
        """Release the connection to the engine."""
        ...
