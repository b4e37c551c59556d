# status_api/services/container_service.py
import asyncio
import logging
from typing import List

from status_api.domain.container import ContainerDetail, ContainerSummary
from status_api.domain.ports import ContainerEngine, EngineError
from status_api.schemas.container import ContainerStatus

logger = logging.getLogger(__name__)

SHORT_ID_LENGTH = 12
UNKNOWN = "unknown"


def short_id(container_id: str) -> str:
    return container_id[:SHORT_ID_LENGTH]


def display_name(name: str | None) -> str:
    """Strip the single leading "/" Docker puts in front of container names."""
    if not name:
        return UNKNOWN
    return name[1:] if name.startswith("/") else name


def first_name(names: List[str]) -> str:
    return display_name(names[0]) if names else UNKNOWN


def status_from_state(detail: ContainerDetail) -> str:
    # Docker reports paused containers as Running=true too, so they render "running".
    if detail.running:
        return "running"
    if detail.paused:
        return "paused"
    return f"exited ({detail.exit_code:d})"


class ContainerStatusService:
    """Turns engine listings and inspections into ContainerStatus payloads."""

    def __init__(self, engine: ContainerEngine):
        self.engine = engine

    async def list_statuses(self) -> List[ContainerStatus]:
        """
        Every container known to the engine, in engine order.
        Raises EngineError when the listing itself fails.
        """
        summaries = await self.engine.list_containers()
        healths = await asyncio.gather(*(self._health_of(s) for s in summaries))
        return [
            ContainerStatus(
                id=short_id(s.id),
                name=first_name(s.names),
                image=s.image,
                state=s.state,
                status=s.status,
                health=health,
            )
            for s, health in zip(summaries, healths)
        ]

    async def get_status(self, container_id: str) -> ContainerStatus:
        """
        Inspect a single container. Raises ContainerNotFound or EngineError.
        """
        detail = await self.engine.inspect_container(container_id)
        return ContainerStatus(
            id=short_id(detail.id),
            name=display_name(detail.name),
            image=detail.image,
            state=detail.state,
            status=status_from_state(detail),
            health=detail.health or UNKNOWN,
        )

    async def _health_of(self, summary: ContainerSummary) -> str:
        if summary.state != "running":
            return UNKNOWN
        try:
            detail = await self.engine.inspect_container(summary.id)
        except EngineError as exc:
            logger.debug("Health lookup failed for %s: %s", short_id(summary.id), exc)
            return UNKNOWN
        return detail.health or UNKNOWN
