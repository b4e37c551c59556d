import asyncio
import logging
from typing import Any, Dict, List

import docker
from docker.errors import NotFound, DockerException
from requests.exceptions import RequestException

from status_api.core.config import Settings
from status_api.domain.container import ContainerDetail, ContainerSummary
from status_api.domain.ports import ContainerEngine, ContainerNotFound, EngineError

logger = logging.getLogger(__name__)


class DockerSDKEngine(ContainerEngine):
    """ContainerEngine backed by the docker SDK's low-level API client.

    The client is discovered from the environment (DOCKER_HOST & co, falling
    back to the local socket) and negotiates the API version with the daemon.
    """

    def __init__(self, settings: Settings | None = None, docker_client: docker.DockerClient | None = None):
        self.settings = settings or Settings()
        self.timeout = self.settings.DOCKER_TIMEOUT
        self.docker_client = docker_client or docker.from_env(
            version="auto",
            timeout=self.timeout,
            max_pool_size=self.settings.DOCKER_MAX_POOL_SIZE,
        )
        logger.info("Connected to Docker engine (API version %s)", self.api_version)

    @property
    def api_version(self) -> str | None:
        return getattr(self.docker_client.api, "api_version", None)

    # -------------------------------
    # Queries
    # -------------------------------
    async def list_containers(self) -> List[ContainerSummary]:
        raw = await self._call(self.docker_client.api.containers, all=True)
        return [summary_from_api(item) for item in raw or []]

    async def inspect_container(self, container_id: str) -> ContainerDetail:
        raw = await self._call(self.docker_client.api.inspect_container, container_id)
        return detail_from_api(raw)

    def close(self) -> None:
        self.docker_client.close()
        logger.info("Docker client closed")

    # -------------------------------
    # Internal
    # -------------------------------
    async def _call(self, fn, *args, **kwargs):
        """Run a blocking SDK call off the event loop, bounded by the engine timeout."""
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(fn, *args, **kwargs),
                timeout=self.timeout,
            )
        except NotFound as e:
            raise ContainerNotFound(str(e)) from e
        except asyncio.TimeoutError as e:
            raise EngineError(f"Docker engine did not answer within {self.timeout}s") from e
        except (DockerException, RequestException) as e:
            raise EngineError(str(e)) from e


def summary_from_api(raw: Dict[str, Any]) -> ContainerSummary:
    return ContainerSummary(
        id=raw.get("Id", ""),
        names=list(raw.get("Names") or []),
        image=raw.get("Image", ""),
        state=raw.get("State", ""),
        status=raw.get("Status", ""),
    )


def detail_from_api(raw: Dict[str, Any]) -> ContainerDetail:
    state = raw.get("State") or {}
    health = (state.get("Health") or {}).get("Status") or None
    return ContainerDetail(
        id=raw.get("Id", ""),
        name=raw.get("Name", ""),
        image=(raw.get("Config") or {}).get("Image", ""),
        state=state.get("Status", ""),
        running=bool(state.get("Running")),
        paused=bool(state.get("Paused")),
        exit_code=int(state.get("ExitCode") or 0),
        health=health,
    )
