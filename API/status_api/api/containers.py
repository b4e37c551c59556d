import asyncio
import logging
import re
from typing import Awaitable, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Request

from status_api.domain.ports import ContainerNotFound, EngineError
from status_api.schemas.container import ContainerStatus, ErrorResponse
from status_api.services.container_service import ContainerStatusService

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Docker accepts hex ids (full or prefix) and names matching this pattern.
CONTAINER_REF = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9_.-]*")

CLIENT_CLOSED_REQUEST = 499


class ClientDisconnected(Exception):
    pass


def get_container_service(request: Request) -> ContainerStatusService:
    return request.app.state.container_service


async def run_while_connected(request: Request, call: Awaitable[T]) -> T:
    """
    Await an engine call, cancelling it if the client goes away first.
    """
    task = asyncio.ensure_future(call)
    interval = request.app.state.settings.DISCONNECT_POLL_INTERVAL
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                raise ClientDisconnected()
    finally:
        if not task.done():
            task.cancel()


router = APIRouter(prefix="/api/containers", tags=["containers"])


@router.get(
    "",
    response_model=list[ContainerStatus],
    responses={500: {"model": ErrorResponse}},
    summary="List all containers, running and stopped",
)
async def list_containers(
    request: Request,
    service: ContainerStatusService = Depends(get_container_service),
):
    try:
        return await run_while_connected(request, service.list_statuses())
    except ClientDisconnected:
        logger.debug("Client left before container listing finished")
        raise HTTPException(CLIENT_CLOSED_REQUEST, "Client closed request")
    except EngineError as exc:
        logger.error("Error listing containers: %s", exc, exc_info=exc)
        raise HTTPException(500, "Failed to list containers")


@router.get(
    "/{container_id:path}",
    response_model=ContainerStatus,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Status of a single container by id, short id or name",
)
async def get_container(
    container_id: str,
    request: Request,
    service: ContainerStatusService = Depends(get_container_service),
):
    # Only the first segment names the container; anything after it is ignored.
    container_id = container_id.split("/", 1)[0]
    if not container_id:
        raise HTTPException(400, "Container ID required")
    if not CONTAINER_REF.fullmatch(container_id):
        raise HTTPException(400, "Invalid container ID")

    try:
        return await run_while_connected(request, service.get_status(container_id))
    except ClientDisconnected:
        logger.debug("Client left before %s was inspected", container_id)
        raise HTTPException(CLIENT_CLOSED_REQUEST, "Client closed request")
    except ContainerNotFound as exc:
        logger.info("Container %s not found: %s", container_id, exc)
        raise HTTPException(404, "Container not found")
    except EngineError as exc:
        logger.warning("Error inspecting container %s: %s", container_id, exc)
        raise HTTPException(404, "Container not found")
