import asyncio
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient

from status_api.core.config import Settings
from status_api.domain.container import ContainerDetail, ContainerSummary
from status_api.domain.ports import ContainerNotFound, EngineError
from status_api.main import create_app


class FakeEngine:
    """In-memory ContainerEngine resolving full ids, id prefixes and names."""

    def __init__(self, summaries: List[ContainerSummary] | None = None, details: Dict[str, ContainerDetail] | None = None):
        self.summaries = summaries or []
        self.details = details or {}
        self.list_error: Exception | None = None
        self.inspect_errors: Dict[str, Exception] = {}
        self.delay = 0.0
        self.inspected: List[str] = []
        self.closed = False

    async def list_containers(self) -> List[ContainerSummary]:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.list_error:
            raise self.list_error
        return list(self.summaries)

    async def inspect_container(self, container_id: str) -> ContainerDetail:
        self.inspected.append(container_id)
        if self.delay:
            await asyncio.sleep(self.delay)
        if container_id in self.inspect_errors:
            raise self.inspect_errors[container_id]
        for full_id, detail in self.details.items():
            if full_id.startswith(container_id) or detail.name.lstrip("/") == container_id:
                return detail
        raise ContainerNotFound(f"No such container: {container_id}")

    def close(self) -> None:
        self.closed = True


WEB_ID = "abcdef012345deadbeef"
DB_ID = "0123456789abcdef0123"


@pytest.fixture
def web_summary():
    return ContainerSummary(
        id=WEB_ID,
        names=["/web"],
        image="nginx:latest",
        state="running",
        status="Up 2 hours (healthy)",
    )


@pytest.fixture
def web_detail():
    return ContainerDetail(
        id=WEB_ID,
        name="/web",
        image="nginx:latest",
        state="running",
        running=True,
        health="healthy",
    )


@pytest.fixture
def db_summary():
    return ContainerSummary(
        id=DB_ID,
        names=["/db"],
        image="postgres:16",
        state="exited",
        status="Exited (137) 3 days ago",
    )


@pytest.fixture
def db_detail():
    return ContainerDetail(
        id=DB_ID,
        name="/db",
        image="postgres:16",
        state="exited",
        exit_code=137,
    )


@pytest.fixture
def engine(web_summary, web_detail, db_summary, db_detail):
    return FakeEngine(
        summaries=[web_summary, db_summary],
        details={WEB_ID: web_detail, DB_ID: db_detail},
    )


@pytest.fixture
def settings():
    return Settings(DISCONNECT_POLL_INTERVAL=0.5)


@pytest.fixture
def app(settings, engine):
    return create_app(settings, engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def broken_engine():
    engine = FakeEngine()
    engine.list_error = EngineError("Cannot connect to the Docker daemon at unix:///var/run/docker.sock")
    return engine
