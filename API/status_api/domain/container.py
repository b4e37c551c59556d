from dataclasses import dataclass, field
from typing import List


@dataclass
class ContainerSummary:
    """One row of the engine's container listing."""
    id: str
    image: str
    state: str
    status: str  # "Up 2 hours", "Exited (0) 3 days ago"
    names: List[str] = field(default_factory=list)


@dataclass
class ContainerDetail:
    """Structured state returned by a single inspect call."""
    id: str
    name: str
    image: str
    state: str
    running: bool = False
    paused: bool = False
    exit_code: int = 0
    health: str | None = None  # None when no health check is defined
