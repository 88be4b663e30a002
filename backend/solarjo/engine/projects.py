"""
Project persistence facade.

Projects are kept by an external document store; the calculators never
touch it. ProjectStore is the seam the API depends on, and
InMemoryProjectStore backs local development and tests.
"""

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from solarjo.errors import ProjectNotFound
from solarjo.models.project import Project, ProjectCreate

logger = logging.getLogger(__name__)


class ProjectStore(ABC):
    """Base class for project stores. Implementations raise PersistenceFailure."""

    @abstractmethod
    def save(self, project: ProjectCreate) -> Project:
        ...

    @abstractmethod
    def list_for_owner(self, owner_id: str) -> list[Project]:
        """Projects of one owner, newest first."""
        ...

    @abstractmethod
    def delete(self, owner_id: str, project_id: str) -> None:
        ...


class InMemoryProjectStore(ProjectStore):

    def __init__(self):
        self._projects: dict[str, Project] = {}
        self._lock = threading.Lock()

    def save(self, project: ProjectCreate) -> Project:
        record = Project(
            id=uuid.uuid4().hex,
            name=project.name,
            owner_id=project.owner_id,
            design=project.design,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._projects[record.id] = record
        logger.info("Saved project %s for owner %s", record.id, record.owner_id)
        return record

    def list_for_owner(self, owner_id: str) -> list[Project]:
        with self._lock:
            owned = [p for p in self._projects.values() if p.owner_id == owner_id]
        return sorted(owned, key=lambda p: p.created_at, reverse=True)

    def delete(self, owner_id: str, project_id: str) -> None:
        with self._lock:
            existing = self._projects.get(project_id)
            if existing is None or existing.owner_id != owner_id:
                raise ProjectNotFound(f"Project '{project_id}' not found")
            del self._projects[project_id]
        logger.info("Deleted project %s for owner %s", project_id, owner_id)
