"""
API routes for saved projects.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from solarjo.api.dependencies import get_project_store
from solarjo.engine.projects import ProjectStore
from solarjo.errors import PersistenceFailure, ProjectNotFound
from solarjo.models.project import Project, ProjectCreate

router = APIRouter(prefix="/api/v1", tags=["projects"])


@router.get("/projects", response_model=list[Project])
def list_projects(
    owner_id: str = Query(..., min_length=1),
    store: ProjectStore = Depends(get_project_store),
) -> list[Project]:
    """Saved projects of one owner, newest first."""
    try:
        return store.list_for_owner(owner_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/projects", response_model=Project, status_code=201)
def save_project(
    data: ProjectCreate,
    store: ProjectStore = Depends(get_project_store),
) -> Project:
    try:
        return store.save(data)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.delete("/projects/{project_id}", status_code=204)
def delete_project(
    project_id: str,
    owner_id: str = Query(..., min_length=1),
    store: ProjectStore = Depends(get_project_store),
) -> Response:
    try:
        store.delete(owner_id, project_id)
    except ProjectNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    return Response(status_code=204)
