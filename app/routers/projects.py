"""Project router - API endpoints for project management."""
from fastapi import APIRouter, Depends, HTTPException, status

from app.database import get_database
from app.models.project import Project, ProjectCreate, ProjectUpdate
from app.routers.auth import get_current_user_id
from app.services.project_service import ProjectService
from app.services.time_log_service import TimeLogService
from app.utils.duration import format_english


router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Create a new project.

    Args:
        project: Project creation data
        user_id: Current user ID (from token)
        db: Database connection

    Returns:
        Created project object
    """
    service = ProjectService(db)

    return await service.create_project(
        user_id=user_id,
        project_create=project,
    )


@router.get("", response_model=list[Project])
async def list_projects(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List projects for the current user, newest first.
    """
    service = ProjectService(db)

    return await service.list_projects(user_id=user_id)


@router.get("/{project_id}", response_model=Project)
async def get_project(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Get a project by ID.

    Raises:
        HTTPException: If project not found (404)
    """
    service = ProjectService(db)

    try:
        return await service.get_project(
            user_id=user_id,
            project_id=project_id,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.get("/{project_id}/total-duration")
async def get_project_total_duration(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Sum of the durations logged against a project.

    Raises:
        HTTPException: If project not found (404)
    """
    try:
        await ProjectService(db).get_project(user_id=user_id, project_id=project_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    total = await TimeLogService(db).total_duration_by_project(
        user_id=user_id,
        project_id=project_id,
    )

    return {
        "project_id": project_id,
        "total_duration": total,
        "total_display": format_english(total),
    }


@router.patch("/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    project_update: ProjectUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Update a project.

    Raises:
        HTTPException: If project not found (404)
    """
    service = ProjectService(db)

    try:
        return await service.update_project(
            user_id=user_id,
            project_id=project_id,
            project_update=project_update,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Delete a project (hard delete).

    Raises:
        HTTPException: If project not found (404)
    """
    service = ProjectService(db)

    try:
        return await service.delete_project(
            user_id=user_id,
            project_id=project_id,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
