"""Time log endpoints - logging work and its archive history."""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.database import get_database
from app.models.time_log import (
    ArchivedTimeLog,
    ArchivedTimeLogUpdate,
    TimeLog,
    TimeLogCreate,
    TimeLogUpdate,
)
from app.routers.auth import get_current_user_id
from app.services.time_log_service import TimeLogService
from app.utils.errors import NotFoundError


router = APIRouter(prefix="/timelogs", tags=["timelogs"])


@router.get("", response_model=list[TimeLog])
async def list_entries(
    project_id: Optional[str] = Query(None),
    location_id: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List time logs for the authenticated user.

    - Optional filters: project_id, location_id
    - Results sorted by created_at descending (most recent first)
    """
    service = TimeLogService(db)
    return await service.list_entries(
        user_id=user_id,
        project_id=project_id,
        location_id=location_id,
    )


@router.post("", response_model=TimeLog, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_create: TimeLogCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Create a time log.

    - Title, project and deadline are required
    - Duration defaults to 0, location to none
    """
    service = TimeLogService(db)
    try:
        return await service.create_entry(
            user_id=user_id,
            entry_create=entry_create,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{entry_id}", response_model=TimeLog)
async def get_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Get a specific time log by ID.
    """
    service = TimeLogService(db)
    try:
        return await service.get_entry(user_id=user_id, entry_id=entry_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{entry_id}", response_model=TimeLog)
async def update_entry(
    entry_id: str,
    entry_update: TimeLogUpdate,
    archive: bool = Query(False, description="Snapshot the current values before updating"),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Edit a time log.

    - Title, project, deadline, location and a positive duration are required
    - With ``archive=true`` the pre-edit values are kept as an archive snapshot
    """
    service = TimeLogService(db)
    try:
        return await service.update_entry(
            user_id=user_id,
            entry_id=entry_id,
            entry_update=entry_update,
            archive=archive,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{entry_id}")
async def delete_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Delete a time log.

    - Hard delete (permanent), archive snapshots are deleted with it
    """
    service = TimeLogService(db)
    try:
        return await service.delete_entry(
            user_id=user_id,
            entry_id=entry_id,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{entry_id}/archives", response_model=list[ArchivedTimeLog])
async def list_archives(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List archive snapshots of a time log, newest first.
    """
    service = TimeLogService(db)
    return await service.list_archives(user_id=user_id, entry_id=entry_id)


@router.put("/{entry_id}/archives/{archive_id}", response_model=ArchivedTimeLog)
async def update_archive(
    entry_id: str,
    archive_id: str,
    archive_update: ArchivedTimeLogUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Edit an archive snapshot in place (no new snapshot is taken).
    """
    service = TimeLogService(db)
    try:
        return await service.update_archive(
            user_id=user_id,
            entry_id=entry_id,
            archive_id=archive_id,
            archive_update=archive_update,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{entry_id}/archives/{archive_id}")
async def delete_archive(
    entry_id: str,
    archive_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Delete one archive snapshot; the live time log is untouched.
    """
    service = TimeLogService(db)
    try:
        return await service.delete_archive(
            user_id=user_id,
            entry_id=entry_id,
            archive_id=archive_id,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
