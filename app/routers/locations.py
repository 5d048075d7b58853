"""Location router - API endpoints for location management."""
from fastapi import APIRouter, Depends, HTTPException, status

from app.database import get_database
from app.models.location import Location, LocationCreate, LocationUpdate
from app.routers.auth import get_current_user_id
from app.services.location_service import LocationService


router = APIRouter(prefix="/locations", tags=["locations"])


@router.post("", response_model=Location, status_code=status.HTTP_201_CREATED)
async def create_location(
    location: LocationCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Create a new location."""
    service = LocationService(db)

    return await service.create_location(
        user_id=user_id,
        location_create=location,
    )


@router.get("", response_model=list[Location])
async def list_locations(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """List locations for the current user, newest first."""
    service = LocationService(db)

    return await service.list_locations(user_id=user_id)


@router.get("/{location_id}", response_model=Location)
async def get_location(
    location_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Get a location by ID (404 if missing)."""
    service = LocationService(db)

    try:
        return await service.get_location(
            user_id=user_id,
            location_id=location_id,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.patch("/{location_id}", response_model=Location)
async def update_location(
    location_id: str,
    location_update: LocationUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Update a location (404 if missing)."""
    service = LocationService(db)

    try:
        return await service.update_location(
            user_id=user_id,
            location_id=location_id,
            location_update=location_update,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.delete("/{location_id}")
async def delete_location(
    location_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Delete a location (404 if missing)."""
    service = LocationService(db)

    try:
        return await service.delete_location(
            user_id=user_id,
            location_id=location_id,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
