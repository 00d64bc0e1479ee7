from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.async_session import get_async_db
from app.models.user import User
from app.models.workout import WorkoutStatus
from app.schemas.progress import ProgressReport
from app.schemas.workout import (
    MessageResponse,
    WorkoutCreate,
    WorkoutDetailResponse,
    WorkoutListResponse,
    WorkoutLogCreate,
    WorkoutLogMutationResponse,
    WorkoutMutationResponse,
    WorkoutUpdate,
)
from app.services.async_auth import get_current_user_async
from app.services.async_progress import AsyncProgressService
from app.services.async_workout import AsyncWorkoutService

router = APIRouter()

WORKOUT_NOT_FOUND = "Workout not found"


@router.get("", response_model=WorkoutListResponse)
async def list_workouts(
    status_filter: Optional[WorkoutStatus] = Query(None, alias="status", description="Filter by status"),
    limit: int = Query(20, ge=1, le=100, description="Maximum number of workouts"),
    offset: int = Query(0, ge=0, description="Number of workouts to skip"),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """Get the authenticated user's workouts, most recently scheduled first."""
    workouts = await AsyncWorkoutService.list_workouts(db, current_user.id, status_filter, limit, offset)
    return WorkoutListResponse(workouts=workouts)


@router.get("/reports/progress", response_model=ProgressReport)
async def get_progress_report(
    days: int = Query(settings.DEFAULT_PROGRESS_DAYS, ge=1, le=settings.MAX_PROGRESS_DAYS,
                      description="Length of the trailing window in days"),
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """
    Progress over the last `days` days.

    - **completed_workouts**: completed sessions with log count and volume (sets x reps)
    - **exercise_progress**: max/average logged weight and workout count per exercise
    """
    return await AsyncProgressService.get_progress(db, current_user.id, days)


@router.get("/{workout_id}", response_model=WorkoutDetailResponse)
async def get_workout(
    workout_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """Get a workout with its logs."""
    workout = await AsyncWorkoutService.get_workout(db, workout_id, current_user.id)
    if not workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=WORKOUT_NOT_FOUND)
    return WorkoutDetailResponse(workout=workout)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=WorkoutMutationResponse)
async def create_workout(
    workout_data: WorkoutCreate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """
    Schedule a workout.

    - **workout_plan_id**: optional, must be one of the user's plans
    - **name**: 1-100 characters
    - **scheduled_date**: optional ISO timestamp
    """
    workout = await AsyncWorkoutService.create_workout(db, current_user.id, workout_data)
    return WorkoutMutationResponse(message="Workout created successfully", workout=workout)


@router.put("/{workout_id}", response_model=WorkoutMutationResponse)
async def update_workout(
    workout_id: int,
    workout_data: WorkoutUpdate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """Update any subset of name, scheduled_date, status and notes."""
    workout = await AsyncWorkoutService.update_workout(db, workout_id, current_user.id, workout_data)
    if not workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=WORKOUT_NOT_FOUND)
    return WorkoutMutationResponse(message="Workout updated successfully", workout=workout)


@router.delete("/{workout_id}", response_model=MessageResponse)
async def delete_workout(
    workout_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """Delete a workout and all of its logs."""
    deleted = await AsyncWorkoutService.delete_workout(db, workout_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=WORKOUT_NOT_FOUND)
    return MessageResponse(message="Workout deleted successfully")


@router.post("/{workout_id}/logs", status_code=status.HTTP_201_CREATED, response_model=WorkoutLogMutationResponse)
async def add_workout_log(
    workout_id: int,
    log_data: WorkoutLogCreate,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """Append a log entry (sets, reps, weight) for one exercise."""
    log = await AsyncWorkoutService.add_log(db, workout_id, current_user.id, log_data)
    if not log:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=WORKOUT_NOT_FOUND)
    return WorkoutLogMutationResponse(message="Workout log added successfully", log=log)
