from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.async_session import get_async_db
from app.models.user import User
from app.schemas.workout import MessageResponse
from app.schemas.workout_plan import (
    WorkoutPlanDetailResponse,
    WorkoutPlanListResponse,
    WorkoutPlanMutationResponse,
    WorkoutPlanWrite,
)
from app.services.async_auth import get_current_user_async
from app.services.async_workout_plan import AsyncWorkoutPlanService

router = APIRouter()

PLAN_NOT_FOUND = "Workout plan not found"


@router.get("", response_model=WorkoutPlanListResponse)
async def list_workout_plans(
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """Get the authenticated user's workout plans with their exercise counts."""
    plans = await AsyncWorkoutPlanService.list_plans(db, current_user.id)
    return WorkoutPlanListResponse(workout_plans=plans)


@router.get("/{plan_id}", response_model=WorkoutPlanDetailResponse)
async def get_workout_plan(
    plan_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """Get a workout plan with its exercises in order."""
    plan = await AsyncWorkoutPlanService.get_plan(db, plan_id, current_user.id)
    if not plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PLAN_NOT_FOUND)
    return WorkoutPlanDetailResponse(workout_plan=plan)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=WorkoutPlanMutationResponse)
async def create_workout_plan(
    plan_data: WorkoutPlanWrite,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """
    Create a workout plan.

    - **name**: 1-100 characters
    - **description**: optional
    - **exercises**: at least one entry; `order_index` is stored as sent
    """
    plan = await AsyncWorkoutPlanService.create_plan(db, current_user.id, plan_data)
    return WorkoutPlanMutationResponse(message="Workout plan created successfully", workout_plan=plan)


@router.put("/{plan_id}", response_model=WorkoutPlanMutationResponse)
async def update_workout_plan(
    plan_id: int,
    plan_data: WorkoutPlanWrite,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """Replace a workout plan's fields and its whole exercise list."""
    plan = await AsyncWorkoutPlanService.replace_plan(db, plan_id, current_user.id, plan_data)
    if not plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PLAN_NOT_FOUND)
    return WorkoutPlanMutationResponse(message="Workout plan updated successfully", workout_plan=plan)


@router.delete("/{plan_id}", response_model=MessageResponse)
async def delete_workout_plan(
    plan_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user_async)
):
    """Delete a workout plan. Workouts created from it are kept."""
    deleted = await AsyncWorkoutPlanService.delete_plan(db, plan_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PLAN_NOT_FOUND)
    return MessageResponse(message="Workout plan deleted successfully")
