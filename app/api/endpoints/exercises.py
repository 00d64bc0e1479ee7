from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.async_session import get_async_db
from app.models.exercise import ExerciseCategory
from app.schemas.exercise import (
    CategoryListResponse,
    ExerciseDetailResponse,
    ExerciseListResponse,
    ExerciseResponse,
    MuscleGroupListResponse,
)
from app.services.async_exercise import AsyncExerciseService

router = APIRouter()


@router.get("", response_model=ExerciseListResponse)
async def list_exercises(
    category: Optional[ExerciseCategory] = Query(None, description="Filter by category"),
    muscle_group: Optional[str] = Query(None, description="Filter by muscle group"),
    db: AsyncSession = Depends(get_async_db),
):
    """Get catalog exercises ordered by name."""
    exercises = await AsyncExerciseService.list_exercises(
        db, category.value if category else None, muscle_group
    )
    return ExerciseListResponse(exercises=[ExerciseResponse.model_validate(e) for e in exercises])


@router.get("/categories/list", response_model=CategoryListResponse)
async def list_categories(db: AsyncSession = Depends(get_async_db)):
    """Get the distinct categories present in the catalog."""
    return CategoryListResponse(categories=await AsyncExerciseService.list_categories(db))


@router.get("/muscle-groups/list", response_model=MuscleGroupListResponse)
async def list_muscle_groups(db: AsyncSession = Depends(get_async_db)):
    """Get the distinct muscle groups present in the catalog."""
    return MuscleGroupListResponse(muscle_groups=await AsyncExerciseService.list_muscle_groups(db))


@router.get("/category/{category}", response_model=ExerciseListResponse)
async def list_exercises_by_category(category: ExerciseCategory, db: AsyncSession = Depends(get_async_db)):
    exercises = await AsyncExerciseService.list_exercises(db, category=category.value)
    return ExerciseListResponse(exercises=[ExerciseResponse.model_validate(e) for e in exercises])


@router.get("/muscle-group/{muscle_group}", response_model=ExerciseListResponse)
async def list_exercises_by_muscle_group(muscle_group: str, db: AsyncSession = Depends(get_async_db)):
    exercises = await AsyncExerciseService.list_exercises(db, muscle_group=muscle_group)
    return ExerciseListResponse(exercises=[ExerciseResponse.model_validate(e) for e in exercises])


@router.get("/{exercise_id}", response_model=ExerciseDetailResponse)
async def get_exercise(exercise_id: int, db: AsyncSession = Depends(get_async_db)):
    """Get a single catalog exercise."""
    exercise = await AsyncExerciseService.get_exercise(db, exercise_id)
    if not exercise:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Exercise not found"
        )
    return ExerciseDetailResponse(exercise=ExerciseResponse.model_validate(exercise))
