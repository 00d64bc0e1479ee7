from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.models.exercise import ExerciseCategory


class ExerciseResponse(BaseModel):
    """Catalog entry as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    category: ExerciseCategory
    muscle_group: Optional[str] = None
    created_at: Optional[datetime] = None


class ExerciseListResponse(BaseModel):
    exercises: List[ExerciseResponse]


class ExerciseDetailResponse(BaseModel):
    exercise: ExerciseResponse


class CategoryListResponse(BaseModel):
    categories: List[str]


class MuscleGroupListResponse(BaseModel):
    muscle_groups: List[str]
