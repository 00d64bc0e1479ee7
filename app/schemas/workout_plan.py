from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict


class PlanExerciseItem(BaseModel):
    """One entry of a plan's exercise list as submitted by the client."""
    exercise_id: int = Field(..., gt=0, description="ID of the catalog exercise")
    sets: int = Field(default=3, ge=1, le=20, description="Target number of sets")
    reps: int = Field(default=10, ge=1, le=100, description="Target repetitions per set")
    weight: Optional[float] = Field(default=None, gt=0, le=999.99, description="Target load")
    rest_time: int = Field(default=60, ge=0, le=600, description="Rest between sets in seconds")
    order_index: int = Field(..., ge=0, description="Position of the exercise in the plan")


class WorkoutPlanWrite(BaseModel):
    """Schema for creating or replacing a workout plan."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    exercises: List[PlanExerciseItem] = Field(..., min_length=1)


class PlanExerciseDetail(BaseModel):
    """Plan entry joined with its catalog exercise."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    workout_plan_id: int
    exercise_id: int
    sets: int
    reps: int
    weight: Optional[float] = None
    rest_time: Optional[int] = None
    order_index: int
    name: str
    description: Optional[str] = None
    category: str
    muscle_group: Optional[str] = None


class WorkoutPlanSummary(BaseModel):
    """Plan row as listed, with the size of its exercise list."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    exercise_count: int = 0


class WorkoutPlanResponse(BaseModel):
    """Plan with its ordered exercise list."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    exercises: List[PlanExerciseDetail] = []


class WorkoutPlanListResponse(BaseModel):
    workout_plans: List[WorkoutPlanSummary]


class WorkoutPlanDetailResponse(BaseModel):
    workout_plan: WorkoutPlanResponse


class WorkoutPlanMutationResponse(BaseModel):
    message: str
    workout_plan: WorkoutPlanResponse
