from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from app.models.workout import WorkoutStatus


class WorkoutCreate(BaseModel):
    """Schema for scheduling a new workout."""
    workout_plan_id: Optional[int] = Field(default=None, gt=0, description="Plan the workout is based on")
    name: str = Field(..., min_length=1, max_length=100)
    scheduled_date: Optional[datetime] = None
    notes: Optional[str] = None


class WorkoutUpdate(BaseModel):
    """Partial update: omitted fields keep their stored value."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    scheduled_date: Optional[datetime] = None
    status: Optional[WorkoutStatus] = None
    notes: Optional[str] = None


class WorkoutLogCreate(BaseModel):
    """Schema for appending a performed set-group to a workout."""
    exercise_id: int = Field(..., gt=0)
    sets: int = Field(..., ge=1, le=20)
    reps: int = Field(..., ge=1, le=100)
    weight: Optional[float] = Field(default=None, gt=0, le=999.99)
    rest_time: Optional[int] = Field(default=None, ge=0, le=600)
    notes: Optional[str] = None


class WorkoutLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workout_id: int
    exercise_id: int
    sets: int
    reps: int
    weight: Optional[float] = None
    rest_time: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class WorkoutLogDetail(WorkoutLogResponse):
    """Log entry joined with its catalog exercise."""
    exercise_name: str
    description: Optional[str] = None
    category: str
    muscle_group: Optional[str] = None


class WorkoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    workout_plan_id: Optional[int] = None
    plan_name: Optional[str] = None
    name: str
    scheduled_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    status: WorkoutStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WorkoutDetail(WorkoutResponse):
    logs: List[WorkoutLogDetail] = []


class WorkoutListResponse(BaseModel):
    workouts: List[WorkoutResponse]


class WorkoutDetailResponse(BaseModel):
    workout: WorkoutDetail


class WorkoutMutationResponse(BaseModel):
    message: str
    workout: WorkoutResponse


class WorkoutLogMutationResponse(BaseModel):
    message: str
    log: WorkoutLogResponse


class MessageResponse(BaseModel):
    message: str
