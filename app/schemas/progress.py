from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CompletedWorkoutSummary(BaseModel):
    """A completed workout inside the report window."""
    id: int
    name: str
    completed_date: datetime
    notes: Optional[str] = None
    total_exercises: int = Field(default=0, description="Number of log rows in the workout")
    total_volume: int = Field(default=0, description="Sum of sets x reps over the workout's logs")


class ExerciseProgress(BaseModel):
    """Load progression for one exercise across the window."""
    exercise_id: int
    exercise_name: str
    max_weight: Optional[float] = None
    avg_weight: Optional[float] = None
    workout_count: int = Field(default=0, description="Distinct workouts containing the exercise")


class ProgressReport(BaseModel):
    period_days: int
    completed_workouts: List[CompletedWorkoutSummary]
    exercise_progress: List[ExerciseProgress]
