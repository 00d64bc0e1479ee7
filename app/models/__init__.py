"""Database models."""

# Import all models here to ensure they're recognized by SQLAlchemy
from app.models.exercise import Exercise, ExerciseCategory
from app.models.user import User
from app.models.workout import Workout, WorkoutLog, WorkoutStatus
from app.models.workout_plan import WorkoutExercise, WorkoutPlan

__all__ = [
    "User",
    "Exercise",
    "ExerciseCategory",
    "WorkoutPlan",
    "WorkoutExercise",
    "Workout",
    "WorkoutLog",
    "WorkoutStatus",
]
