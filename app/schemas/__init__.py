"""Pydantic schemas for request and response validation."""

# Auth schemas
from .auth import AuthResponse, ProfileResponse, Token, TokenPayload, UserLogin, UserPublic, UserRegister

# Exercise catalog schemas
from .exercise import (
    CategoryListResponse,
    ExerciseDetailResponse,
    ExerciseListResponse,
    ExerciseResponse,
    MuscleGroupListResponse,
)

# Workout plan schemas
from .workout_plan import (
    PlanExerciseDetail,
    PlanExerciseItem,
    WorkoutPlanDetailResponse,
    WorkoutPlanListResponse,
    WorkoutPlanMutationResponse,
    WorkoutPlanResponse,
    WorkoutPlanSummary,
    WorkoutPlanWrite,
)

# Workout session schemas
from .workout import (
    MessageResponse,
    WorkoutCreate,
    WorkoutDetail,
    WorkoutDetailResponse,
    WorkoutListResponse,
    WorkoutLogCreate,
    WorkoutLogDetail,
    WorkoutLogMutationResponse,
    WorkoutLogResponse,
    WorkoutMutationResponse,
    WorkoutResponse,
    WorkoutUpdate,
)

# Progress report schemas
from .progress import CompletedWorkoutSummary, ExerciseProgress, ProgressReport

__all__ = [
    # Auth schemas
    "UserRegister",
    "UserLogin",
    "UserPublic",
    "AuthResponse",
    "ProfileResponse",
    "Token",
    "TokenPayload",
    # Exercise catalog schemas
    "ExerciseResponse",
    "ExerciseListResponse",
    "ExerciseDetailResponse",
    "CategoryListResponse",
    "MuscleGroupListResponse",
    # Workout plan schemas
    "PlanExerciseItem",
    "WorkoutPlanWrite",
    "PlanExerciseDetail",
    "WorkoutPlanSummary",
    "WorkoutPlanResponse",
    "WorkoutPlanListResponse",
    "WorkoutPlanDetailResponse",
    "WorkoutPlanMutationResponse",
    # Workout session schemas
    "WorkoutCreate",
    "WorkoutUpdate",
    "WorkoutLogCreate",
    "WorkoutLogResponse",
    "WorkoutLogDetail",
    "WorkoutResponse",
    "WorkoutDetail",
    "WorkoutListResponse",
    "WorkoutDetailResponse",
    "WorkoutMutationResponse",
    "WorkoutLogMutationResponse",
    "MessageResponse",
    # Progress report schemas
    "CompletedWorkoutSummary",
    "ExerciseProgress",
    "ProgressReport",
]
