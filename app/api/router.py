"""API router configuration.

This module configures the main API router and includes all endpoint routers
for different features of the application.
"""

from fastapi import APIRouter

from app.api.endpoints import auth, exercises, health, workout_plans, workouts

api_router = APIRouter()

# Include all API routers
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(workout_plans.router, prefix="/workout-plans", tags=["workout-plans"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
