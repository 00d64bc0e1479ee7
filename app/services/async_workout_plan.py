from typing import List, Optional, Sequence

from fastapi import HTTPException, status
from sqlalchemy import delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exercise import Exercise
from app.models.user import utcnow
from app.models.workout_plan import WorkoutExercise, WorkoutPlan
from app.schemas.workout_plan import (
    PlanExerciseDetail,
    PlanExerciseItem,
    WorkoutPlanResponse,
    WorkoutPlanSummary,
    WorkoutPlanWrite,
)
from app.services.async_error_handler import async_transaction, run_query
from app.services.async_exercise import AsyncExerciseService
from app.utils.logger import plan_logger


class AsyncWorkoutPlanService:
    """
    Builds and replaces workout plans together with their ordered exercise list.

    A plan and its exercise rows are always written in one transaction: either
    the whole new list is visible after commit or the previous state remains.
    ``order_index`` values are stored exactly as the caller sent them.
    """

    @staticmethod
    def _build_plan_response(plan: WorkoutPlan, rows: Sequence) -> WorkoutPlanResponse:
        """Helper method to create WorkoutPlanResponse from (entry, exercise) rows."""
        exercises = [
            PlanExerciseDetail(
                id=entry.id,
                workout_plan_id=entry.workout_plan_id,
                exercise_id=entry.exercise_id,
                sets=entry.sets,
                reps=entry.reps,
                weight=entry.weight,
                rest_time=entry.rest_time,
                order_index=entry.order_index,
                name=exercise.name,
                description=exercise.description,
                category=exercise.category,
                muscle_group=exercise.muscle_group,
            )
            for entry, exercise in rows
        ]
        return WorkoutPlanResponse(
            id=plan.id,
            user_id=plan.user_id,
            name=plan.name,
            description=plan.description,
            created_at=plan.created_at,
            updated_at=plan.updated_at,
            exercises=exercises,
        )

    @staticmethod
    async def _get_owned_plan(db: AsyncSession, plan_id: int, user_id: int) -> Optional[WorkoutPlan]:
        result = await db.execute(
            select(WorkoutPlan)
            .where(WorkoutPlan.id == plan_id, WorkoutPlan.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _fetch_plan_exercises(db: AsyncSession, plan_id: int):
        result = await run_query(
            db,
            select(WorkoutExercise, Exercise)
            .join(Exercise, WorkoutExercise.exercise_id == Exercise.id)
            .where(WorkoutExercise.workout_plan_id == plan_id)
            .order_by(WorkoutExercise.order_index, WorkoutExercise.id)
            .execution_options(populate_existing=True),
            "fetch plan exercises",
        )
        return result.all()

    @staticmethod
    async def _ensure_exercises_exist(db: AsyncSession, items: List[PlanExerciseItem]):
        missing = await AsyncExerciseService.find_missing_ids(db, (item.exercise_id for item in items))
        if missing:
            plan_logger.warning("Plan references unknown exercises", "VALIDATE", exercise_ids=sorted(missing))
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid exercise reference",
            )

    @staticmethod
    def _add_plan_exercises(db: AsyncSession, plan_id: int, items: List[PlanExerciseItem]):
        db.add_all(
            WorkoutExercise(
                workout_plan_id=plan_id,
                exercise_id=item.exercise_id,
                sets=item.sets,
                reps=item.reps,
                weight=item.weight,
                rest_time=item.rest_time,
                order_index=item.order_index,
            )
            for item in items
        )

    @classmethod
    async def create_plan(cls, db: AsyncSession, user_id: int, plan_data: WorkoutPlanWrite) -> WorkoutPlanResponse:
        """
        Create a plan and its exercise list atomically.

        Raises:
            HTTPException: 400 for an unknown exercise, 500 for storage failures
        """
        plan_logger.info(f"Creating workout plan for user {user_id}", "CREATE",
                         name=plan_data.name, exercise_count=len(plan_data.exercises))

        async with async_transaction(db, "create workout plan"):
            await cls._ensure_exercises_exist(db, plan_data.exercises)

            plan = WorkoutPlan(
                user_id=user_id,
                name=plan_data.name,
                description=plan_data.description,
            )
            db.add(plan)
            await db.flush()

            cls._add_plan_exercises(db, plan.id, plan_data.exercises)

        plan_logger.success("Workout plan created", "CREATE", plan_id=plan.id, user_id=user_id)
        return await cls.get_plan(db, plan.id, user_id)

    @classmethod
    async def replace_plan(
        cls, db: AsyncSession, plan_id: int, user_id: int, plan_data: WorkoutPlanWrite
    ) -> Optional[WorkoutPlanResponse]:
        """
        Overwrite a plan's fields and replace its whole exercise list.

        Existing rows are deleted and the new list inserted inside one
        transaction, so readers see either the old list or the new one.
        Concurrent replacements are last-commit-wins.

        Returns:
            The updated plan, or None if the plan does not exist for this user
        """
        plan_logger.info(f"Replacing workout plan {plan_id}", "UPDATE",
                         user_id=user_id, exercise_count=len(plan_data.exercises))

        async with async_transaction(db, "replace workout plan"):
            plan = await cls._get_owned_plan(db, plan_id, user_id)
            if plan is None:
                plan_logger.warning("Workout plan not found", "UPDATE", plan_id=plan_id, user_id=user_id)
                return None

            await cls._ensure_exercises_exist(db, plan_data.exercises)

            plan.name = plan_data.name
            plan.description = plan_data.description
            plan.updated_at = utcnow()

            await db.execute(
                delete(WorkoutExercise).where(WorkoutExercise.workout_plan_id == plan_id)
            )
            cls._add_plan_exercises(db, plan_id, plan_data.exercises)

        plan_logger.success("Workout plan replaced", "UPDATE", plan_id=plan_id)
        return await cls.get_plan(db, plan_id, user_id)

    @classmethod
    async def get_plan(cls, db: AsyncSession, plan_id: int, user_id: int) -> Optional[WorkoutPlanResponse]:
        """Get a plan with its exercises in ``order_index`` order (only for the owner)."""
        result = await run_query(
            db,
            select(WorkoutPlan)
            .where(WorkoutPlan.id == plan_id, WorkoutPlan.user_id == user_id)
            .execution_options(populate_existing=True),
            "get workout plan",
        )
        plan = result.scalar_one_or_none()
        if plan is None:
            return None

        rows = await cls._fetch_plan_exercises(db, plan_id)
        return cls._build_plan_response(plan, rows)

    @staticmethod
    async def list_plans(db: AsyncSession, user_id: int) -> List[WorkoutPlanSummary]:
        """Get the user's plans, newest first, each with its exercise count."""
        result = await run_query(
            db,
            select(WorkoutPlan, func.count(WorkoutExercise.id).label("exercise_count"))
            .outerjoin(WorkoutExercise, WorkoutExercise.workout_plan_id == WorkoutPlan.id)
            .where(WorkoutPlan.user_id == user_id)
            .group_by(WorkoutPlan.id)
            .order_by(desc(WorkoutPlan.created_at), desc(WorkoutPlan.id)),
            "list workout plans",
        )

        return [
            WorkoutPlanSummary(
                id=plan.id,
                user_id=plan.user_id,
                name=plan.name,
                description=plan.description,
                created_at=plan.created_at,
                updated_at=plan.updated_at,
                exercise_count=exercise_count,
            )
            for plan, exercise_count in result.all()
        ]

    @staticmethod
    async def delete_plan(db: AsyncSession, plan_id: int, user_id: int) -> bool:
        """
        Delete a plan owned by the user.

        The storage layer removes the plan's exercise rows and clears the plan
        reference on workouts created from it; those workouts survive.
        """
        async with async_transaction(db, "delete workout plan"):
            result = await db.execute(
                delete(WorkoutPlan).where(WorkoutPlan.id == plan_id, WorkoutPlan.user_id == user_id)
            )

        deleted = result.rowcount > 0
        if deleted:
            plan_logger.success("Workout plan deleted", "DELETE", plan_id=plan_id, user_id=user_id)
        return deleted
