from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exercise import Exercise
from app.models.user import utcnow
from app.models.workout import Workout, WorkoutLog, WorkoutStatus
from app.models.workout_plan import WorkoutPlan
from app.schemas.workout import (
    WorkoutCreate,
    WorkoutDetail,
    WorkoutLogCreate,
    WorkoutLogDetail,
    WorkoutLogResponse,
    WorkoutResponse,
    WorkoutUpdate,
)
from app.services.async_error_handler import async_transaction, run_query
from app.services.async_exercise import AsyncExerciseService
from app.utils.logger import workout_logger


class AsyncWorkoutService:
    """Workout sessions and their log entries, always scoped to the owning user."""

    @staticmethod
    def _build_workout_response(workout: Workout, plan_name: Optional[str]) -> WorkoutResponse:
        return WorkoutResponse(
            id=workout.id,
            user_id=workout.user_id,
            workout_plan_id=workout.workout_plan_id,
            plan_name=plan_name,
            name=workout.name,
            scheduled_date=workout.scheduled_date,
            completed_date=workout.completed_date,
            status=workout.status,
            notes=workout.notes,
            created_at=workout.created_at,
            updated_at=workout.updated_at,
        )

    @staticmethod
    def _workout_with_plan_name():
        return (
            select(Workout, WorkoutPlan.name)
            .outerjoin(WorkoutPlan, Workout.workout_plan_id == WorkoutPlan.id)
            .execution_options(populate_existing=True)
        )

    @staticmethod
    async def _get_owned_workout(db: AsyncSession, workout_id: int, user_id: int) -> Optional[Workout]:
        result = await db.execute(
            select(Workout)
            .where(Workout.id == workout_id, Workout.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @classmethod
    async def get_workout_summary(cls, db: AsyncSession, workout_id: int, user_id: int) -> Optional[WorkoutResponse]:
        """Get a workout row with its plan name, without logs."""
        result = await run_query(
            db,
            cls._workout_with_plan_name().where(Workout.id == workout_id, Workout.user_id == user_id),
            "get workout",
        )
        row = result.first()
        if row is None:
            return None
        workout, plan_name = row
        return cls._build_workout_response(workout, plan_name)

    @classmethod
    async def get_workout(cls, db: AsyncSession, workout_id: int, user_id: int) -> Optional[WorkoutDetail]:
        """Get a workout with its logs joined to the catalog (only for the owner)."""
        summary = await cls.get_workout_summary(db, workout_id, user_id)
        if summary is None:
            return None

        result = await run_query(
            db,
            select(WorkoutLog, Exercise)
            .join(Exercise, WorkoutLog.exercise_id == Exercise.id)
            .where(WorkoutLog.workout_id == workout_id)
            .order_by(WorkoutLog.created_at, WorkoutLog.id),
            "get workout logs",
        )
        logs = [
            WorkoutLogDetail(
                **WorkoutLogResponse.model_validate(log).model_dump(),
                exercise_name=exercise.name,
                description=exercise.description,
                category=exercise.category,
                muscle_group=exercise.muscle_group,
            )
            for log, exercise in result.all()
        ]
        return WorkoutDetail(**summary.model_dump(), logs=logs)

    @classmethod
    async def list_workouts(
        cls,
        db: AsyncSession,
        user_id: int,
        status_filter: Optional[WorkoutStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[WorkoutResponse]:
        """Get the user's workouts, most recently scheduled first."""
        query = cls._workout_with_plan_name().where(Workout.user_id == user_id)
        if status_filter is not None:
            query = query.where(Workout.status == WorkoutStatus(status_filter).value)

        query = (
            query.order_by(desc(Workout.scheduled_date), desc(Workout.created_at), desc(Workout.id))
            .limit(limit)
            .offset(offset)
        )
        result = await run_query(db, query, "list workouts")
        return [cls._build_workout_response(workout, plan_name) for workout, plan_name in result.all()]

    @classmethod
    async def create_workout(cls, db: AsyncSession, user_id: int, workout_data: WorkoutCreate) -> WorkoutResponse:
        """
        Schedule a new workout.

        Raises:
            HTTPException: 400 if ``workout_plan_id`` is not one of the user's plans
        """
        workout_logger.info(f"Creating workout for user {user_id}", "CREATE",
                            name=workout_data.name, workout_plan_id=workout_data.workout_plan_id)

        async with async_transaction(db, "create workout"):
            if workout_data.workout_plan_id is not None:
                plan = await db.execute(
                    select(WorkoutPlan.id).where(
                        WorkoutPlan.id == workout_data.workout_plan_id,
                        WorkoutPlan.user_id == user_id,
                    )
                )
                if plan.first() is None:
                    workout_logger.warning("Rejected workout with foreign plan", "CREATE",
                                           workout_plan_id=workout_data.workout_plan_id)
                    raise HTTPException(
                        status_code=status.HTTP_400_BAD_REQUEST,
                        detail="Invalid workout plan",
                    )

            workout = Workout(
                user_id=user_id,
                workout_plan_id=workout_data.workout_plan_id,
                name=workout_data.name,
                scheduled_date=workout_data.scheduled_date,
                notes=workout_data.notes,
                status=WorkoutStatus.scheduled.value,
            )
            db.add(workout)

        workout_logger.success("Workout created", "CREATE", workout_id=workout.id)
        return await cls.get_workout_summary(db, workout.id, user_id)

    @classmethod
    async def update_workout(
        cls, db: AsyncSession, workout_id: int, user_id: int, workout_data: WorkoutUpdate
    ) -> Optional[WorkoutResponse]:
        """
        Apply a partial update.

        Only fields present (and non-null) in ``workout_data`` are written;
        ``updated_at`` is refreshed on every call. Status values are accepted
        in any order. Every move into ``completed`` from another status stamps
        ``completed_date`` with the current time; an update that keeps the
        workout completed leaves the stamp alone.

        Returns:
            The updated workout, or None if it does not exist for this user
        """
        changes = workout_data.model_dump(exclude_unset=True, exclude_none=True)

        async with async_transaction(db, "update workout"):
            workout = await cls._get_owned_workout(db, workout_id, user_id)
            if workout is None:
                workout_logger.warning("Workout not found", "UPDATE", workout_id=workout_id, user_id=user_id)
                return None

            previous_status = workout.status
            for field, value in changes.items():
                if isinstance(value, WorkoutStatus):
                    value = value.value
                setattr(workout, field, value)

            if workout.status == WorkoutStatus.completed.value and (
                previous_status != WorkoutStatus.completed.value or workout.completed_date is None
            ):
                workout.completed_date = utcnow()
            workout.updated_at = utcnow()

        workout_logger.success("Workout updated", "UPDATE", workout_id=workout_id, fields=sorted(changes))
        return await cls.get_workout_summary(db, workout_id, user_id)

    @staticmethod
    async def delete_workout(db: AsyncSession, workout_id: int, user_id: int) -> bool:
        """Hard-delete a workout owned by the user; its logs go with it."""
        async with async_transaction(db, "delete workout"):
            result = await db.execute(
                delete(Workout).where(Workout.id == workout_id, Workout.user_id == user_id)
            )

        deleted = result.rowcount > 0
        if deleted:
            workout_logger.success("Workout deleted", "DELETE", workout_id=workout_id, user_id=user_id)
        return deleted

    @classmethod
    async def add_log(
        cls, db: AsyncSession, workout_id: int, user_id: int, log_data: WorkoutLogCreate
    ) -> Optional[WorkoutLogResponse]:
        """
        Append a log entry to one of the user's workouts.

        Every call adds a new row, even for an exercise already logged in the
        same workout.

        Returns:
            The new log, or None if the workout does not exist for this user

        Raises:
            HTTPException: 400 if the exercise is not in the catalog
        """
        async with async_transaction(db, "add workout log"):
            workout = await cls._get_owned_workout(db, workout_id, user_id)
            if workout is None:
                workout_logger.warning("Workout not found", "LOG", workout_id=workout_id, user_id=user_id)
                return None

            if await AsyncExerciseService.find_missing_ids(db, [log_data.exercise_id]):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Invalid exercise reference",
                )

            log = WorkoutLog(workout_id=workout_id, **log_data.model_dump())
            db.add(log)

        workout_logger.success("Workout log added", "LOG", workout_id=workout_id, log_id=log.id,
                               exercise_id=log.exercise_id, sets=log.sets, reps=log.reps)
        return WorkoutLogResponse.model_validate(log)
