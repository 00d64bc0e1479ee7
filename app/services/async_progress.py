from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import desc, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.exercise import Exercise
from app.models.user import utcnow
from app.models.workout import Workout, WorkoutLog, WorkoutStatus
from app.schemas.progress import CompletedWorkoutSummary, ExerciseProgress, ProgressReport
from app.services.async_error_handler import run_query
from app.utils.logger import progress_logger


def _to_float(value) -> Optional[float]:
    return float(value) if value is not None else None


class AsyncProgressService:
    """
    Trailing-window progress report built from completed workouts and their logs.

    Every call recomputes from the log rows; nothing is cached.
    """

    @staticmethod
    def _qualifying_workouts(user_id: int, cutoff: datetime):
        return (
            Workout.user_id == user_id,
            Workout.status == WorkoutStatus.completed.value,
            Workout.completed_date >= cutoff,
        )

    @classmethod
    async def get_completed_workouts(
        cls, db: AsyncSession, user_id: int, cutoff: datetime
    ) -> List[CompletedWorkoutSummary]:
        """
        Completed workouts since ``cutoff`` (inclusive), newest first.

        ``total_volume`` is the sum of sets x reps over the workout's logs
        and ignores weight.
        """
        total_volume = func.coalesce(func.sum(WorkoutLog.sets * WorkoutLog.reps), 0)
        result = await run_query(
            db,
            select(
                Workout.id,
                Workout.name,
                Workout.completed_date,
                Workout.notes,
                func.count(WorkoutLog.id).label("total_exercises"),
                total_volume.label("total_volume"),
            )
            .outerjoin(WorkoutLog, WorkoutLog.workout_id == Workout.id)
            .where(*cls._qualifying_workouts(user_id, cutoff))
            .group_by(Workout.id, Workout.name, Workout.completed_date, Workout.notes)
            .order_by(desc(Workout.completed_date), desc(Workout.id)),
            "progress completed workouts",
        )

        return [
            CompletedWorkoutSummary(
                id=row.id,
                name=row.name,
                completed_date=row.completed_date,
                notes=row.notes,
                total_exercises=row.total_exercises,
                total_volume=int(row.total_volume or 0),
            )
            for row in result.all()
        ]

    @classmethod
    async def get_exercise_progress(
        cls, db: AsyncSession, user_id: int, cutoff: datetime
    ) -> List[ExerciseProgress]:
        """
        Per-exercise load statistics over the qualifying logs.

        Null weights are ignored by the aggregates; an exercise logged only
        without weight still appears, with null max/avg, after weighted ones.
        """
        max_weight = func.max(WorkoutLog.weight)
        result = await run_query(
            db,
            select(
                Exercise.id.label("exercise_id"),
                Exercise.name.label("exercise_name"),
                max_weight.label("max_weight"),
                func.avg(WorkoutLog.weight).label("avg_weight"),
                func.count(distinct(Workout.id)).label("workout_count"),
            )
            .select_from(WorkoutLog)
            .join(Workout, WorkoutLog.workout_id == Workout.id)
            .join(Exercise, WorkoutLog.exercise_id == Exercise.id)
            .where(*cls._qualifying_workouts(user_id, cutoff))
            .group_by(Exercise.id, Exercise.name)
            .order_by(max_weight.desc().nulls_last(), Exercise.name),
            "progress exercise statistics",
        )

        return [
            ExerciseProgress(
                exercise_id=row.exercise_id,
                exercise_name=row.exercise_name,
                max_weight=_to_float(row.max_weight),
                avg_weight=_to_float(row.avg_weight),
                workout_count=row.workout_count,
            )
            for row in result.all()
        ]

    @classmethod
    async def get_progress(
        cls,
        db: AsyncSession,
        user_id: int,
        days: int = settings.DEFAULT_PROGRESS_DAYS,
        now: Optional[datetime] = None,
    ) -> ProgressReport:
        """
        Build the progress report for the last ``days`` days.

        The cutoff is computed once, so both sections cover the same window.
        """
        if days < 1:
            raise ValueError("days must be a positive integer")

        cutoff = (now or utcnow()) - timedelta(days=days)
        progress_logger.debug(f"Computing progress for user {user_id}", "REPORT",
                              days=days, cutoff=cutoff.isoformat())

        completed_workouts = await cls.get_completed_workouts(db, user_id, cutoff)
        exercise_progress = await cls.get_exercise_progress(db, user_id, cutoff)

        progress_logger.info("Progress report computed", "REPORT", user_id=user_id,
                             workouts=len(completed_workouts), exercises=len(exercise_progress))
        return ProgressReport(
            period_days=days,
            completed_workouts=completed_workouts,
            exercise_progress=exercise_progress,
        )
