from typing import Iterable, List, Optional, Set

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exercise import Exercise
from app.services.async_error_handler import run_query
from app.utils.logger import catalog_logger


class AsyncExerciseService:
    """Read-only access to the shared exercise catalog."""

    @staticmethod
    async def list_exercises(
        db: AsyncSession,
        category: Optional[str] = None,
        muscle_group: Optional[str] = None,
    ) -> List[Exercise]:
        """List catalog exercises ordered by name, optionally filtered."""
        query = select(Exercise)
        if category:
            query = query.where(Exercise.category == category)
        if muscle_group:
            query = query.where(Exercise.muscle_group == muscle_group)

        result = await run_query(db, query.order_by(Exercise.name, Exercise.id), "list exercises")
        exercises = list(result.scalars().all())
        catalog_logger.debug("Listed exercises", "LIST", category=category, muscle_group=muscle_group,
                             count=len(exercises))
        return exercises

    @staticmethod
    async def get_exercise(db: AsyncSession, exercise_id: int) -> Optional[Exercise]:
        result = await run_query(db, select(Exercise).where(Exercise.id == exercise_id), "get exercise")
        return result.scalar_one_or_none()

    @staticmethod
    async def list_categories(db: AsyncSession) -> List[str]:
        result = await run_query(
            db,
            select(Exercise.category).distinct().order_by(Exercise.category),
            "list exercise categories",
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_muscle_groups(db: AsyncSession) -> List[str]:
        result = await run_query(
            db,
            select(Exercise.muscle_group)
            .where(Exercise.muscle_group.is_not(None))
            .distinct()
            .order_by(Exercise.muscle_group),
            "list muscle groups",
        )
        return list(result.scalars().all())

    @staticmethod
    async def find_missing_ids(db: AsyncSession, exercise_ids: Iterable[int]) -> Set[int]:
        """Return the subset of ``exercise_ids`` with no catalog entry."""
        wanted = set(exercise_ids)
        if not wanted:
            return set()
        result = await db.execute(select(Exercise.id).where(Exercise.id.in_(wanted)))
        return wanted - set(result.scalars().all())
