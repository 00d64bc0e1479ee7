"""
Async unit tests for AsyncWorkoutPlanService.

Covers plan creation, ordered retrieval, whole-list replacement (including
rollback when the replacement fails), ownership scoping and deletion.
"""

import pytest
from fastapi import HTTPException
from sqlalchemy import func, select

from app.models.workout import Workout
from app.models.workout_plan import WorkoutExercise
from app.schemas.workout_plan import PlanExerciseItem, WorkoutPlanWrite
from app.services.async_workout_plan import AsyncWorkoutPlanService


def make_plan(name, *items, description=None):
    return WorkoutPlanWrite(
        name=name,
        description=description,
        exercises=[PlanExerciseItem(**item) for item in items],
    )


async def count_plan_rows(db, plan_id):
    result = await db.execute(
        select(func.count(WorkoutExercise.id)).where(WorkoutExercise.workout_plan_id == plan_id)
    )
    return result.scalar_one()


class TestCreatePlan:
    """Test plan creation."""

    async def test_create_plan_returns_exercises_with_catalog_details(self, db_session, test_user, exercises):
        """
        Test that a created plan comes back with its exercise list joined to the catalog.
        """
        # Arrange
        squats = exercises["Squats"]
        plan_data = make_plan(
            "Leg Day",
            {"exercise_id": squats.id, "sets": 5, "reps": 5, "weight": 100, "order_index": 0},
            description="Heavy legs",
        )

        # Act
        plan = await AsyncWorkoutPlanService.create_plan(db_session, test_user.id, plan_data)

        # Assert
        assert plan.id is not None
        assert plan.user_id == test_user.id
        assert plan.name == "Leg Day"
        assert plan.description == "Heavy legs"
        assert len(plan.exercises) == 1
        entry = plan.exercises[0]
        assert entry.exercise_id == squats.id
        assert entry.name == "Squats"
        assert entry.category == "strength"
        assert entry.muscle_group == "legs"
        assert (entry.sets, entry.reps, entry.weight) == (5, 5, 100.0)

    async def test_create_plan_applies_item_defaults(self, db_session, test_user, exercises):
        plan_data = make_plan("Defaults", {"exercise_id": exercises["Plank"].id, "order_index": 0})

        plan = await AsyncWorkoutPlanService.create_plan(db_session, test_user.id, plan_data)

        entry = plan.exercises[0]
        assert entry.sets == 3
        assert entry.reps == 10
        assert entry.rest_time == 60
        assert entry.weight is None

    async def test_exercises_are_returned_in_order_index_order(self, db_session, test_user, exercises):
        """Entries are sorted by order_index regardless of submission order."""
        plan_data = make_plan(
            "Push",
            {"exercise_id": exercises["Bench Press"].id, "order_index": 2},
            {"exercise_id": exercises["Push-ups"].id, "order_index": 0},
            {"exercise_id": exercises["Overhead Press"].id, "order_index": 1},
        )

        plan = await AsyncWorkoutPlanService.create_plan(db_session, test_user.id, plan_data)

        assert [e.name for e in plan.exercises] == ["Push-ups", "Overhead Press", "Bench Press"]
        assert [e.order_index for e in plan.exercises] == [0, 1, 2]

    async def test_order_index_is_stored_as_sent(self, db_session, test_user, exercises):
        plan_data = make_plan(
            "Gaps",
            {"exercise_id": exercises["Squats"].id, "order_index": 10},
            {"exercise_id": exercises["Lunges"].id, "order_index": 10},
            {"exercise_id": exercises["Leg Press"].id, "order_index": 3},
        )

        plan = await AsyncWorkoutPlanService.create_plan(db_session, test_user.id, plan_data)

        assert [e.order_index for e in plan.exercises] == [3, 10, 10]

    async def test_unknown_exercise_is_rejected_and_nothing_is_written(self, db_session, test_user, exercises):
        plan_data = make_plan(
            "Broken",
            {"exercise_id": exercises["Squats"].id, "order_index": 0},
            {"exercise_id": 999999, "order_index": 1},
        )

        with pytest.raises(HTTPException) as exc_info:
            await AsyncWorkoutPlanService.create_plan(db_session, test_user.id, plan_data)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Invalid exercise reference"
        assert await AsyncWorkoutPlanService.list_plans(db_session, test_user.id) == []
        total = await db_session.execute(select(func.count(WorkoutExercise.id)))
        assert total.scalar_one() == 0


class TestReplacePlan:
    """Test whole-list replacement."""

    async def test_replace_overwrites_fields_and_exercise_list(self, db_session, test_user, exercises):
        # Arrange
        created = await AsyncWorkoutPlanService.create_plan(
            db_session, test_user.id,
            make_plan(
                "Old",
                {"exercise_id": exercises["Squats"].id, "order_index": 0},
                {"exercise_id": exercises["Lunges"].id, "order_index": 1},
                description="old description",
            ),
        )
        plan_id = created.id

        # Act
        replaced = await AsyncWorkoutPlanService.replace_plan(
            db_session, plan_id, test_user.id,
            make_plan("New", {"exercise_id": exercises["Deadlift"].id, "sets": 4, "order_index": 0}),
        )

        # Assert
        assert replaced.id == plan_id
        assert replaced.name == "New"
        assert replaced.description is None
        assert [e.name for e in replaced.exercises] == ["Deadlift"]
        assert replaced.exercises[0].sets == 4
        assert await count_plan_rows(db_session, plan_id) == 1

    async def test_replace_refreshes_updated_at(self, db_session, test_user, exercises):
        created = await AsyncWorkoutPlanService.create_plan(
            db_session, test_user.id, make_plan("Plan", {"exercise_id": exercises["Yoga"].id, "order_index": 0})
        )

        replaced = await AsyncWorkoutPlanService.replace_plan(
            db_session, created.id, test_user.id,
            make_plan("Plan", {"exercise_id": exercises["Stretching"].id, "order_index": 0}),
        )

        assert replaced.updated_at >= created.updated_at
        assert replaced.created_at == created.created_at

    async def test_replace_of_foreign_plan_returns_none(self, db_session, test_user, other_user, exercises):
        created = await AsyncWorkoutPlanService.create_plan(
            db_session, test_user.id, make_plan("Mine", {"exercise_id": exercises["Squats"].id, "order_index": 0})
        )

        result = await AsyncWorkoutPlanService.replace_plan(
            db_session, created.id, other_user.id,
            make_plan("Hijacked", {"exercise_id": exercises["Running"].id, "order_index": 0}),
        )

        assert result is None
        unchanged = await AsyncWorkoutPlanService.get_plan(db_session, created.id, test_user.id)
        assert unchanged.name == "Mine"
        assert [e.name for e in unchanged.exercises] == ["Squats"]

    async def test_replace_with_unknown_exercise_keeps_previous_state(self, db_session, test_user, exercises):
        created = await AsyncWorkoutPlanService.create_plan(
            db_session, test_user.id,
            make_plan(
                "Stable",
                {"exercise_id": exercises["Squats"].id, "order_index": 0},
                {"exercise_id": exercises["Lunges"].id, "order_index": 1},
            ),
        )
        plan_id = created.id

        with pytest.raises(HTTPException) as exc_info:
            await AsyncWorkoutPlanService.replace_plan(
                db_session, plan_id, test_user.id,
                make_plan("Changed", {"exercise_id": 424242, "order_index": 0}),
            )

        assert exc_info.value.status_code == 400
        plan = await AsyncWorkoutPlanService.get_plan(db_session, plan_id, test_user.id)
        assert plan.name == "Stable"
        assert [e.name for e in plan.exercises] == ["Squats", "Lunges"]

    async def test_storage_failure_mid_replace_rolls_back_everything(self, db_session, test_user, exercises):
        """
        A row rejected by the database during the insert phase must leave the
        old plan and its full exercise list intact.
        """
        # Arrange
        created = await AsyncWorkoutPlanService.create_plan(
            db_session, test_user.id,
            make_plan(
                "Original",
                {"exercise_id": exercises["Bench Press"].id, "order_index": 0},
                {"exercise_id": exercises["Pull-ups"].id, "order_index": 1},
            ),
        )
        plan_id = created.id
        # Bypass validation so the CHECK constraint fires on the second row
        bad_plan = WorkoutPlanWrite.model_construct(
            name="Replacement",
            description=None,
            exercises=[
                PlanExerciseItem(exercise_id=exercises["Squats"].id, order_index=0),
                PlanExerciseItem.model_construct(
                    exercise_id=exercises["Lunges"].id, sets=0, reps=10, weight=None, rest_time=60, order_index=1
                ),
            ],
        )

        # Act
        with pytest.raises(HTTPException) as exc_info:
            await AsyncWorkoutPlanService.replace_plan(db_session, plan_id, test_user.id, bad_plan)

        # Assert
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Internal server error"
        plan = await AsyncWorkoutPlanService.get_plan(db_session, plan_id, test_user.id)
        assert plan.name == "Original"
        assert [e.name for e in plan.exercises] == ["Bench Press", "Pull-ups"]
        assert await count_plan_rows(db_session, plan_id) == 2


class TestReadAndDeletePlan:
    """Test ownership scoping, listing and deletion."""

    async def test_get_plan_is_scoped_to_owner(self, db_session, test_user, other_user, exercises):
        created = await AsyncWorkoutPlanService.create_plan(
            db_session, test_user.id, make_plan("Private", {"exercise_id": exercises["Squats"].id, "order_index": 0})
        )

        assert await AsyncWorkoutPlanService.get_plan(db_session, created.id, other_user.id) is None
        assert await AsyncWorkoutPlanService.get_plan(db_session, 987654, test_user.id) is None
        assert (await AsyncWorkoutPlanService.get_plan(db_session, created.id, test_user.id)).name == "Private"

    async def test_list_plans_counts_exercises(self, db_session, test_user, other_user, exercises):
        await AsyncWorkoutPlanService.create_plan(
            db_session, test_user.id,
            make_plan(
                "Two",
                {"exercise_id": exercises["Squats"].id, "order_index": 0},
                {"exercise_id": exercises["Lunges"].id, "order_index": 1},
            ),
        )
        await AsyncWorkoutPlanService.create_plan(
            db_session, other_user.id, make_plan("Not mine", {"exercise_id": exercises["Yoga"].id, "order_index": 0})
        )

        plans = await AsyncWorkoutPlanService.list_plans(db_session, test_user.id)

        assert len(plans) == 1
        assert plans[0].name == "Two"
        assert plans[0].exercise_count == 2

    async def test_delete_plan_removes_entries_and_detaches_workouts(self, db_session, test_user, exercises):
        created = await AsyncWorkoutPlanService.create_plan(
            db_session, test_user.id, make_plan("Temp", {"exercise_id": exercises["Squats"].id, "order_index": 0})
        )
        plan_id = created.id
        workout = Workout(user_id=test_user.id, workout_plan_id=plan_id, name="From plan")
        db_session.add(workout)
        await db_session.commit()
        workout_id = workout.id

        deleted = await AsyncWorkoutPlanService.delete_plan(db_session, plan_id, test_user.id)

        assert deleted is True
        assert await AsyncWorkoutPlanService.get_plan(db_session, plan_id, test_user.id) is None
        assert await count_plan_rows(db_session, plan_id) == 0
        result = await db_session.execute(
            select(Workout).where(Workout.id == workout_id).execution_options(populate_existing=True)
        )
        surviving = result.scalar_one()
        assert surviving.workout_plan_id is None

    async def test_delete_foreign_plan_returns_false(self, db_session, test_user, other_user, exercises):
        created = await AsyncWorkoutPlanService.create_plan(
            db_session, test_user.id, make_plan("Keep", {"exercise_id": exercises["Squats"].id, "order_index": 0})
        )

        assert await AsyncWorkoutPlanService.delete_plan(db_session, created.id, other_user.id) is False
        assert await AsyncWorkoutPlanService.get_plan(db_session, created.id, test_user.id) is not None
