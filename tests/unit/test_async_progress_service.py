"""
Async unit tests for AsyncProgressService.

Workouts and logs are inserted directly so each test controls the exact
completion timestamps relative to a fixed ``now``.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.models.workout import Workout, WorkoutLog, WorkoutStatus
from app.services.async_progress import AsyncProgressService

NOW = datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)


async def add_workout(db, user_id, name, completed_date=None, status=WorkoutStatus.completed, logs=()):
    """Insert a workout with (exercise_id, sets, reps, weight) log tuples."""
    workout = Workout(user_id=user_id, name=name, status=status.value, completed_date=completed_date)
    db.add(workout)
    await db.flush()
    for exercise_id, sets, reps, weight in logs:
        db.add(WorkoutLog(workout_id=workout.id, exercise_id=exercise_id, sets=sets, reps=reps, weight=weight))
    await db.commit()
    return workout.id


class TestCompletedWorkouts:
    """Test the completed workouts section."""

    async def test_total_volume_is_sum_of_sets_times_reps(self, db_session, test_user, exercises):
        # Arrange: 3x10 + 2x8 = 46
        squats = exercises["Squats"].id
        workout_id = await add_workout(
            db_session, test_user.id, "Legs", NOW - timedelta(days=1),
            logs=[(squats, 3, 10, 100), (squats, 2, 8, 120)],
        )

        # Act
        report = await AsyncProgressService.get_progress(db_session, test_user.id, 30, now=NOW)

        # Assert
        assert report.period_days == 30
        assert len(report.completed_workouts) == 1
        summary = report.completed_workouts[0]
        assert summary.id == workout_id
        assert summary.name == "Legs"
        assert summary.total_exercises == 2
        assert summary.total_volume == 46

    async def test_completed_workout_without_logs_has_zero_volume(self, db_session, test_user):
        await add_workout(db_session, test_user.id, "Empty", NOW - timedelta(hours=2))

        report = await AsyncProgressService.get_progress(db_session, test_user.id, 7, now=NOW)

        assert len(report.completed_workouts) == 1
        assert report.completed_workouts[0].total_exercises == 0
        assert report.completed_workouts[0].total_volume == 0
        assert report.exercise_progress == []

    async def test_only_completed_workouts_of_the_user_count(self, db_session, test_user, other_user, exercises):
        squats = exercises["Squats"].id
        await add_workout(db_session, test_user.id, "Done", NOW - timedelta(days=2), logs=[(squats, 1, 1, 50)])
        await add_workout(db_session, test_user.id, "Planned", None, status=WorkoutStatus.scheduled,
                          logs=[(squats, 1, 1, 500)])
        await add_workout(db_session, test_user.id, "Dropped", NOW - timedelta(days=2),
                          status=WorkoutStatus.cancelled, logs=[(squats, 1, 1, 600)])
        await add_workout(db_session, other_user.id, "Someone else", NOW - timedelta(days=2),
                          logs=[(squats, 1, 1, 700)])

        report = await AsyncProgressService.get_progress(db_session, test_user.id, 30, now=NOW)

        assert [w.name for w in report.completed_workouts] == ["Done"]
        assert len(report.exercise_progress) == 1
        assert report.exercise_progress[0].max_weight == 50.0

    async def test_newest_completion_first(self, db_session, test_user):
        await add_workout(db_session, test_user.id, "Older", NOW - timedelta(days=5))
        await add_workout(db_session, test_user.id, "Newer", NOW - timedelta(days=1))

        report = await AsyncProgressService.get_progress(db_session, test_user.id, 30, now=NOW)

        assert [w.name for w in report.completed_workouts] == ["Newer", "Older"]


class TestReportWindow:
    """Test the trailing window boundaries."""

    async def test_cutoff_is_inclusive(self, db_session, test_user):
        await add_workout(db_session, test_user.id, "On the boundary", NOW - timedelta(days=7))
        await add_workout(db_session, test_user.id, "Just outside", NOW - timedelta(days=7, seconds=1))

        report = await AsyncProgressService.get_progress(db_session, test_user.id, 7, now=NOW)

        assert [w.name for w in report.completed_workouts] == ["On the boundary"]

    async def test_shorter_window_excludes_older_workouts(self, db_session, test_user, exercises):
        bench = exercises["Bench Press"].id
        await add_workout(db_session, test_user.id, "Recent", NOW - timedelta(days=3), logs=[(bench, 3, 5, 80)])
        await add_workout(db_session, test_user.id, "Old", NOW - timedelta(days=60), logs=[(bench, 3, 5, 200)])

        week = await AsyncProgressService.get_progress(db_session, test_user.id, 7, now=NOW)
        quarter = await AsyncProgressService.get_progress(db_session, test_user.id, 90, now=NOW)

        assert [w.name for w in week.completed_workouts] == ["Recent"]
        assert week.exercise_progress[0].max_weight == 80.0
        assert quarter.exercise_progress[0].max_weight == 200.0
        assert quarter.exercise_progress[0].workout_count == 2

    async def test_empty_report(self, db_session, test_user):
        report = await AsyncProgressService.get_progress(db_session, test_user.id, now=NOW)

        assert report.period_days == 30
        assert report.completed_workouts == []
        assert report.exercise_progress == []

    async def test_non_positive_days_are_rejected(self, db_session, test_user):
        with pytest.raises(ValueError):
            await AsyncProgressService.get_progress(db_session, test_user.id, 0, now=NOW)


class TestExerciseProgress:
    """Test per-exercise statistics."""

    async def test_null_weights_are_ignored_by_max_and_average(self, db_session, test_user, exercises):
        bench = exercises["Bench Press"].id
        await add_workout(
            db_session, test_user.id, "Push", NOW - timedelta(days=1),
            logs=[(bench, 3, 5, 100), (bench, 3, 5, 120), (bench, 2, 10, None)],
        )

        report = await AsyncProgressService.get_progress(db_session, test_user.id, 30, now=NOW)

        assert len(report.exercise_progress) == 1
        progress = report.exercise_progress[0]
        assert progress.exercise_name == "Bench Press"
        assert progress.max_weight == 120.0
        assert progress.avg_weight == pytest.approx(110.0)
        assert progress.workout_count == 1

    async def test_workout_count_counts_distinct_workouts(self, db_session, test_user, exercises):
        squats = exercises["Squats"].id
        await add_workout(db_session, test_user.id, "A", NOW - timedelta(days=1),
                          logs=[(squats, 1, 5, 100), (squats, 1, 5, 110)])
        await add_workout(db_session, test_user.id, "B", NOW - timedelta(days=2), logs=[(squats, 1, 5, 90)])

        report = await AsyncProgressService.get_progress(db_session, test_user.id, 30, now=NOW)

        assert report.exercise_progress[0].workout_count == 2
        assert report.exercise_progress[0].avg_weight == pytest.approx(100.0)

    async def test_heaviest_first_and_unweighted_last(self, db_session, test_user, exercises):
        await add_workout(
            db_session, test_user.id, "Mixed", NOW - timedelta(days=1),
            logs=[
                (exercises["Plank"].id, 3, 1, None),
                (exercises["Bicep Curls"].id, 3, 12, 15),
                (exercises["Deadlift"].id, 1, 5, 180),
            ],
        )

        report = await AsyncProgressService.get_progress(db_session, test_user.id, 30, now=NOW)

        names = [p.exercise_name for p in report.exercise_progress]
        assert names == ["Deadlift", "Bicep Curls", "Plank"]
        plank = report.exercise_progress[-1]
        assert plank.max_weight is None
        assert plank.avg_weight is None
        assert plank.workout_count == 1
