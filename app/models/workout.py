import enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.models.user import utcnow


class WorkoutStatus(str, enum.Enum):
    scheduled = "scheduled"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class Workout(Base):
    """A scheduled or performed session, optionally derived from a plan."""

    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workout_plan_id = Column(Integer, ForeignKey("workout_plans.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(100), nullable=False)
    scheduled_date = Column(DateTime(timezone=True), index=True)
    completed_date = Column(DateTime(timezone=True))
    status = Column(String(20), nullable=False, default=WorkoutStatus.scheduled.value)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User", back_populates="workouts")
    workout_plan = relationship("WorkoutPlan")
    logs = relationship(
        "WorkoutLog",
        back_populates="workout",
        order_by="WorkoutLog.created_at",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('scheduled', 'in_progress', 'completed', 'cancelled')",
            name="valid_workout_status",
        ),
    )


class WorkoutLog(Base):
    """Sets, reps and load actually performed for one exercise in a workout."""

    __tablename__ = "workout_logs"

    id = Column(Integer, primary_key=True, index=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    sets = Column(Integer, nullable=False)
    reps = Column(Integer, nullable=False)
    weight = Column(Numeric(5, 2), nullable=True)
    rest_time = Column(Integer, nullable=True)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    workout = relationship("Workout", back_populates="logs")
    exercise = relationship("Exercise")
