from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.models.user import utcnow


class WorkoutPlan(Base):
    __tablename__ = "workout_plans"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User", back_populates="workout_plans")
    # Rows are owned by the storage-level cascade, never deleted through the ORM
    exercises = relationship(
        "WorkoutExercise",
        back_populates="workout_plan",
        order_by="WorkoutExercise.order_index",
        passive_deletes=True,
    )


class WorkoutExercise(Base):
    """One ordered entry in a plan's exercise list."""

    __tablename__ = "workout_exercises"

    id = Column(Integer, primary_key=True, index=True)
    workout_plan_id = Column(Integer, ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    sets = Column(Integer, nullable=False, default=3)
    reps = Column(Integer, nullable=False, default=10)
    weight = Column(Numeric(5, 2), nullable=True)
    rest_time = Column(Integer, default=60)
    order_index = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    workout_plan = relationship("WorkoutPlan", back_populates="exercises")
    exercise = relationship("Exercise")

    __table_args__ = (
        CheckConstraint("sets BETWEEN 1 AND 20", name="valid_plan_sets"),
        CheckConstraint("reps BETWEEN 1 AND 100", name="valid_plan_reps"),
        CheckConstraint("rest_time BETWEEN 0 AND 600", name="valid_plan_rest_time"),
        CheckConstraint("order_index >= 0", name="valid_plan_order_index"),
    )
