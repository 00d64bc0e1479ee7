import enum

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text

from app.db.base_class import Base
from app.models.user import utcnow


class ExerciseCategory(str, enum.Enum):
    cardio = "cardio"
    strength = "strength"
    flexibility = "flexibility"


class Exercise(Base):
    """Global catalog entry shared by every user."""

    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    category = Column(String(50), nullable=False, index=True)
    muscle_group = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        CheckConstraint("category IN ('cardio', 'strength', 'flexibility')", name="valid_exercise_category"),
    )
