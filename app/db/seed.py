"""Default exercise catalog and an idempotent loader for it."""

import logging
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exercise import Exercise

logger = logging.getLogger(__name__)

EXERCISE_CATALOG: List[Dict[str, str]] = [
    # Cardio
    {"name": "Running", "description": "Cardiovascular exercise that improves endurance and burns calories",
     "category": "cardio", "muscle_group": "legs"},
    {"name": "Cycling", "description": "Low-impact cardio exercise that strengthens legs and improves cardiovascular health",
     "category": "cardio", "muscle_group": "legs"},
    {"name": "Swimming", "description": "Full-body cardio workout that is easy on the joints",
     "category": "cardio", "muscle_group": "full_body"},
    {"name": "Jump Rope", "description": "High-intensity cardio exercise that improves coordination and endurance",
     "category": "cardio", "muscle_group": "legs"},
    # Chest
    {"name": "Push-ups", "description": "Bodyweight exercise that targets chest, shoulders and triceps",
     "category": "strength", "muscle_group": "chest"},
    {"name": "Bench Press", "description": "Compound exercise that primarily targets the chest muscles",
     "category": "strength", "muscle_group": "chest"},
    {"name": "Dumbbell Flys", "description": "Isolation exercise that targets the chest muscles",
     "category": "strength", "muscle_group": "chest"},
    {"name": "Incline Press", "description": "Upper chest focused pressing movement",
     "category": "strength", "muscle_group": "chest"},
    # Back
    {"name": "Pull-ups", "description": "Bodyweight exercise that targets back and biceps",
     "category": "strength", "muscle_group": "back"},
    {"name": "Deadlift", "description": "Compound exercise that targets the entire posterior chain",
     "category": "strength", "muscle_group": "back"},
    {"name": "Bent-over Rows", "description": "Compound exercise that targets the middle back",
     "category": "strength", "muscle_group": "back"},
    {"name": "Lat Pulldowns", "description": "Machine exercise that targets the latissimus dorsi",
     "category": "strength", "muscle_group": "back"},
    # Legs
    {"name": "Squats", "description": "Compound exercise that targets the entire lower body",
     "category": "strength", "muscle_group": "legs"},
    {"name": "Lunges", "description": "Unilateral exercise that targets legs and improves balance",
     "category": "strength", "muscle_group": "legs"},
    {"name": "Leg Press", "description": "Machine exercise that targets the quadriceps",
     "category": "strength", "muscle_group": "legs"},
    {"name": "Romanian Deadlift", "description": "Hip hinge exercise that targets hamstrings and glutes",
     "category": "strength", "muscle_group": "legs"},
    # Shoulders
    {"name": "Overhead Press", "description": "Compound exercise that targets the shoulders",
     "category": "strength", "muscle_group": "shoulders"},
    {"name": "Lateral Raises", "description": "Isolation exercise that targets the lateral deltoids",
     "category": "strength", "muscle_group": "shoulders"},
    {"name": "Front Raises", "description": "Isolation exercise that targets the anterior deltoids",
     "category": "strength", "muscle_group": "shoulders"},
    # Arms
    {"name": "Bicep Curls", "description": "Isolation exercise that targets the biceps",
     "category": "strength", "muscle_group": "arms"},
    {"name": "Tricep Dips", "description": "Bodyweight exercise that targets the triceps",
     "category": "strength", "muscle_group": "arms"},
    {"name": "Hammer Curls", "description": "Variation of bicep curls that also targets forearms",
     "category": "strength", "muscle_group": "arms"},
    # Core
    {"name": "Plank", "description": "Isometric exercise that targets the core muscles",
     "category": "strength", "muscle_group": "core"},
    {"name": "Crunches", "description": "Isolation exercise that targets the abdominal muscles",
     "category": "strength", "muscle_group": "core"},
    {"name": "Russian Twists", "description": "Rotational exercise that targets the obliques",
     "category": "strength", "muscle_group": "core"},
    {"name": "Leg Raises", "description": "Exercise that targets the lower abdominal muscles",
     "category": "strength", "muscle_group": "core"},
    # Flexibility
    {"name": "Stretching", "description": "General stretching to improve flexibility and range of motion",
     "category": "flexibility", "muscle_group": "full_body"},
    {"name": "Yoga", "description": "Mind-body practice that improves flexibility, strength and balance",
     "category": "flexibility", "muscle_group": "full_body"},
    {"name": "Foam Rolling", "description": "Self-myofascial release technique to improve muscle recovery",
     "category": "flexibility", "muscle_group": "full_body"},
]


async def seed_exercises(db: AsyncSession, catalog: Optional[List[Dict[str, str]]] = None) -> int:
    """
    Insert catalog exercises that are not present yet, matched by name.

    Existing rows are left untouched, so running this twice is harmless and
    never invalidates plan or log references.

    Returns:
        Number of exercises inserted
    """
    catalog = EXERCISE_CATALOG if catalog is None else catalog

    result = await db.execute(select(Exercise.name))
    existing = set(result.scalars().all())

    new_rows = [Exercise(**entry) for entry in catalog if entry["name"] not in existing]
    if new_rows:
        db.add_all(new_rows)
        await db.commit()

    logger.info(f"Seeded {len(new_rows)} exercises ({len(existing)} already present)")
    return len(new_rows)
