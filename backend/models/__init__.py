# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.habit import Habit, PRESET_COLORS, DEFAULT_COLOR, NAME_MAX_LENGTH
from models.habit_log import HabitLog

__all__ = [
    "Habit",
    "HabitLog",
    "PRESET_COLORS",
    "DEFAULT_COLOR",
    "NAME_MAX_LENGTH",
]
