"""
habit_service.py — Habit completion ledger
Creates and deletes habits, records one completion log per habit per day,
and lists today's state. All reads/writes go through a data store.
"""

import logging
from datetime import date

from errors import AuthenticationError, NotFoundError, ValidationError
from models.habit import PRESET_COLORS, DEFAULT_COLOR, NAME_MAX_LENGTH

logger = logging.getLogger(__name__)

HABITS = "habits"
HABIT_LOGS = "habit_logs"
LOG_KEY = ("habit_id", "completed_at")


def today_iso() -> str:
    """Local calendar date, YYYY-MM-DD."""
    return date.today().isoformat()


def _day(value) -> str:
    if value is None:
        return today_iso()
    if isinstance(value, date):
        return value.isoformat()
    return value


def _require_owner(owner):
    if not owner:
        raise AuthenticationError("Not authenticated")


def _require_habit(store, habit_id: str, owner: str):
    if not store.select(HABITS, filters={"id": habit_id, "user_id": owner}):
        raise NotFoundError("Habit not found")


def validate_habit_input(name: str, description: str = None, color: str = None) -> dict:
    """Normalize create-habit input or raise ValidationError naming the broken rule."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Please enter a habit name")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Habit name must be {NAME_MAX_LENGTH} characters or less")

    description = (description or "").strip() or None

    if color is None:
        color = DEFAULT_COLOR
    elif color.upper() not in PRESET_COLORS:
        raise ValidationError(f"Color must be one of: {', '.join(PRESET_COLORS)}")
    else:
        color = color.upper()

    return {"name": name, "description": description, "color": color}


class HabitService:
    @staticmethod
    def create(store, owner: str, name: str, description: str = None, color: str = None) -> dict:
        fields = validate_habit_input(name, description, color)
        _require_owner(owner)
        row = store.insert(HABITS, {"user_id": owner, **fields})
        logger.info(f"Habit created for {owner}: {fields['name']!r}")
        return row

    @staticmethod
    def list_active(store, owner: str) -> list[dict]:
        """Unarchived habits, newest first."""
        _require_owner(owner)
        return store.select(
            HABITS,
            filters={"user_id": owner, "archived": False},
            order_by="created_at",
            descending=True,
        )

    @staticmethod
    def list_today_logs(store, owner: str, today=None) -> list[dict]:
        _require_owner(owner)
        return store.select(HABIT_LOGS, filters={"user_id": owner, "completed_at": _day(today)})

    @staticmethod
    def completed_habit_ids(logs: list[dict]) -> set:
        return {log["habit_id"] for log in logs}

    @staticmethod
    def toggle(store, habit_id: str, owner: str, is_completed_today: bool, today=None) -> dict:
        """Flip today's state. The caller passes the state it currently sees."""
        _require_owner(owner)
        d = _day(today)
        if is_completed_today:
            removed = store.delete(HABIT_LOGS, {"habit_id": habit_id, "user_id": owner, "completed_at": d})
            logger.info(f"Check-in removed: habit={habit_id} day={d} rows={removed}")
        else:
            _require_habit(store, habit_id, owner)
            store.insert(HABIT_LOGS, {"habit_id": habit_id, "user_id": owner, "completed_at": d})
            logger.info(f"Check-in added: habit={habit_id} day={d}")
        return {"habit_id": habit_id, "completed_at": d, "completed": not is_completed_today}

    @staticmethod
    def set_completion(store, habit_id: str, owner: str, completed: bool, day=None) -> dict:
        """Idempotent: bring (habit, day) to the requested state, whatever it was."""
        _require_owner(owner)
        d = _day(day)
        if d > today_iso():
            raise ValidationError("Cannot record a completion for a future day")
        if completed:
            _require_habit(store, habit_id, owner)
            store.insert_ignore_duplicates(
                HABIT_LOGS, {"habit_id": habit_id, "user_id": owner, "completed_at": d}, LOG_KEY
            )
        else:
            store.delete(HABIT_LOGS, {"habit_id": habit_id, "user_id": owner, "completed_at": d})
        return {"habit_id": habit_id, "completed_at": d, "completed": completed}

    @staticmethod
    def delete(store, habit_id: str, owner: str) -> bool:
        """Hard delete. Logs go with it through the store's cascade."""
        _require_owner(owner)
        removed = store.delete(HABITS, {"id": habit_id, "user_id": owner})
        logger.info(f"Habit delete: id={habit_id} rows={removed}")
        return removed > 0
