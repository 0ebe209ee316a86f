import logging
from datetime import date

from fastapi import APIRouter, Depends

from auth import CurrentUser, get_current_user
from dependencies import get_store
from errors import BackendOperationError
from services.habit_service import HabitService
from services.stats_service import today_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/dashboard", tags=["Dashboard"])


@router.get("")
def dashboard(user: CurrentUser = Depends(get_current_user), store=Depends(get_store)):
    """Everything the dashboard screen needs in one call."""
    today = date.today()
    habits = HabitService.list_active(store, user.id)

    logs_error = None
    try:
        logs = HabitService.list_today_logs(store, user.id, today)
    except BackendOperationError as e:
        # Habits still render; the client is told the check-ins are unknown
        logger.error(f"Error loading logs for {user.id}: {e.message}")
        logs, logs_error = [], e.message

    done = HabitService.completed_habit_ids(logs)
    return {
        "date": today.isoformat(),
        "user": {"id": user.id, "email": user.email},
        "habits": [
            # streak is display-only, nothing computes it
            {**h, "completed_today": h["id"] in done, "streak": 0}
            for h in habits
        ],
        "stats": today_stats(len(habits), len(logs)).to_dict(),
        "logs_error": logs_error,
    }
