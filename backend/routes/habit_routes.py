from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from auth import CurrentUser, get_current_user
from dependencies import get_store
from models.habit import PRESET_COLORS, DEFAULT_COLOR
from services.habit_service import HabitService
from services.stats_service import today_stats

router = APIRouter(prefix="/api/v1/habits", tags=["Habits"])


class HabitCreate(BaseModel):
    name: str
    description: Optional[str] = None
    color: Optional[str] = None


class ToggleRequest(BaseModel):
    is_completed_today: bool


class CompletionUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    completed: bool
    completed_at: Optional[date] = Field(None, alias="date")


@router.get("")
def list_habits(user: CurrentUser = Depends(get_current_user), store=Depends(get_store)):
    return HabitService.list_active(store, user.id)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_habit(body: HabitCreate, user: CurrentUser = Depends(get_current_user), store=Depends(get_store)):
    habit = HabitService.create(store, user.id, body.name, body.description, body.color)
    return {"status": "success", "data": habit}


@router.get("/colors")
def list_colors():
    return {"colors": list(PRESET_COLORS), "default": DEFAULT_COLOR}


@router.get("/today")
def list_today_logs(user: CurrentUser = Depends(get_current_user), store=Depends(get_store)):
    return HabitService.list_today_logs(store, user.id)


@router.get("/stats")
def habit_stats(user: CurrentUser = Depends(get_current_user), store=Depends(get_store)):
    habits = HabitService.list_active(store, user.id)
    logs = HabitService.list_today_logs(store, user.id)
    return today_stats(len(habits), len(logs)).to_dict()


@router.post("/{habit_id}/toggle")
def toggle_habit(habit_id: str, body: ToggleRequest,
                 user: CurrentUser = Depends(get_current_user), store=Depends(get_store)):
    result = HabitService.toggle(store, habit_id, user.id, body.is_completed_today)
    return {"status": "success", "data": result}


@router.put("/{habit_id}/completion")
def set_habit_completion(habit_id: str, body: CompletionUpdate,
                         user: CurrentUser = Depends(get_current_user), store=Depends(get_store)):
    result = HabitService.set_completion(store, habit_id, user.id, body.completed, body.completed_at)
    return {"status": "success", "data": result}


@router.delete("/{habit_id}")
def delete_habit(habit_id: str, user: CurrentUser = Depends(get_current_user), store=Depends(get_store)):
    if not HabitService.delete(store, habit_id, user.id):
        raise HTTPException(status_code=404, detail="Habit not found")
    return {"status": "success"}
