import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from meal_scheduler.api.routes.meals import get_catalog
from meal_scheduler.domain.MealCatalogEntry import MealCatalogEntry
from meal_scheduler.domain.Schedule import Schedule
from meal_scheduler.events.Event_Bus import GLOBAL_EVENT_BUS
from meal_scheduler.events.web_observers import get_events
from meal_scheduler.infra.Schedule_Repository import ScheduleRepository
from meal_scheduler.infra.pdf_utils import generate_pdf_for_week
from meal_scheduler.logic.delivery.assignments import build_meal_assignments, swap_meals
from meal_scheduler.logic.reporting.nutrition import compute_week_nutrition
from meal_scheduler.logic.scheduling.schedule_assembler import generate_schedule
from meal_scheduler.utilities.errors import InputError, ScheduleNotFoundError, SwapError
from meal_scheduler.utilities.validators import ScheduleRequest, SwapRequest

router = APIRouter(prefix="/api/schedule", tags=["schedule"])
logger = logging.getLogger(__name__)


def get_schedule_repository() -> ScheduleRepository:
    return ScheduleRepository()


def _latest(repo: ScheduleRepository, user_id: str) -> dict:
    try:
        return repo.get_latest(user_id)
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _week_of(schedule: Schedule, week_number: int):
    week = schedule.get_week(week_number)
    if week is None:
        raise HTTPException(status_code=404, detail=f"Week {week_number} not found in schedule")
    return week


@router.post("/generate")
def generate(request: ScheduleRequest,
             catalog: List[MealCatalogEntry] = Depends(get_catalog),
             repo: ScheduleRepository = Depends(get_schedule_repository)):
    """Generate, store and return a fresh schedule for the given profile."""
    profile = request.profile.to_domain()
    meals = [m.to_domain() for m in request.meals] if request.meals is not None else catalog
    try:
        schedule = generate_schedule(profile, meals, weeks=request.weeks, seed=request.seed,
                                     event_bus=GLOBAL_EVENT_BUS)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    data = schedule.to_dict()
    repo.save_schedule(data)
    return {"success": True, "data": data, "message": "Meal schedule generated successfully"}


@router.get("/events")
def schedule_events(since: Optional[int] = Query(default=None, ge=0),
                    event_type: Optional[str] = Query(default=None, alias="type"),
                    user_id: Optional[str] = None):
    """Recent generation events for dashboard polling."""
    return get_events(since, event_type, user_id)


@router.post("/swap")
def swap(request: SwapRequest, repo: ScheduleRepository = Depends(get_schedule_repository)):
    current = _latest(repo, request.user_id)
    try:
        updated = swap_meals(current, request.source.model_dump(), request.target.model_dump())
    except SwapError as e:
        raise HTTPException(status_code=400, detail=str(e))
    repo.replace_latest(request.user_id, updated)
    logger.info("Swapped meals for user %s: %s <-> %s", request.user_id,
                request.source.model_dump(), request.target.model_dump())
    return {"success": True, "data": updated, "message": "Meals swapped successfully"}


@router.get("/{user_id}")
def get_schedule(user_id: str, repo: ScheduleRepository = Depends(get_schedule_repository)):
    return {"success": True, "data": _latest(repo, user_id)}


@router.get("/{user_id}/week/{week_number}")
def get_week(user_id: str, week_number: int, repo: ScheduleRepository = Depends(get_schedule_repository)):
    schedule = Schedule.from_dict(_latest(repo, user_id))
    return {"success": True, "data": _week_of(schedule, week_number).to_dict()}


@router.get("/{user_id}/week/{week_number}/nutrition")
def get_week_nutrition(user_id: str, week_number: int,
                       repo: ScheduleRepository = Depends(get_schedule_repository)):
    schedule = Schedule.from_dict(_latest(repo, user_id))
    return compute_week_nutrition(_week_of(schedule, week_number))


@router.get("/{user_id}/week/{week_number}/pdf")
def export_week_pdf(user_id: str, week_number: int,
                    repo: ScheduleRepository = Depends(get_schedule_repository)):
    schedule = Schedule.from_dict(_latest(repo, user_id))
    try:
        pdf_bytes = generate_pdf_for_week(schedule, week_number)
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=meal_schedule_{user_id}_W{week_number}.pdf"
        },
    )


@router.get("/{user_id}/assignments")
def get_assignments(user_id: str, start: Optional[date] = None,
                    repo: ScheduleRepository = Depends(get_schedule_repository)):
    """Flat delivery rows; start defaults to the Monday of the week the schedule was generated."""
    data = _latest(repo, user_id)
    if start is None:
        generated = data.get("generated_at")
        base = datetime.fromisoformat(generated).date() if generated else date.today()
        start = base - timedelta(days=base.weekday())
    rows = build_meal_assignments(data, start)
    return {"success": True, "data": rows, "count": len(rows)}
