from fastapi import FastAPI
import logging

from meal_scheduler.api.routes import meals, schedule
from meal_scheduler.events.web_observers import start as start_event_observers
from meal_scheduler.utilities.config import DEBUG

# Logging
logger = logging.getLogger("meal_scheduler")

# Initialize FastAPI app
app = FastAPI(title="Meal Scheduler API", debug=DEBUG)

# Include routers
app.include_router(meals.router)
app.include_router(schedule.router)


@app.on_event("startup")
def _startup_event_observers():
    """Register event bus subscribers for the schedule dashboard when the app starts."""
    start_event_observers()
    logger.info("Meal Scheduler API ready")


@app.get("/health")
def health():
    return {"status": "ok"}
