import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from meal_scheduler.infra.paths import SCHEDULES_FILE
from meal_scheduler.utilities.config import MAX_STORED_SCHEDULES
from meal_scheduler.utilities.errors import ScheduleNotFoundError

logger = logging.getLogger(__name__)


class ScheduleRepository:
    """JSON-file store of serialized schedules: { user_id: [schedule, ...] }, newest last."""

    def __init__(self, path: Optional[Path] = None, max_per_user: int = MAX_STORED_SCHEDULES):
        self.path = Path(path or SCHEDULES_FILE)
        self.max_per_user = max_per_user

    def _load(self) -> Dict[str, list]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                store = json.load(f) or {}
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in schedules file %s: %s", self.path, e)
            return {}
        return store if isinstance(store, dict) else {}

    def _save(self, store: Dict[str, list]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(store, f, indent=2, ensure_ascii=False)

    def save_schedule(self, schedule: Dict[str, Any]) -> None:
        store = self._load()
        key = str(schedule.get("user_id"))
        history = store.setdefault(key, [])
        history.append(schedule)
        # Keep only the most recent schedules per user
        del history[: max(0, len(history) - self.max_per_user)]
        self._save(store)
        logger.info("Stored schedule for user %s (%s kept)", key, len(history))

    def get_latest(self, user_id) -> Dict[str, Any]:
        history = self._load().get(str(user_id)) or []
        if not history:
            raise ScheduleNotFoundError(f"No meal schedule found for user {user_id}")
        return history[-1]

    def replace_latest(self, user_id, schedule: Dict[str, Any]) -> None:
        store = self._load()
        history = store.get(str(user_id)) or []
        if not history:
            raise ScheduleNotFoundError(f"No meal schedule found for user {user_id}")
        history[-1] = schedule
        self._save(store)
