"""Small publish/subscribe bus used to trace schedule generation.

Event names used so far:
  schedule.slot_unfilled -> payload {"user_id", "week", "day", "category"}
  schedule.week_generated -> payload {"user_id", "week", "total_meals", "five_star_meals", "five_star_budget"}
  schedule.generated -> payload {"user_id", "weeks", "total_meals", "five_star_meals", "eligible_meals"}

Subscribers are callables taking (event_name, payload). Subscribing to
"<namespace>.*" (e.g. "schedule.*") receives every event of that namespace.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, Any], None]

SCHEDULE_SLOT_UNFILLED = "schedule.slot_unfilled"
SCHEDULE_WEEK_GENERATED = "schedule.week_generated"
SCHEDULE_GENERATED = "schedule.generated"
SCHEDULE_ALL = "schedule.*"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Subscriber):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Subscriber):
		if callback in self._subscribers.get(event_name, []):
			self._subscribers[event_name].remove(callback)

	def listeners(self, event_name: str) -> List[Subscriber]:
		"""Exact subscribers first, then namespace wildcard ones (each callback once)."""
		found = list(self._subscribers.get(event_name, []))
		namespace = event_name.split('.', 1)[0]
		for cb in self._subscribers.get(f"{namespace}.*", []):
			if cb not in found:
				found.append(cb)
		return found

	def publish(self, event_name: str, payload: Any) -> int:
		"""Deliver to every listener; returns how many received the event without failing."""
		delivered = 0
		for cb in self.listeners(event_name):
			try:
				cb(event_name, payload)
				delivered += 1
			except Exception:
				# A broken listener must not abort schedule generation
				logger.exception("Subscriber %r failed on %s", cb, event_name)
		return delivered


# Process-wide bus the HTTP layer passes to the generator
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'Subscriber',
	'SCHEDULE_SLOT_UNFILLED', 'SCHEDULE_WEEK_GENERATED', 'SCHEDULE_GENERATED', 'SCHEDULE_ALL'
]
