"""Recent schedule-generation events for the admin dashboard.

start() subscribes one recorder to every "schedule.*" event of a bus. The
recorder keeps the latest MAX_EVENTS entries, each with an increasing integer
id, so the dashboard can poll with since=<last id seen> and spot users whose
filtered catalog is too thin to fill their slots.
"""
from __future__ import annotations
import itertools
import logging
from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Deque, Dict, List, Optional

from .Event_Bus import EventBus, GLOBAL_EVENT_BUS, SCHEDULE_ALL

logger = logging.getLogger(__name__)

MAX_EVENTS = 300

_lock = Lock()
_buffer: Deque[Dict[str, Any]] = deque(maxlen=MAX_EVENTS)
_ids = itertools.count(1)
_last_id = 0
_attached: List[EventBus] = []

_KEPT_FIELDS = ('user_id', 'week', 'day', 'category', 'weeks', 'total_meals', 'five_star_meals',
                'five_star_budget', 'eligible_meals')


def _record(event_name: str, payload: Any):
    global _last_id
    fields = payload if isinstance(payload, dict) else {}
    with _lock:
        _last_id = next(_ids)
        entry = {'id': _last_id, 'type': event_name, 'ts': datetime.now(timezone.utc).isoformat()}
        entry.update({k: fields[k] for k in _KEPT_FIELDS if k in fields})
        _buffer.append(entry)


def start(bus: Optional[EventBus] = None):
    """Attach the recorder to a bus (the global one by default); repeated calls are no-ops."""
    bus = bus or GLOBAL_EVENT_BUS
    if any(b is bus for b in _attached):
        return
    bus.subscribe(SCHEDULE_ALL, _record)
    _attached.append(bus)
    logger.info("Schedule event recorder attached")


def get_events(since: Optional[int] = None, event_type: Optional[str] = None,
               user_id: Optional[str] = None) -> Dict[str, Any]:
    """Buffered events newer than `since` (exclusive), optionally narrowed by type and user.

    next_cursor is the newest id recorded so far, whatever the filters matched.
    """
    with _lock:
        events = [e for e in _buffer if since is None or e['id'] > since]
        next_cursor = _last_id or since or 0
    if event_type:
        events = [e for e in events if e['type'] == event_type]
    if user_id is not None:
        events = [e for e in events if str(e.get('user_id')) == str(user_id)]
    return {'events': events, 'next_cursor': next_cursor}


__all__ = ['MAX_EVENTS', 'get_events', 'start']
