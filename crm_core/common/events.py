# backend/crm_core/common/events.py
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

Handler = Callable[[Dict[str, Any]], None]

logger = logging.getLogger(__name__)

_registry: Dict[str, List[Handler]] = defaultdict(list)


def subscribe(event_name: str):
    """
    Decorator to register an event handler.
    Usage:
        @subscribe("enquiry.created")
        def handler(payload): ...
    """
    def _decorator(fn: Handler) -> Handler:
        if fn not in _registry[event_name]:
            _registry[event_name].append(fn)
        return fn
    return _decorator


def publish(event_name: str, payload: Dict[str, Any]) -> None:
    """
    Publish an event to in-process subscribers.
    Keep payloads ID-based to avoid cross-app imports.
    Handlers own their error policy; a raising handler propagates.
    """
    handlers = _registry.get(event_name, [])
    logger.debug("Publishing %s to %d handler(s)", event_name, len(handlers))
    for handler in handlers:
        handler(payload)
