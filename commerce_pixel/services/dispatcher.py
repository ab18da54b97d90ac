"""
Delivery of canonical events to the analytics sink.

Every call that could fail on behalf of a single storefront event goes
through ``isolate_faults``: the fault is logged and swallowed so one bad
event never stops the listener or the events after it.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Optional, TypeVar

from commerce_pixel.core.payload import CanonicalEvent
from commerce_pixel.sinks.base import AnalyticsSink

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def isolate_faults(describe: Optional[Callable[..., str]] = None, *, default: Any = None) -> Callable[[F], F]:
    """
    Decorator that logs and swallows any exception raised by the call.

    Args:
        describe: builds a label from the call's arguments for the log line
            (defaults to the function's qualified name)
        default: value returned when the call failed
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception:
                label = describe(*args, **kwargs) if describe is not None else func.__qualname__
                logger.exception(f"[Web Pixel] {label} failed")
                return default

        return wrapper  # type: ignore[return-value]

    return decorator


class Dispatcher:
    """Sends canonical events to a single sink, one call per event."""

    def __init__(self, sink: AnalyticsSink, *, debug: bool = False):
        self.sink = sink
        self.debug = debug

    @isolate_faults(lambda self, event: f"dispatch of {event.name}", default=False)
    def dispatch(self, event: CanonicalEvent) -> bool:
        """Record ``event`` on the sink. Returns False if the sink raised."""
        self.sink.record(event.name, event.payload, client_id=event.client_id)
        if self.debug:
            logger.info(f"[Web Pixel] {event.name} {event.payload}")
        return True
