"""In-process subscription registry for storefront lifecycle events."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping

logger = logging.getLogger(__name__)

Callback = Callable[[Mapping[str, Any]], Any]


class Analytics:
    """
    Subscription registry keyed by lifecycle event name.

    The host publishes each raw storefront event under its lifecycle name;
    every callback subscribed to that name is invoked in subscription order.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callback]] = {}

    def subscribe(self, name: str, callback: Callback) -> None:
        self._subscribers.setdefault(name, []).append(callback)

    def unsubscribe(self, name: str, callback: Callback) -> bool:
        callbacks = self._subscribers.get(name)
        if not callbacks or callback not in callbacks:
            return False
        callbacks.remove(callback)
        return True

    def subscriptions(self) -> List[str]:
        """Names with at least one subscriber."""
        return [name for name, callbacks in self._subscribers.items() if callbacks]

    def publish(self, name: str, event: Mapping[str, Any]) -> int:
        """Deliver ``event`` to the subscribers of ``name``; returns how many ran."""
        callbacks = list(self._subscribers.get(name, ()))
        if not callbacks:
            logger.debug(f"No subscribers for {name}")
        for callback in callbacks:
            callback(event)
        return len(callbacks)
