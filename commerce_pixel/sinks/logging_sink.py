"""Dry-run sink that only logs the events it receives."""

import json
import logging
from typing import Any, Dict, Optional

from commerce_pixel.core.exceptions import SinkNotInitializedError
from commerce_pixel.sinks.base import AnalyticsSink

logger = logging.getLogger(__name__)


class LoggingSink(AnalyticsSink):
    """Writes each event to the log instead of sending it anywhere."""

    def init(self) -> None:
        if not self._initialized:
            logger.info("Logging sink ready (events are not forwarded)")
            self.log_banner("Logging sink loaded")
        super().init()

    def record(
        self,
        event_name: str,
        payload: Dict[str, Any],
        *,
        client_id: Optional[str] = None,
    ) -> None:
        if not self._initialized:
            raise SinkNotInitializedError("LoggingSink.record() called before init()")
        logger.info(f"[{client_id or '-'}] {event_name}: {json.dumps(payload, default=str)}")
