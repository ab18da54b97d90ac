"""Google Analytics 4 sink using the Measurement Protocol over HTTP."""

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from commerce_pixel.core.exceptions import SinkError, SinkNotInitializedError
from commerce_pixel.settings import PixelSettings
from commerce_pixel.sinks.base import AnalyticsSink, tag_ids

logger = logging.getLogger(__name__)


class MeasurementProtocolSink(AnalyticsSink):
    """
    Sends canonical events to a GA4 property via the Measurement Protocol.

    Each ``record()`` is a single POST of one event to the collect endpoint.
    There is no retry and no buffering: a failed request raises SinkError
    and the event is dropped by the dispatcher.

    Attributes:
        measurement_id: GA4 measurement id (G-XXXXXXX).
        endpoint: collect URL.
        timeout: HTTP timeout in seconds.
        default_client_id: client_id sent when an event carries none.
        debug: log a banner on init and each successful send.
    """

    def __init__(
        self,
        measurement_id: str,
        api_secret: str,
        *,
        endpoint: str = "https://www.google-analytics.com/mp/collect",
        timeout: float = 5.0,
        default_client_id: str = "commerce-pixel",
        tag_ids: Optional[Mapping[str, str]] = None,
        debug: bool = False,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the sink.

        Args:
            measurement_id: GA4 measurement id.
            api_secret: Measurement Protocol API secret.
            endpoint: collect URL (the /debug/mp/collect URL validates only).
            timeout: request timeout in seconds.
            default_client_id: fallback client_id.
            tag_ids: Google tag ids reported in the debug banner.
            debug: enable diagnostic logging.
            client: injected httpx client; created lazily in init() otherwise.
        """
        super().__init__(debug=debug, tag_ids=tag_ids)
        self.measurement_id = measurement_id
        self._api_secret = api_secret
        self.endpoint = endpoint
        self.timeout = timeout
        self.default_client_id = default_client_id
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_settings(cls, settings: PixelSettings, client: Optional[httpx.Client] = None) -> "MeasurementProtocolSink":
        if not settings.measurement_id or settings.api_secret is None:
            raise SinkError("Measurement Protocol sink needs PIXEL_MEASUREMENT_ID and PIXEL_API_SECRET")
        return cls(
            settings.measurement_id,
            settings.api_secret.get_secret_value(),
            endpoint=settings.endpoint,
            timeout=settings.timeout_seconds,
            default_client_id=settings.default_client_id,
            tag_ids=tag_ids(settings),
            debug=settings.debug,
            client=client,
        )

    def init(self) -> None:
        """Open the HTTP client once; later calls only report it is loaded."""
        if self._initialized:
            logger.info(f"Measurement Protocol sink already loaded for {self.measurement_id}")
            return

        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        super().init()

        self.log_banner(f"Measurement Protocol sink loaded: {self.measurement_id} -> {self.endpoint}")

    def build_body(self, event_name: str, payload: Dict[str, Any], client_id: Optional[str] = None) -> Dict[str, Any]:
        """Request body for a single event."""
        return {
            "client_id": client_id or self.default_client_id,
            "events": [{"name": event_name, "params": payload}],
        }

    def record(
        self,
        event_name: str,
        payload: Dict[str, Any],
        *,
        client_id: Optional[str] = None,
    ) -> None:
        if not self._initialized or self._client is None:
            raise SinkNotInitializedError("MeasurementProtocolSink.record() called before init()")

        try:
            resp = self._client.post(
                self.endpoint,
                params={"measurement_id": self.measurement_id, "api_secret": self._api_secret},
                json=self.build_body(event_name, payload, client_id),
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise SinkError(f"Measurement Protocol request for {event_name} failed: {e}") from e

        if self.debug:
            logger.info(f"Sent {event_name} (HTTP {resp.status_code})")

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None
            self._initialized = False
