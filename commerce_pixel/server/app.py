from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request

from commerce_pixel.core.events import resolve_event_type
from commerce_pixel.core.exceptions import UnknownEventError
from commerce_pixel.services import Analytics, Dispatcher, PixelService
from commerce_pixel.settings import PixelSettings, get_settings
from commerce_pixel.sinks import AnalyticsSink, build_sink

from .schemas import EventAccepted, HealthResponse, StorefrontEvent

logger = logging.getLogger(__name__)


def create_app(settings: Optional[PixelSettings] = None, sink: Optional[AnalyticsSink] = None) -> FastAPI:
    """Build the ingest app. The sink is created from settings unless injected."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise the sink once and wire every lifecycle subscription."""
        logging.basicConfig(level=settings.log_level)
        active_sink = sink or build_sink(settings)
        active_sink.init()

        analytics = Analytics()
        service = PixelService(Dispatcher(active_sink, debug=settings.debug), settings)
        service.subscribe_all(analytics)

        app.state.sink = active_sink
        app.state.analytics = analytics
        logger.info(f"Commerce pixel ready: sink={type(active_sink).__name__}, currency={settings.currency}")

        yield

        logger.info("Closing analytics sink")
        active_sink.close()

    app = FastAPI(title="Commerce Pixel", version="0.1.0", lifespan=lifespan)

    def _publish(request: Request, event_name: Optional[str], body: StorefrontEvent) -> EventAccepted:
        if not event_name:
            raise HTTPException(status_code=422, detail="Event name is required")
        try:
            lifecycle = resolve_event_type(event_name)
        except UnknownEventError as e:
            raise HTTPException(status_code=404, detail=str(e))

        analytics: Analytics = request.app.state.analytics
        count = analytics.publish(lifecycle.value, body.to_event())
        return EventAccepted(event=lifecycle.value, subscribers=count)

    @app.post("/events", response_model=EventAccepted)
    def ingest_event(body: StorefrontEvent, request: Request):
        """Accept a storefront event whose lifecycle name is in the body."""
        return _publish(request, body.name, body)

    @app.post("/events/{event_name}", response_model=EventAccepted)
    def ingest_named_event(event_name: str, body: StorefrontEvent, request: Request):
        return _publish(request, event_name, body)

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request):
        active_sink: AnalyticsSink = request.app.state.sink
        return HealthResponse(
            status="ok",
            sink=type(active_sink).__name__,
            sink_initialized=active_sink.initialized,
            subscriptions=request.app.state.analytics.subscriptions(),
        )

    return app


def main() -> None:
    import uvicorn

    uvicorn.run("commerce_pixel.server.app:create_app", factory=True, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
