import json
import logging

import httpx
import pytest

from commerce_pixel.core.exceptions import SinkError, SinkNotInitializedError
from commerce_pixel.settings import PixelSettings
from commerce_pixel.sinks import LoggingSink, MeasurementProtocolSink, build_sink


@pytest.fixture
def captured():
    return []


@pytest.fixture
def client(captured):
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(204)

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def mp_sink(client):
    return MeasurementProtocolSink("G-TEST123", "s3cr3t", client=client, default_client_id="fallback-client")


class TestMeasurementProtocolSink:
    def test_record_before_init_raises(self, mp_sink):
        with pytest.raises(SinkNotInitializedError):
            mp_sink.record("view_item", {"value": 1.0})

    def test_init_is_idempotent(self, mp_sink, caplog):
        mp_sink.init()
        with caplog.at_level(logging.INFO):
            mp_sink.init()
        assert mp_sink.initialized
        assert "already loaded" in caplog.text

    def test_posts_one_event(self, mp_sink, captured):
        mp_sink.init()
        mp_sink.record("purchase", {"currency": "EUR", "value": 25.5, "items": []}, client_id="c-7")

        [request] = captured
        assert request.method == "POST"
        assert request.url.params["measurement_id"] == "G-TEST123"
        assert request.url.params["api_secret"] == "s3cr3t"
        body = json.loads(request.content)
        assert body == {
            "client_id": "c-7",
            "events": [{"name": "purchase", "params": {"currency": "EUR", "value": 25.5, "items": []}}],
        }

    def test_uses_default_client_id(self, mp_sink, captured):
        mp_sink.init()
        mp_sink.record("search", {"search_term": "mug"})
        assert json.loads(captured[0].content)["client_id"] == "fallback-client"

    def test_http_error_becomes_sink_error(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
        sink = MeasurementProtocolSink("G-TEST123", "s3cr3t", client=client)
        sink.init()
        with pytest.raises(SinkError):
            sink.record("view_cart", {"value": 1.0})

    def test_injected_client_is_not_closed(self, mp_sink, client):
        mp_sink.init()
        mp_sink.close()
        assert not client.is_closed

    def test_from_settings_requires_credentials(self, settings):
        with pytest.raises(SinkError):
            MeasurementProtocolSink.from_settings(settings)

    def test_from_settings(self, client):
        configured = PixelSettings(_env_file=None, measurement_id="G-ABC", api_secret="x", timeout_seconds=2.0)
        sink = MeasurementProtocolSink.from_settings(configured, client=client)
        assert sink.measurement_id == "G-ABC"
        assert sink.timeout == 2.0


    def test_debug_banner_reports_tag_ids(self, client, caplog):
        configured = PixelSettings(
            _env_file=None,
            measurement_id="G-ABC",
            api_secret="x",
            debug=True,
            google_tag_id="GT-CONTAINER",
            ga4_id="G-PROPERTY",
            google_ads_id="AW-12345",
            merchant_center_id="MC-678",
        )
        sink = MeasurementProtocolSink.from_settings(configured, client=client)
        with caplog.at_level(logging.INFO):
            sink.init()
        for tag_id in ("GT-CONTAINER", "G-PROPERTY", "AW-12345", "MC-678"):
            assert tag_id in caplog.text
        assert "SKU-based" in caplog.text

    def test_no_banner_without_debug(self, mp_sink, caplog):
        with caplog.at_level(logging.INFO):
            mp_sink.init()
        assert "Container" not in caplog.text


class TestBuildSink:
    def test_logging_sink_without_credentials(self, settings):
        assert isinstance(build_sink(settings), LoggingSink)

    def test_measurement_protocol_with_credentials(self):
        configured = PixelSettings(_env_file=None, measurement_id="G-ABC", api_secret="x")
        sink = build_sink(configured)
        assert isinstance(sink, MeasurementProtocolSink)
        assert not sink.initialized


class TestLoggingSink:
    def test_logs_events_after_init(self, caplog):
        sink = LoggingSink()
        sink.init()
        with caplog.at_level(logging.INFO, logger="commerce_pixel.sinks.logging_sink"):
            sink.record("view_item", {"value": 3.0}, client_id="c-1")
        assert "view_item" in caplog.text
        assert "c-1" in caplog.text

    def test_requires_init(self):
        with pytest.raises(SinkNotInitializedError):
            LoggingSink().record("view_item", {})

    def test_debug_banner_from_build_sink(self, settings, caplog):
        configured = settings.model_copy(update={"debug": True, "ga4_id": "G-PROPERTY", "google_ads_id": "AW-12345"})
        sink = build_sink(configured)
        with caplog.at_level(logging.INFO):
            sink.init()
        assert "GA4: G-PROPERTY" in caplog.text
        assert "Google Ads: AW-12345" in caplog.text
