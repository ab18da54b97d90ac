import logging

from commerce_pixel.core.events import LifecycleEvent
from commerce_pixel.services import Analytics, Dispatcher, PixelService
from factories import make_checkout, make_event, make_line, make_variant


def _service(sink, settings):
    return PixelService(Dispatcher(sink, debug=settings.debug), settings)


class TestAnalytics:
    def test_publish_calls_subscribers_in_order(self):
        analytics = Analytics()
        seen = []
        analytics.subscribe("page_viewed", lambda e: seen.append(("a", e["id"])))
        analytics.subscribe("page_viewed", lambda e: seen.append(("b", e["id"])))

        assert analytics.publish("page_viewed", {"id": 1}) == 2
        assert seen == [("a", 1), ("b", 1)]

    def test_publish_without_subscribers(self):
        assert Analytics().publish("search_submitted", {}) == 0

    def test_unsubscribe(self):
        analytics = Analytics()
        callback = lambda e: None  # noqa: E731
        analytics.subscribe("cart_viewed", callback)

        assert analytics.unsubscribe("cart_viewed", callback) is True
        assert analytics.unsubscribe("cart_viewed", callback) is False
        assert analytics.subscriptions() == []


class TestPixelService:
    def test_handle_maps_and_dispatches(self, sink, settings):
        service = _service(sink, settings)
        event = make_event({"searchResult": {"query": "socks"}}, clientId="c-2")

        assert service.handle("search_submitted", event) is True
        assert sink.records == [("search", {"search_term": "socks"}, "c-2")]

    def test_handle_returns_false_when_rule_sends_nothing(self, sink, settings):
        service = _service(sink, settings)
        assert service.handle(LifecycleEvent.CART_VIEWED, make_event({})) is False
        assert sink.records == []

    def test_mapping_fault_is_isolated(self, sink, settings, caplog):
        service = _service(sink, settings)

        assert service.handle("checkout_completed", make_event({"checkout": make_checkout([])})) is False
        assert service.handle("unknown_event", make_event()) is False
        assert "handling of checkout_completed failed" in caplog.text
        assert sink.records == []

    def test_subscribe_all_wires_every_lifecycle_event(self, sink, settings):
        analytics = Analytics()
        _service(sink, settings).subscribe_all(analytics)

        assert sorted(analytics.subscriptions()) == sorted(e.value for e in LifecycleEvent)

    def test_bad_event_does_not_stop_the_listener(self, flaky_sink, settings):
        analytics = Analytics()
        _service(flaky_sink, settings).subscribe_all(analytics)
        line = make_line(make_variant(sku="A"), 1, total="10.00")

        analytics.publish("product_added_to_cart", make_event({"cartLine": line}))
        analytics.publish("product_viewed", make_event({}))
        analytics.publish("product_removed_from_cart", make_event({"cartLine": line}))

        assert flaky_sink.calls == 2
        assert flaky_sink.names == ["remove_from_cart"]

    def test_debug_reports_skipped_events(self, sink, debug_settings, caplog):
        service = _service(sink, debug_settings)
        with caplog.at_level(logging.INFO, logger="commerce_pixel.services.pixel_service"):
            service.handle("cart_viewed", make_event({"cart": None}))
        assert "cart_viewed: nothing to send" in caplog.text
