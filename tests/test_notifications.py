"""Notification channel: bounded queue, auto and manual dismissal."""

from __future__ import annotations

from codeshield.notifications import NotificationBus, NotificationVariant


class _Clock:
    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestNotificationBus:
    def test_publish_and_list(self):
        bus = NotificationBus()
        n = bus.success("Done", "All good")
        assert bus.active() == [n]
        assert n.variant is NotificationVariant.SUCCESS

    def test_bounded_queue_drops_oldest(self):
        bus = NotificationBus(limit=2)
        first = bus.publish("1", "one")
        second = bus.publish("2", "two")
        third = bus.publish("3", "three")
        assert bus.active() == [second, third]
        assert first not in bus.active()

    def test_transient_notifications_expire(self):
        clock = _Clock()
        bus = NotificationBus(ttl_seconds=5.0, clock=clock)
        bus.success("Scan complete", "Nothing found")
        clock.now += 4.9
        assert len(bus.active()) == 1
        clock.now += 0.2
        assert bus.active() == []

    def test_errors_wait_for_manual_dismiss(self):
        clock = _Clock()
        bus = NotificationBus(ttl_seconds=5.0, clock=clock)
        err = bus.error("Scan Failed", "Try again")
        clock.now += 3600
        assert bus.active() == [err]
        assert bus.dismiss(err.id) is True
        assert bus.active() == []

    def test_dismiss_unknown(self):
        bus = NotificationBus()
        assert bus.dismiss("nope") is False

    def test_single_subscriber_replaced(self):
        bus = NotificationBus()
        first, second = [], []
        bus.subscribe(first.append)
        bus.subscribe(second.append)
        n = bus.publish("t", "d")
        assert first == []
        assert second == [n]

    def test_as_dict(self):
        bus = NotificationBus()
        data = bus.error("Scan Failed", "Try again").as_dict()
        assert data["variant"] == "destructive"
        assert data["auto_dismiss"] is False
        assert data["dismissible"] is True
        assert data["title"] == "Scan Failed"
