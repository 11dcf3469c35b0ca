import requests

from flowershop.services import notifier as notifier_module
from flowershop.services.notifier import OrderNotifier


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")


def test_disabled_without_url(monkeypatch):
    calls = []
    monkeypatch.setattr(notifier_module.requests, "post", lambda *a, **kw: calls.append(a))

    assert OrderNotifier(webhook_url="").notify("order.created", {"order_id": "ORD-1"}) is False
    assert calls == []


def test_posts_event_with_idempotency_key(monkeypatch):
    calls = []

    def fake_post(url, json=None, timeout=None, headers=None):
        calls.append((url, json, headers))
        return FakeResponse(200)

    monkeypatch.setattr(notifier_module.requests, "post", fake_post)

    ok = OrderNotifier(webhook_url="http://hooks.local/orders").notify(
        "order.status_changed", {"order_id": "ORD-1", "status": "delivered"}
    )
    assert ok is True
    url, body, headers = calls[0]
    assert url == "http://hooks.local/orders"
    assert body == {"event": "order.status_changed", "order_id": "ORD-1", "status": "delivered"}
    assert headers["Idempotency-Key"] == "order.status_changed-ORD-1-delivered"


def test_retries_then_gives_up(monkeypatch):
    attempts = []

    def failing_post(url, **kwargs):
        attempts.append(url)
        raise requests.ConnectionError("down")

    monkeypatch.setattr(notifier_module.requests, "post", failing_post)
    monkeypatch.setattr(notifier_module.time, "sleep", lambda s: None)

    assert OrderNotifier(webhook_url="http://hooks.local", max_retries=3).notify("order.created", {"order_id": "X"}) is False
    assert len(attempts) == 3


def test_recovers_on_later_attempt(monkeypatch):
    responses = iter([FakeResponse(502), FakeResponse(200)])
    monkeypatch.setattr(notifier_module.requests, "post", lambda url, **kw: next(responses))
    monkeypatch.setattr(notifier_module.time, "sleep", lambda s: None)

    assert OrderNotifier(webhook_url="http://hooks.local", max_retries=3).notify("order.created", {"order_id": "X"}) is True
