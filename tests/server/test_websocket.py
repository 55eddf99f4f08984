"""Tests for the WebSocket request and subscription endpoint."""

import pytest

from tests.server.conftest import GGA_LINE, deliver


class TestRequests:
    """Tests for get/subscribe/unsubscribe requests over /gps/ws."""

    def test_get(self, client):
        with client.websocket_connect("/gps/ws") as ws:
            ws.send_json({"verb": "get", "type": "DMS.kn", "request": 7})
            assert ws.receive_json() == {"request": 7, "response": {"type": "DMS.kn"}}

    def test_subscribe_reply(self, client, context):
        with client.websocket_connect("/gps/ws") as ws:
            ws.send_json({"verb": "subscribe", "type": "WGS84", "period": 1000})
            reply = ws.receive_json()
            assert reply["request"] is None
            assert reply["response"]["name"] == "gps"
            assert reply["response"]["id"] in context.registry

    def test_unsubscribe(self, client, context):
        with client.websocket_connect("/gps/ws") as ws:
            ws.send_json({"verb": "subscribe"})
            subscription_id = ws.receive_json()["response"]["id"]
            ws.send_json({"verb": "unsubscribe", "id": subscription_id, "request": "u"})
            assert ws.receive_json() == {"request": "u", "response": None}
            assert subscription_id not in context.registry

    @pytest.mark.parametrize(
        ("request_body", "error"),
        [
            ({"verb": "get", "type": "nope"}, "unknown-type"),
            ({"verb": "subscribe", "type": "WGS84", "period": "soon"}, "failed"),
            ({"verb": "unsubscribe"}, "missing-id"),
            ({"verb": "unsubscribe", "id": 12345}, "bad-id"),
            ({"verb": "unsubscribe", "id": "twelve"}, "bad-id"),
            ({"verb": "teleport"}, "unknown-verb"),
        ],
    )
    def test_errors(self, client, request_body, error):
        with client.websocket_connect("/gps/ws") as ws:
            ws.send_json(request_body)
            reply = ws.receive_json()
            assert reply["error"] == error
            assert isinstance(reply["info"], str)

    def test_invalid_json(self, client):
        with client.websocket_connect("/gps/ws") as ws:
            ws.send_text("{not json")
            assert ws.receive_json()["error"] == "bad-request"

    def test_non_object_request(self, client):
        with client.websocket_connect("/gps/ws") as ws:
            ws.send_text("[1, 2]")
            assert ws.receive_json()["error"] == "bad-request"

    def test_cannot_unsubscribe_other_session(self, client):
        with client.websocket_connect("/gps/ws") as first, client.websocket_connect("/gps/ws") as second:
            first.send_json({"verb": "subscribe"})
            subscription_id = first.receive_json()["response"]["id"]
            second.send_json({"verb": "unsubscribe", "id": subscription_id})
            assert second.receive_json()["error"] == "bad-id"


class TestSubscriptionEvents:
    """Tests for pushed subscription events."""

    def test_event_after_upstream_data(self, client):
        with client.websocket_connect("/gps/ws") as ws:
            ws.send_json({"verb": "subscribe", "type": "DMS.kn", "period": 1000})
            subscription_id = ws.receive_json()["response"]["id"]
            deliver(client, GGA_LINE)
            event = ws.receive_json()
            assert event["event"] == "gps"
            assert event["id"] == subscription_id
            assert event["data"]["type"] == "DMS.kn"
            assert event["data"]["latitude"] == "48°7'2.280\"N"

    def test_each_subscription_gets_its_own_event(self, client):
        with client.websocket_connect("/gps/ws") as ws:
            ws.send_json({"verb": "subscribe", "type": "WGS84", "period": 1000})
            first = ws.receive_json()["response"]["id"]
            ws.send_json({"verb": "subscribe", "type": "DMS.mph", "period": 1000})
            second = ws.receive_json()["response"]["id"]
            deliver(client, GGA_LINE)
            received = {ws.receive_json()["id"] for _ in range(2)}
            assert received == {first, second}

    def test_closed_session_subscriptions_are_dropped(self, client, context):
        with client.websocket_connect("/gps/ws") as ws:
            ws.send_json({"verb": "subscribe", "period": 1000})
            subscription_id = ws.receive_json()["response"]["id"]
        assert subscription_id in context.registry
        deliver(client, GGA_LINE)
        assert subscription_id not in context.registry
