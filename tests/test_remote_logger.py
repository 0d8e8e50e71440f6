"""
Tests for the remote log sink.
"""

import asyncio
import json

import httpx

from shortlink_app.schemas.log import LogLevel
from shortlink_app.services.remote_logger import RemoteLogSink

ENDPOINT = "http://logs.example.com/api/evaluation-service/logs"


def make_sink(handler, access_token="token123"):
    return RemoteLogSink(
        ENDPOINT,
        access_token=access_token,
        stack="backend",
        package="registry",
        transport=httpx.MockTransport(handler),
    )


class TestRemoteLogSink:

    def test_send_posts_payload(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"message": "log created", "logID": "42"})

        sink = make_sink(handler)

        assert asyncio.run(sink.send(LogLevel.WARNING, "hello")) is True

        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == ENDPOINT
        assert request.headers["Authorization"] == "Bearer token123"
        assert json.loads(request.content) == {
            "stack": "backend",
            "level": "warn",
            "package": "registry",
            "message": "hello",
        }

    def test_error_response_is_swallowed(self):
        sink = make_sink(lambda request: httpx.Response(401, json={"message": "unauthorized"}))

        assert asyncio.run(sink.send(LogLevel.INFO, "hello")) is False

    def test_transport_error_is_swallowed(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        sink = make_sink(handler)

        assert asyncio.run(sink.send(LogLevel.ERROR, "hello")) is False

    def test_no_token_sends_nothing(self):
        requests = []
        sink = make_sink(lambda request: requests.append(request), access_token=None)

        assert asyncio.run(sink.send(LogLevel.INFO, "hello")) is False
        assert requests == []

    def test_dispatch_without_event_loop(self):
        requests = []
        sink = make_sink(lambda request: requests.append(request))

        sink.dispatch(LogLevel.INFO, "hello")

        assert requests == []

    def test_dispatch_is_fire_and_forget(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"message": "ok"})

        sink = make_sink(handler)

        async def scenario():
            sink.dispatch(LogLevel.ERROR, "background")
            assert requests == []  # nothing sent until the loop runs the task
            await asyncio.gather(*list(sink._pending))

        asyncio.run(scenario())

        assert len(requests) == 1
        assert json.loads(requests[0].content)["level"] == "error"
        assert sink._pending == set()
