"""HttpxTransport wiring, exercised through ``httpx.MockTransport``."""

from __future__ import annotations

import json

import httpx
import pytest

from crux_streaming.base.dto import ModelProps
from crux_streaming.base.errors import ErrorCode, ProviderError, UpstreamRequestError
from crux_streaming.base.http import HttpxTransport
from crux_streaming.config.defaults import OPENAI_OPERATION_PATHS
from crux_streaming.openai import complete, stream_chat_completion
from crux_streaming.prompt import UserMessage

from .helpers import chat_event, completion_event, sse


def _transport(handler, **kwargs) -> HttpxTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxTransport(
        api_key=kwargs.pop("api_key", "sk-live"),
        base_url="https://api.example.test/v1/",
        operation_paths=OPENAI_OPERATION_PATHS,
        client=client,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_completion_request_and_stream():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["org"] = request.headers.get("openai-organization")
        seen["body"] = json.loads(request.content)
        body = sse(completion_event("4"), completion_event("2"), "[DONE]")
        return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})

    transport = _transport(handler, organization="org-1")
    props = ModelProps(model="text-davinci-003", logit_bias={"x": 3})

    class OneToken:
        def encode(self, text):
            return [7]

    assert await complete(props, "6*7=", transport=transport, tokenizer=OneToken()) == "42"
    assert seen["url"] == "https://api.example.test/v1/completions"
    assert seen["auth"] == "Bearer sk-live"
    assert seen["org"] == "org-1"
    assert seen["body"]["stream"] is True
    assert seen["body"]["logit_bias"] == {"7": 3}


@pytest.mark.asyncio
async def test_chat_path_and_no_auth_header_without_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, content=sse(chat_event(role="assistant"), chat_event(content="ok")))

    values = [v async for v in stream_chat_completion(ModelProps(model="gpt-3.5-turbo"), UserMessage("u"), transport=_transport(handler, api_key=None))]
    assert values == ["", "ok"]
    assert seen == {"path": "/v1/chat/completions", "auth": None}


@pytest.mark.asyncio
async def test_error_status_is_returned_not_raised_by_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})

    with pytest.raises(UpstreamRequestError) as info:
        await complete(ModelProps(model="m"), "q", transport=_transport(handler))
    assert info.value.code is ErrorCode.AUTH
    assert info.value.message.endswith(": Incorrect API key provided")


@pytest.mark.asyncio
async def test_connection_failure_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(ProviderError) as info:
        await complete(ModelProps(model="m"), "q", transport=_transport(handler))
    assert info.value.code is ErrorCode.TIMEOUT
    assert info.value.retryable is True
    assert isinstance(info.value.raw, httpx.ConnectTimeout)


@pytest.mark.asyncio
async def test_unknown_operation_is_unsupported():
    transport = _transport(lambda request: httpx.Response(200))
    with pytest.raises(ProviderError) as info:
        async with transport.stream("createEdit", {"model": "m"}):
            pass
    assert info.value.code is ErrorCode.UNSUPPORTED
