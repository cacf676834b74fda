"""createChatCompletion adapter against a fake transport."""

from __future__ import annotations

import json

import pytest

from crux_streaming.base.dto import ModelProps
from crux_streaming.base.errors import InvalidPromptStructure, InvalidTokenBias
from crux_streaming.base.logging import TRACE
from crux_streaming.base.models import Message
from crux_streaming.openai import chat_complete, chat_message, render_messages, stream_chat_completion
from crux_streaming.prompt import AssistantMessage, Element, PromptRenderer, SystemMessage, UserMessage

from .helpers import FakeTokenizer, FakeTransport, chat_event, split_every, sse

PROPS = ModelProps(model="gpt-3.5-turbo", max_tokens=64)

PROMPT = [
    SystemMessage("You are terse."),
    "loose text is dropped",
    UserMessage(["Hello ", Element(children="there")], name="ada"),
    AssistantMessage("Hi."),
    UserMessage("Again"),
]


def _transport(*deltas, size=None):
    data = sse(*(chat_event(**d) for d in deltas), "[DONE]")
    return FakeTransport(chunks=split_every(data, size) if size else [data])


async def _collect(stream):
    return [value async for value in stream]


@pytest.mark.asyncio
async def test_emits_placeholder_then_cumulative_content():
    transport = _transport({"role": "assistant"}, {"content": "Hi"}, {"content": " there"}, {}, size=4)
    assert await _collect(stream_chat_completion(PROPS, UserMessage("hey"), transport=transport)) == [
        "",
        "Hi",
        "Hi there",
    ]


@pytest.mark.asyncio
async def test_chat_message_returns_streamed_role():
    transport = _transport({"role": "assistant"}, {"content": "Hi"}, {"content": " there"})
    message = await chat_message(PROPS, UserMessage("hey"), transport=transport)
    assert message == Message(role="assistant", content="Hi there")


@pytest.mark.asyncio
async def test_messages_payload_preserves_order_and_user_name():
    transport = _transport({"content": "ok"})
    assert await chat_complete(PROPS, PROMPT, transport=transport) == "ok"
    operation, payload = transport.calls[0]
    assert operation == "createChatCompletion"
    assert payload["messages"] == [
        {"role": "system", "content": "You are terse."},
        {"role": "user", "content": "Hello there", "name": "ada"},
        {"role": "assistant", "content": "Hi."},
        {"role": "user", "content": "Again"},
    ]
    assert payload["stream"] is True
    assert payload["model"] == "gpt-3.5-turbo"
    assert payload["max_tokens"] == 64
    assert "logit_bias" not in payload
    assert "temperature" not in payload


@pytest.mark.asyncio
async def test_messages_nested_in_plain_elements_are_found():
    messages = await render_messages(PromptRenderer(), Element(children=[SystemMessage("s"), UserMessage("u")]))
    assert [m.role for m in messages] == ["system", "user"]


class _ForeignRenderer:
    """Renderer that hands back a structural node the chat adapter does not know."""

    class Tool(Element):
        pass

    async def render(self, node, stop=None):
        if stop is None:
            return "text"
        return [UserMessage("u"), "\n", self.Tool()]


@pytest.mark.asyncio
async def test_unknown_node_raises_before_request():
    transport = _transport({"content": "x"})
    stream = stream_chat_completion(PROPS, "ignored", renderer=_ForeignRenderer(), transport=transport)
    with pytest.raises(InvalidPromptStructure) as info:
        await stream.__anext__()
    assert info.value.tag == "Tool"
    assert "this child was Tool" in str(info.value)
    assert transport.calls == []


@pytest.mark.asyncio
async def test_invalid_bias_raises_before_placeholder():
    transport = _transport({"content": "x"})
    props = PROPS.merged(logit_bias={"abc": 1})
    stream = stream_chat_completion(props, UserMessage("u"), transport=transport, tokenizer=FakeTokenizer())
    with pytest.raises(InvalidTokenBias):
        await stream.__anext__()
    assert transport.calls == []


@pytest.mark.asyncio
async def test_bias_is_encoded_for_chat():
    transport = _transport({"content": "x"})
    props = PROPS.merged(logit_bias={"Yes": 100})
    await chat_complete(props, UserMessage("u"), transport=transport, tokenizer=FakeTokenizer({"Yes": 9642}))
    assert transport.calls[0][1]["logit_bias"] == {9642: 100}


@pytest.mark.asyncio
async def test_closing_early_releases_the_response():
    transport = _transport({"role": "assistant"}, {"content": "a"}, {"content": "b"}, size=1)
    stream = stream_chat_completion(PROPS, UserMessage("u"), transport=transport)
    assert await stream.__anext__() == ""
    assert await stream.__anext__() == "a"
    await stream.aclose()
    assert transport.open is False


@pytest.mark.asyncio
async def test_content_never_shrinks():
    deltas = [{"role": "assistant"}] + [{"content": c} for c in ["a", "bc", "", "d"]]
    values = await _collect(stream_chat_completion(PROPS, UserMessage("u"), transport=_transport(*deltas, size=2)))
    assert values == ["", "a", "abc", "abcd"]
    for before, after in zip(values, values[1:]):
        assert after.startswith(before)


@pytest.mark.asyncio
async def test_finished_event_logs_message(log_records):
    await chat_complete(PROPS, UserMessage("u"), transport=_transport({"role": "assistant"}, {"content": "x"}))
    finished = [json.loads(r.getMessage()) for r in log_records if "finished" in r.getMessage()]
    assert finished[0]["message"] == {"role": "assistant", "content": "x"}
    assert finished[0]["operation"] == "createChatCompletion"


@pytest.mark.asyncio
async def test_trace_event_records_carry_the_decoded_event(log_records):
    deltas = ({"role": "assistant"}, {"content": "x"})
    await chat_complete(PROPS, UserMessage("u"), transport=_transport(*deltas))
    traced = [json.loads(r.getMessage()) for r in log_records if r.levelno == TRACE]
    assert [p["data"] for p in traced] == [chat_event(**d) for d in deltas]
    assert all(p["event"] == "createChatCompletion.event" for p in traced)


class _TextOnlyRenderer:
    """Renderer whose stop-aware render returns a bare string."""

    def __init__(self) -> None:
        self.calls = 0

    async def render(self, node, stop=None):
        self.calls += 1
        return "no messages here"


@pytest.mark.asyncio
async def test_plain_string_render_yields_no_messages():
    renderer = _TextOnlyRenderer()
    assert await render_messages(renderer, "no messages here") == []
    assert renderer.calls == 1


@pytest.mark.asyncio
async def test_plain_string_render_sends_empty_message_list():
    transport = _transport({"content": "x"})
    await chat_complete(PROPS, "ignored", renderer=_TextOnlyRenderer(), transport=transport)
    assert transport.calls[0][1]["messages"] == []
