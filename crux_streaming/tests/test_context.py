from __future__ import annotations

import asyncio

import pytest

from crux_streaming.base.http import HttpxTransport
from crux_streaming.openai.context import get_transport, reset_default_transport, transport_from_config, use_transport

from .helpers import FakeTransport


def test_default_transport_is_built_from_config_and_reused(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://local/v1")
    default = get_transport()
    assert isinstance(default, HttpxTransport)
    assert default is get_transport()
    assert default._headers()["Authorization"] == "Bearer sk-abc"
    assert default._url("createCompletion") == "http://local/v1/completions"
    reset_default_transport()
    assert get_transport() is not default


def test_use_transport_scopes_and_nests():
    outer, inner = FakeTransport(), FakeTransport()
    with use_transport(outer):
        assert get_transport() is outer
        with use_transport(inner):
            assert get_transport() is inner
        assert get_transport() is outer
    assert isinstance(get_transport(), HttpxTransport)


@pytest.mark.asyncio
async def test_binding_is_isolated_per_task():
    a, b = FakeTransport(), FakeTransport()

    async def observe(transport):
        with use_transport(transport):
            await asyncio.sleep(0)
            return get_transport()

    first, second = await asyncio.gather(observe(a), observe(b))
    assert first is a
    assert second is b


def test_transport_from_config_overrides():
    transport = transport_from_config(api_key="sk-x", organization="org-2")
    headers = transport._headers()
    assert headers["Authorization"] == "Bearer sk-x"
    assert headers["OpenAI-Organization"] == "org-2"
