"""
Pytest configuration and fixtures for devicename tests.

The HTTP app is exercised through httpx.ASGITransport, which makes async
requests directly to the ASGI app without running a server.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from devicename.fastapi.mainapp import app
from devicename.i18n import Translator
from devicename.util import runtime


class EchoTranslator:
    """Fake translator that renders its key and params and records each call."""

    def __init__(self):
        self.calls: list[tuple[str, dict, str]] = []

    def __call__(self, key, params, locale) -> str:
        self.calls.append((key, dict(params), locale))
        args = ",".join(f"{k}={v}" for k, v in sorted(params.items()))
        return f"{key}({args})"

    @property
    def keys(self) -> list[str]:
        return [key for key, _params, _locale in self.calls]


@pytest.fixture
def echo() -> EchoTranslator:
    return EchoTranslator()


@pytest.fixture(scope="session")
def translator() -> Translator:
    """Translator over the bundled catalogs."""
    return Translator()


@pytest.fixture
def runtime_config(monkeypatch):
    """Install a RuntimeConfig for the app; returns a setter."""
    monkeypatch.delenv(runtime.ENV_VAR, raising=False)
    runtime.load_config.cache_clear()

    def install(**kwargs) -> runtime.RuntimeConfig:
        config = runtime.RuntimeConfig(**kwargs)
        runtime.export_config(config)
        return config

    yield install
    os.environ.pop(runtime.ENV_VAR, None)
    runtime.load_config.cache_clear()


@pytest_asyncio.fixture(scope="function")
async def client(runtime_config) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async test client for the FastAPI app."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://localhost:4402",
    ) as client:
        yield client
