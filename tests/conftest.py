from __future__ import annotations

import os
from types import SimpleNamespace

import pytest

# main.py reads settings at import time for CORS
os.environ.setdefault("OPENAI_API_KEY", "test-key")

from config import Settings  # noqa: E402


class StubLLMClient:
    """Stands in for AsyncOpenAI: only chat.completions.create is used."""

    def __init__(self, responses: list[object]) -> None:
        self._responses = list(responses)
        self._i = 0
        self.calls: list[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **kwargs: object) -> SimpleNamespace:
        self.calls.append(kwargs)
        r = self._responses[min(self._i, len(self._responses) - 1)]
        self._i += 1
        if isinstance(r, BaseException):
            raise r
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=r))])


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, openai_api_key="test-key")


@pytest.fixture
def stub_llm():
    return StubLLMClient
