from __future__ import annotations

import asyncio
import json
import logging
import random

import httpx
import openai
import pytest

from services.generation import (
    TOPICS,
    build_image_url,
    fallback_content,
    generate_content,
    pick_topic,
)

_QUIZ = {
    "content": "Octopuses have three hearts and blue blood.",
    "question": "How many hearts does an octopus have?",
    "options": ["One", "Two", "Three", "Four"],
    "correctAnswer": 2,
}


def _generate(client, settings, seed: int = 7):
    return asyncio.run(generate_content(client, rng=random.Random(seed), settings=settings))


def test_returns_model_fields_verbatim(stub_llm, settings) -> None:
    client = stub_llm([json.dumps(_QUIZ)])

    result = _generate(client, settings, seed=7)

    topic = random.Random(7).choice(TOPICS)
    assert result.topic == topic
    assert result.content == _QUIZ["content"]
    assert result.question == _QUIZ["question"]
    assert result.options == _QUIZ["options"]
    assert result.correct_answer == 2
    assert result.image_url == build_image_url(topic, settings.image_base_url)


def test_strips_code_fences_from_reply(stub_llm, settings) -> None:
    client = stub_llm(["```json\n" + json.dumps(_QUIZ) + "\n```"])

    result = _generate(client, settings)

    assert result.content == _QUIZ["content"]
    assert result.options == _QUIZ["options"]
    assert result.correct_answer == 2


def test_sends_configured_model_and_topic(stub_llm, settings) -> None:
    client = stub_llm([json.dumps(_QUIZ)])

    result = _generate(client, settings, seed=11)

    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["model"] == "gpt-4"
    assert call["temperature"] == 0.9
    assert call["max_tokens"] == 500
    messages = call["messages"]
    assert [m["role"] for m in messages] == ["system", "user"]
    assert "correctAnswer" in messages[0]["content"]
    assert messages[1]["content"].endswith(result.topic)


@pytest.mark.parametrize(
    "reply",
    [
        "",
        "Sure! Here's a fact about space.",
        '{"content":"X","question":"Y","options":["A","B","C","D"]}',
        '{"content":"X","question":"Y","options":["A","B","C"],"correctAnswer":0}',
        '{"content":"X","question":"Y","options":["A","B","C","D","E"],"correctAnswer":0}',
        '{"content":"X","question":"Y","options":["A","B","C","D"],"correctAnswer":4}',
        '{"content":"X","question":"Y","options":["A","B","C","D"],"correctAnswer":-1}',
        '{"content":"X","question":"Y","options":["A","B","C","D"],"correctAnswer":"1"}',
        '{"content":"","question":"Y","options":["A","B","C","D"],"correctAnswer":1}',
        '[{"content":"X","question":"Y","options":["A","B","C","D"],"correctAnswer":1}]',
    ],
)
def test_malformed_reply_falls_back(stub_llm, settings, reply: str) -> None:
    result = _generate(stub_llm([reply]), settings)

    assert result == fallback_content(settings)


def test_three_options_reply_returns_history_fallback(stub_llm, settings) -> None:
    client = stub_llm(['{"content":"X","question":"Y","options":["A","B","C"],"correctAnswer":0}'])

    result = _generate(client, settings)

    assert result.topic == "History"
    assert "Great Wall of China" in result.content
    assert result.correct_answer == 1
    assert len(result.options) == 4
    assert result.image_url == "https://source.unsplash.com/800x1200/?china,wall,architecture"


def test_transport_failure_falls_back_and_logs(stub_llm, settings, caplog) -> None:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    client = stub_llm([openai.APIConnectionError(request=request)])

    with caplog.at_level(logging.ERROR, logger="services.generation"):
        result = _generate(client, settings)

    assert result == fallback_content(settings)
    assert "Error generating content" in caplog.text


def test_missing_message_content_falls_back(stub_llm, settings) -> None:
    result = _generate(stub_llm([None]), settings)

    assert result.topic == "History"


def test_no_retry_after_failure(stub_llm, settings) -> None:
    client = stub_llm(["not json", json.dumps(_QUIZ)])

    result = _generate(client, settings)

    assert result.topic == "History"
    assert len(client.calls) == 1


def test_every_generated_card_has_four_options(stub_llm, settings) -> None:
    client = stub_llm([json.dumps(_QUIZ)])
    rng = random.Random(0)

    for _ in range(len(TOPICS)):
        result = asyncio.run(generate_content(client, rng=rng, settings=settings))
        assert len(result.options) == 4
        assert 0 <= result.correct_answer <= 3
        assert result.topic in TOPICS


class _LastChoice:
    def choice(self, seq):
        return seq[-1]


def test_pick_topic_uses_injected_random_source() -> None:
    assert pick_topic(_LastChoice()) == "Inventions"
    assert pick_topic(random.Random(5)) == random.Random(5).choice(TOPICS)


def test_topic_pool_is_fixed() -> None:
    assert len(TOPICS) == 20
    assert len(set(TOPICS)) == 20


def test_build_image_url() -> None:
    base = "https://source.unsplash.com/800x1200/"
    assert build_image_url("Pop Culture", base) == base + "?pop-culture,abstract,gradient"
    assert build_image_url("Space", base) == base + "?space,abstract,gradient"
    assert build_image_url("", base) == base + "?abstract,gradient"
