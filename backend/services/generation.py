import logging
import random

from openai import AsyncOpenAI

from config import Settings
from models import GeneratedContent, QuizDraft
from prompts import CONTENT_SYSTEM_PROMPT, CONTENT_USER_PROMPT
from utils import parse_json_object, slugify_topic

logger = logging.getLogger(__name__)

TOPICS = (
    "Technology", "Science", "History", "Geography", "Pop Culture",
    "Sports", "Nature", "Space", "Health", "Food", "Art", "Music",
    "Movies", "Literature", "Politics", "Economics", "Psychology",
    "Environment", "Animals", "Inventions",
)

_FALLBACK_TOPIC = "History"
_FALLBACK_IMAGE_QUERY = "china,wall,architecture"


def pick_topic(rng: random.Random) -> str:
    return rng.choice(TOPICS)


def build_image_url(topic: str, base_url: str) -> str:
    """Redirect URL for a topic-themed stock image; never fetched server-side."""
    slug = slugify_topic(topic)
    if not slug:
        return f"{base_url}?abstract,gradient"
    return f"{base_url}?{slug},abstract,gradient"


def fallback_content(settings: Settings) -> GeneratedContent:
    return GeneratedContent(
        content=(
            "The Great Wall of China is not visible from space with the naked eye, "
            "despite popular belief. This myth has been debunked by astronauts."
        ),
        question="Can the Great Wall of China be seen from space with the naked eye?",
        options=[
            "Yes, clearly visible",
            "No, it's a myth",
            "Only during full moon",
            "Yes, but only from low orbit",
        ],
        correct_answer=1,
        image_url=f"{settings.image_base_url}?{_FALLBACK_IMAGE_QUERY}",
        topic=_FALLBACK_TOPIC,
    )


async def _request_quiz(client: AsyncOpenAI, topic: str, settings: Settings) -> QuizDraft:
    response = await client.chat.completions.create(
        model=settings.chat_model,
        messages=[
            {"role": "system", "content": CONTENT_SYSTEM_PROMPT},
            {"role": "user", "content": CONTENT_USER_PROMPT.format(topic=topic)},
        ],
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )

    raw = response.choices[0].message.content or ""
    try:
        return QuizDraft.model_validate(parse_json_object(raw))
    except ValueError:
        logger.error("Failed to parse model response: %r", raw[:500])
        raise


async def generate_content(
    client: AsyncOpenAI,
    *,
    rng: random.Random,
    settings: Settings,
) -> GeneratedContent:
    """
    Generate one fact + quiz card for a random topic.
    Never raises: transport errors, malformed JSON and shape violations
    all degrade to the fixed fallback card.
    """
    topic = pick_topic(rng)

    try:
        draft = await _request_quiz(client, topic, settings)
        image_url = build_image_url(topic, settings.image_base_url)
    except Exception:
        logger.exception("Error generating content for topic %s", topic)
        return fallback_content(settings)

    return GeneratedContent(
        content=draft.content,
        question=draft.question,
        options=draft.options,
        correct_answer=draft.correct_answer,
        image_url=image_url,
        topic=topic,
    )
