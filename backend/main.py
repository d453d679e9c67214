import logging
import random
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from openai import AsyncOpenAI

from config import Settings, get_settings
from models import GeneratedContent, HealthResponse
from services.generation import generate_content

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s:%(levelname)s:%(name)s:%(message)s",
    )


def build_llm_client(settings: Settings) -> AsyncOpenAI:
    # No retries: a failed call falls straight back to the fixed card
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url or None,
        timeout=settings.request_timeout_seconds,
        max_retries=0,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    _configure_logging(settings.log_level)

    app.state.llm_client = build_llm_client(settings)
    app.state.rng = random.Random()
    logger.info("Using chat model %s", settings.chat_model)
    try:
        yield
    finally:
        await app.state.llm_client.close()


app = FastAPI(
    title="RokTok API",
    description="Generates short fact + quiz cards for a swipeable feed.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Dependencies ──────────────────────────────────────────────────────────────
def get_llm_client(request: Request) -> AsyncOpenAI:
    return request.app.state.llm_client


def get_rng(request: Request) -> random.Random:
    return request.app.state.rng


# ── Health ────────────────────────────────────────────────────────────────────
@app.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "ok"}


# ── Generate Content ──────────────────────────────────────────────────────────
@app.post("/api/generate-content", response_model=GeneratedContent)
async def generate_content_endpoint(
    client: AsyncOpenAI = Depends(get_llm_client),
    rng: random.Random = Depends(get_rng),
    settings: Settings = Depends(get_settings),
):
    """
    Generate one card for a random topic. Always answers 200: generation
    failures are replaced by the fixed fallback card.
    """
    return await generate_content(client, rng=rng, settings=settings)
