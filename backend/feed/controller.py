"""
Client-side feed state: an append-only list of shots, the current
position, and a rolling prefetch that keeps cards ahead of the user.

All fetches are sequential. The only background work is a single
prefetch task guarded by `is_prefetching`.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import httpx

from feed.gestures import SwipeDirection, classify_swipe
from feed.shots import Shot

logger = logging.getLogger(__name__)

INITIAL_BATCH_SIZE = 3
PREFETCH_BATCH_SIZE = 2

ShotFetcher = Callable[[], Awaitable[Shot]]


class FeedController:
    def __init__(
        self,
        fetch_shot: ShotFetcher,
        initial_batch_size: int = INITIAL_BATCH_SIZE,
        prefetch_batch_size: int = PREFETCH_BATCH_SIZE,
    ):
        self._fetch_shot = fetch_shot
        self.initial_batch_size = initial_batch_size
        self.prefetch_batch_size = prefetch_batch_size

        self._cards: list[Shot] = []
        self._position = 0
        self._is_prefetching = False
        self._is_initial_loading = False
        self._prefetch_task: Optional[asyncio.Task] = None

        # Per-card state, cleared whenever the position changes
        self._selected_option: Optional[int] = None
        self._options_visible = False

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def cards(self) -> tuple[Shot, ...]:
        return tuple(self._cards)

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_prefetching(self) -> bool:
        return self._is_prefetching

    @property
    def is_initial_loading(self) -> bool:
        return self._is_initial_loading

    @property
    def current(self) -> Optional[Shot]:
        if not self._cards:
            return None
        return self._cards[self._position]

    @property
    def selected_option(self) -> Optional[int]:
        return self._selected_option

    @property
    def options_visible(self) -> bool:
        return self._options_visible

    @property
    def answer_is_correct(self) -> Optional[bool]:
        """None until an option has been chosen for the current card."""
        shot = self.current
        if shot is None or self._selected_option is None:
            return None
        return self._selected_option == shot.correct_answer

    @property
    def is_first(self) -> bool:
        return self._position == 0

    @property
    def is_last(self) -> bool:
        return self._position >= len(self._cards) - 1

    # ── Loading ───────────────────────────────────────────────────────────────

    async def fetch_batch(self, count: int) -> list[Shot]:
        """
        Fetch `count` shots one after another. A slot whose request fails is
        logged and dropped; the batch is silently shorter.
        """
        shots: list[Shot] = []
        for i in range(count):
            try:
                shots.append(await self._fetch_shot())
            except (httpx.HTTPError, ValueError) as e:
                logger.error("Error generating shot %d/%d: %s: %s", i + 1, count, type(e).__name__, e)
            except Exception:
                logger.exception("Unexpected error generating shot %d/%d", i + 1, count)
        return shots

    async def initialize(self) -> None:
        self._is_initial_loading = True
        try:
            self._cards = await self.fetch_batch(self.initial_batch_size)
            self._position = 0
        finally:
            self._is_initial_loading = False
        logger.info("Initial feed loaded with %d cards", len(self._cards))
        self._maybe_prefetch()

    def _maybe_prefetch(self) -> None:
        if not self._cards or not self.is_last or self._is_prefetching:
            return
        # Flag is raised before the task runs so a second trigger sees it
        self._is_prefetching = True
        self._prefetch_task = asyncio.get_running_loop().create_task(self._prefetch())

    async def _prefetch(self) -> None:
        try:
            shots = await self.fetch_batch(self.prefetch_batch_size)
            self._cards.extend(shots)
            logger.info("Prefetched %d cards, feed length %d", len(shots), len(self._cards))
        finally:
            self._is_prefetching = False

    async def wait_for_prefetch(self) -> None:
        task = self._prefetch_task
        if task is not None:
            await task

    async def aclose(self) -> None:
        """Cancel an unfinished prefetch."""
        task = self._prefetch_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    # ── Navigation ────────────────────────────────────────────────────────────

    def _move_to(self, position: int) -> None:
        self._position = position
        self._selected_option = None
        self._options_visible = False

    def advance(self) -> bool:
        moved = False
        if self._cards and not self.is_last:
            self._move_to(self._position + 1)
            moved = True
        self._maybe_prefetch()
        return moved

    def retreat(self) -> bool:
        moved = False
        if self._cards and not self.is_first:
            self._move_to(self._position - 1)
            moved = True
        self._maybe_prefetch()
        return moved

    def swipe(self, start_y: float, end_y: float) -> SwipeDirection:
        direction = classify_swipe(start_y, end_y)
        if direction is SwipeDirection.ADVANCE:
            self.advance()
        elif direction is SwipeDirection.RETREAT:
            self.retreat()
        return direction

    # ── Answering ─────────────────────────────────────────────────────────────

    def show_options(self) -> None:
        if self.current is not None:
            self._options_visible = True

    def hide_options(self) -> None:
        self._options_visible = False

    def select_option(self, index: int) -> bool:
        """Record the answer for the current card. The first choice sticks."""
        shot = self.current
        if shot is None or self._selected_option is not None:
            return False
        if not 0 <= index < len(shot.options):
            return False
        self._selected_option = index
        return True
