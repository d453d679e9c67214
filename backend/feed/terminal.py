import asyncio
import logging

from config import get_feed_settings
from feed.api_client import ContentApiClient
from feed.controller import FeedController
from feed.gestures import SwipeDirection

logger = logging.getLogger(__name__)

_LETTERS = "ABCD"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s:%(levelname)s:%(name)s:%(message)s",
    )


def _print_help() -> None:
    print("Commands:")
    print("  n / next                 - next card")
    print("  p / prev                 - previous card")
    print("  o / options              - show answer options")
    print("  x / close                - hide answer options")
    print("  a | b | c | d            - choose an option")
    print("  swipe <start_y> <end_y>  - simulate a vertical swipe")
    print("  h / help                 - this help")
    print("  q / quit                 - exit")


def render(controller: FeedController) -> str:
    shot = controller.current
    if shot is None:
        return "No cards available."

    lines = [
        f"RokTok  {controller.position + 1} / {len(controller.cards)}",
        f"[image] {shot.image_url}",
        "",
        shot.content,
        "",
        shot.question,
    ]

    if controller.options_visible:
        lines.append("")
        lines.append("Choose your answer:")
        for index, option in enumerate(shot.options):
            mark = ""
            if controller.selected_option is not None:
                if index == shot.correct_answer:
                    mark = "  ✓"
                elif index == controller.selected_option:
                    mark = "  ✗"
            lines.append(f"  {_LETTERS[index]}. {option}{mark}")
    else:
        lines.append("")
        lines.append("(o) Show Options")

    if controller.is_prefetching:
        lines.append("")
        lines.append("... loading more cards")
    return "\n".join(lines)


def _handle_command(controller: FeedController, cmd: str) -> None:
    parts = cmd.split()
    if parts[0] == "swipe":
        if len(parts) != 3:
            print("Usage: swipe <start_y> <end_y>")
            return
        try:
            start_y, end_y = float(parts[1]), float(parts[2])
        except ValueError:
            print("Swipe coordinates must be numbers.")
            return
        if controller.swipe(start_y, end_y) is SwipeDirection.NONE:
            print("Swipe too short.")
            return
    elif cmd in {"n", "next"}:
        controller.advance()
    elif cmd in {"p", "prev", "previous"}:
        controller.retreat()
    elif cmd in {"o", "options"}:
        controller.show_options()
    elif cmd in {"x", "close"}:
        controller.hide_options()
    elif len(cmd) == 1 and cmd in _LETTERS.lower():
        if not controller.options_visible:
            controller.show_options()
        if not controller.select_option(_LETTERS.lower().index(cmd)):
            print("An answer was already chosen for this card.")
            return
    else:
        print("Unknown command. Type 'help'.")
        return

    print()
    print(render(controller))


async def run() -> None:
    settings = get_feed_settings()

    async with ContentApiClient(settings.api_base_url, settings.timeout_seconds) as api:
        controller = FeedController(
            api.fetch_shot,
            initial_batch_size=settings.initial_batch_size,
            prefetch_batch_size=settings.prefetch_batch_size,
        )

        print("Loading RokTok...")
        await controller.initialize()
        if controller.current is None:
            print(f"Could not load any cards from {settings.api_base_url}.")
            return

        _print_help()
        print()
        print(render(controller))

        try:
            while True:
                try:
                    cmd = (await asyncio.to_thread(input, "> ")).strip().lower()
                except EOFError:
                    print()
                    return

                if cmd in {"q", "quit", "exit"}:
                    return
                if cmd in {"h", "help", "?", ""}:
                    _print_help()
                    continue
                _handle_command(controller, cmd)
        finally:
            await controller.aclose()


def main() -> None:
    _configure_logging(get_feed_settings().log_level)
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
