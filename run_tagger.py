"""CLI entry point for the task tagger."""

import argparse
import sys
from typing import Callable

from dotenv import load_dotenv

from src.config import Settings
from src.logging_config import configure_logging
from src.session import SessionController, SessionState
from src.tagging import ALL_TAGS
from src.tasks import TaskTaggingService, ValidationError


def _parse_tags(answer: str, suggested: list[str]) -> list[str]:
    """Turn an operator answer into tags; empty answer keeps the suggestions."""
    if not answer.strip():
        return list(suggested)
    tags = []
    for part in answer.split(","):
        tag = part.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def review(controller: SessionController, prompt: Callable[[str], str] = input) -> int:
    """Walk the operator through their unprocessed tasks in the terminal."""
    session = controller.load()

    while True:
        if session.state == SessionState.ERROR:
            print(f"ERROR: {session.error}", file=sys.stderr)
            if prompt("Try again? [y/N] ").strip().lower() != "y":
                return 1
            session = controller.load()
            continue

        if session.state == SessionState.COMPLETED:
            if session.tasks:
                print(f"\nAll done! Processed {session.processed_count} of {len(session.tasks)} tasks.")
            else:
                print("\nNo unprocessed tasks found.")
            return 0

        if session.degraded_reason and session.cursor == 0:
            print(f"(showing sample tasks: {session.degraded_reason})")

        task = session.current_task
        stats = session.stats()
        print(f"\n[{session.cursor + 1}/{stats['total']}] {task.title}")
        if task.content:
            print(f"  {task.content}")
        print(
            f"  due: {task.due_date or 'No due date'} | project: {task.project_name or 'No project'}"
            f" | priority: {task.priority.value}"
        )
        print(f"  suggested: {', '.join(task.suggested_tags) or '(none)'}")

        answer = prompt("Tags (comma separated, enter = suggested, s = skip, r = refresh, q = quit): ")
        command = answer.strip().lower()
        if command == "q":
            return 0
        if command == "s":
            session = controller.skip()
            continue
        if command == "r":
            session = controller.load()
            continue

        try:
            controller.save(_parse_tags(answer, task.suggested_tags))
        except ValidationError as e:
            print(f"{e}. Available: {', '.join(ALL_TAGS)}", file=sys.stderr)
        session = controller.session
        if session.error:
            print(f"ERROR: {session.error} (retry or skip)", file=sys.stderr)


def main() -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Tag unprocessed tasks one at a time")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (overrides LOG_LEVEL env var)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API for the browser UI")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")

    subparsers.add_parser("review", help="Confirm tag suggestions in the terminal")

    args = parser.parse_args()
    configure_logging(level_override=args.log_level)
    settings = Settings.from_env()

    if args.command == "serve":
        from src.api import create_app

        app = create_app(settings)
        app.run(host=args.host, port=args.port)
        return 0

    controller = SessionController(TaskTaggingService.from_settings(settings))
    return review(controller)


if __name__ == "__main__":
    sys.exit(main())
