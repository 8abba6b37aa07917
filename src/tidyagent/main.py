"""
tidyagent entry point.

This file handles startup concerns (arg-parsing, env setup, logging), asks the user which folder to
organize and launches the agent loop on it.
"""

import argparse
import logging
import sys

from tidyagent.agent.agent_loop import OrganizerAgent
from tidyagent.client.cli import (
    FolderNotFoundError,
    choose_target_directory,
)
from tidyagent.common import (
    AnsiColors,
    colored_print,
)
from tidyagent.config import settings
from tidyagent.core.errors import AgentError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _init_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        stream=sys.stdout,
    )
    # Keep SDK request logs out of the progress output
    for noisy in ("httpx", "openai", "anthropic"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for tidyagent.

    Returns the process exit code: 1 on a missing credential, an unresolvable folder or an
    aborted run; 0 on success or when the user cancels.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(description="Organize a folder with an LLM agent")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        type=str.lower,
        default=settings.LOG_LEVEL,
        help="Logging level (default from env: %(default)s)",
    )
    args = parser.parse_args(argv)

    # Override log level setting with command-line argument
    settings.LOG_LEVEL = args.log_level

    _init_logging(settings.LOG_LEVEL)
    logger.debug(
        "Settings: %s",
        settings.model_dump(exclude={"GROQ_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY"}),
    )

    backend = settings.BACKEND.lower()
    if not settings.api_key_for(backend):
        colored_print(
            f"❌ Missing {backend.upper()}_API_KEY. Set it in the environment or a .env file.",
            AnsiColors.RED,
        )
        return 1

    try:
        target = choose_target_directory()
    except FolderNotFoundError as exc:
        colored_print(f"❌ {exc}", AnsiColors.RED)
        return 1

    if target is None:
        colored_print("Cancelled.", AnsiColors.YELLOW)
        return 0

    try:
        OrganizerAgent().run(target)
    except AgentError as exc:
        logger.error("Run aborted: %s", exc)
        colored_print(f"❌ Run aborted: {exc}", AnsiColors.RED)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
