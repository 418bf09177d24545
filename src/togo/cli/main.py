# src/togo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, runs one command and exits:
- command output goes to stdout,
- failures are printed as "Error: ..." on stderr with a non-zero exit status.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry as command_registry
from ..config import Settings, get_settings
from ..errors import TogoError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None, *, settings: Settings | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if settings is None:
        settings = get_settings()

    console_level = getattr(logging, str(settings.log_level).upper(), logging.WARNING)
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    state = None
    try:
        state = create_initial_state(settings=settings)
        output = command_registry.handle(state, list(argv))
    except TogoError as e:
        logger.debug("Command failed: %s", e.message, exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return e.exit_code
    finally:
        if state is not None:
            state.store.close()

    print(output)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
