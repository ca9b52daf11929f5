from __future__ import annotations

import logging
import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    """Ensure the repository root (parent of this package) is on ``sys.path``.

    If this module is executed as a script (``python typing_trainer/__main__.py``),
    the package may not be discoverable by Python. This helper inserts the
    parent directory of the package into ``sys.path`` so that imports resolve
    correctly.
    """
    pkg_dir = Path(__file__).resolve().parent
    repo_root = pkg_dir.parent
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


try:
    # Works when executed as a module: python -m typing_trainer
    from .config import Frontend, Settings, load_settings
    from .session import SessionError
except ImportError:
    # Works when executed as a script (VS Code “Run Python File”, absolute path, etc.)
    _ensure_repo_root_on_path()
    from typing_trainer.config import Frontend, Settings, load_settings
    from typing_trainer.session import SessionError

logger = logging.getLogger("typing_trainer")


def build_log_handler(settings: Settings) -> logging.Handler:
    if settings.log_file is not None:
        return logging.FileHandler(settings.log_file, encoding="utf-8")
    handler = logging.StreamHandler(sys.stderr)
    if settings.frontend is Frontend.TERMINAL:
        # stderr shares the curses screen; only post-session errors may reach it.
        handler.setLevel(max(settings.log_level, logging.WARNING))
    return handler


def setup_logging(settings: Settings) -> None:
    handler = build_log_handler(settings)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[handler],
    )


def _run_frontend(settings: Settings) -> int:
    # Only the selected toolkit is imported.
    if settings.frontend is Frontend.WINDOW:
        from typing_trainer.app import run as run_window

        return run_window(seed=settings.seed)

    from typing_trainer.terminal import run as run_terminal

    return run_terminal(seed=settings.seed)


def main() -> int:
    """Entry point for running the trainer from the command line."""
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    try:
        setup_logging(settings)
    except OSError as exc:
        print(f"Exiting with error: cannot open log file: {exc}", file=sys.stderr)
        return 1
    logger.info("starting %s frontend (seed=%s)", settings.frontend.value, settings.seed)

    try:
        return _run_frontend(settings)
    except SessionError as exc:
        # The frontend has already restored the display at this point.
        cause = exc.__cause__
        message = str(exc) if cause is None else f"{exc}: {cause}"
        logger.error("session aborted: %s", message, exc_info=exc)
        print(f"Exiting with error: {message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
