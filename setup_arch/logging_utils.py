from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO

_WORKFLOW_PREFIX = {
    logging.DEBUG: "::debug::",
    logging.WARNING: "::warning::",
    logging.ERROR: "::error::",
    logging.CRITICAL: "::error::",
}

_current_group: Optional[str] = None


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands.

    INFO lines are printed as-is; other levels get the matching
    ``::debug::`` / ``::warning::`` / ``::error::`` prefix so the runner
    turns them into annotations.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = _WORKFLOW_PREFIX.get(record.levelno, "")
        if not prefix:
            return message
        # Workflow commands are single-line.
        return prefix + message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.DEBUG,
    stream: Optional[TextIO] = None,
) -> Optional[str]:
    """Configure logging.

    The console handler writes workflow commands to stdout, where the
    Actions runner picks them up. ``::debug::`` lines are only shown when
    the workflow enables step debug logging, so DEBUG is on by default.

    If log_path is given, a plain timestamped copy is also written there;
    when that location is not writable we fall back to a file in the
    current working directory.

    Returns the actual log file path, or None when only the console is used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_setup_arch_configured", False):
        return getattr(logger, "_setup_arch_log_path", log_path)

    console = logging.StreamHandler(stream or sys.stdout)
    console.setFormatter(WorkflowCommandFormatter("%(message)s"))
    logger.addHandler(console)

    chosen_path: Optional[str] = None
    if log_path:
        fmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
        try:
            Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            chosen_path = log_path
        except OSError:
            fallback = str(Path.cwd() / "setup-arch.log")
            file_handler = logging.FileHandler(fallback)
            chosen_path = fallback
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)

    setattr(logger, "_setup_arch_configured", True)
    setattr(logger, "_setup_arch_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path


def _emit(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def start_group(title: str) -> None:
    """Open a collapsible log group, closing any group still open."""
    global _current_group
    if _current_group is not None:
        end_group()
    _emit(f"::group::{title}")
    _current_group = title


def end_group() -> None:
    global _current_group
    if _current_group is not None:
        _emit("::endgroup::")
    _current_group = None


@contextmanager
def group(title: str) -> Iterator[None]:
    # The runner does not nest groups, so an inner group replaces the outer one.
    start_group(title)
    try:
        yield
    finally:
        end_group()
