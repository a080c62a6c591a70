from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def _append(path: str, line: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(line + "\n")


def output(github_output: str, name: str, value: str) -> None:
    """Set a step output (``name=value`` in $GITHUB_OUTPUT)."""
    _append(github_output, f"{name}={value}")
    logger.debug("Output %s=%s", name, value)


def add_path(github_path: str, directory: str) -> None:
    """Prepend a directory to PATH for later steps."""
    _append(github_path, directory)
    logger.debug("Added %s to PATH", directory)
