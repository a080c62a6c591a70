from __future__ import annotations

import logging
from pathlib import Path

from ..logging_utils import group
from .command import run_cmd

logger = logging.getLogger(__name__)


def download(url: str, path: str, *, dry_run: bool = False) -> None:
    """Fetch url into path, replacing any existing file.

    -f makes curl exit non-zero on HTTP errors instead of saving the error page.
    """

    with group(f"Downloading {url}..."):
        run_cmd(["curl", "-sSfL", "-o", path, url], dry_run=dry_run)


def extract(tarball: str, path: str, *, dry_run: bool = False) -> None:
    """Extract a gzip tarball, keeping numeric uid/gid and permissions.

    The host's /etc/passwd does not match the one inside the tarball, so
    names must not be resolved.
    """

    with group(f"Extracting {tarball}..."):
        if dry_run:
            logger.info("Would create %s", path)
        else:
            Path(path).mkdir(parents=True, exist_ok=True)
        run_cmd(["tar", "--gzip", "-xf", tarball, "-C", path, "--numeric-owner"], dry_run=dry_run)


def write(path: str, content: str, *, dry_run: bool = False) -> None:
    """Replace the contents of path with content and a trailing newline.

    Parent directories are not created.
    """

    with group(f"Writing to {path}..."):
        if dry_run:
            logger.info("Would write %s", path)
            return
        with open(path, "w", encoding="utf-8") as f:
            f.write(content + "\n")


def bind_mount(source: str, target: str, *, dry_run: bool = False) -> None:
    """Recursively bind mount source onto target.

    The mount is left in place for the rest of the job.
    """

    with group(f"Bind mounting {source} to {target}..."):
        if dry_run:
            logger.info("Would create %s", target)
        else:
            Path(target).mkdir(parents=True, exist_ok=True)
        run_cmd(["mount", "-v", "--rbind", source, target], dry_run=dry_run)


def install_file(source: str, destination: str, *, mode: str = "755", dry_run: bool = False) -> None:
    with group(f"Installing {destination}..."):
        run_cmd(["install", f"-Dvm{mode}", source, destination], dry_run=dry_run)


def remove_file(path: str, *, dry_run: bool = False) -> None:
    if dry_run:
        logger.info("Would remove %s", path)
        return
    Path(path).unlink(missing_ok=True)
    logger.debug("Removed %s", path)
