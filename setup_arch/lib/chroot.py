from __future__ import annotations

import logging
from pathlib import Path

from ..logging_utils import group
from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

CHROOT_HELPER = "bin/arch-chroot"


def chroot_helper(target_root: str) -> str:
    return str(Path(target_root) / CHROOT_HELPER)


def chroot_run(target_root: str, cmd: str, *, dry_run: bool = False) -> CmdResult:
    """Run a shell command line inside target root.

    The helper installed into the root takes care of /proc, /sys and /dev.
    """

    with group(f"Running {cmd}..."):
        return run_cmd(
            [chroot_helper(target_root), target_root, "/bin/bash", "-c", cmd],
            dry_run=dry_run,
        )
