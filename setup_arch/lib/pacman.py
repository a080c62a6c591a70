from __future__ import annotations

import logging
import shlex
from typing import Sequence

from .chroot import chroot_run

logger = logging.getLogger(__name__)


def mirrorlist_line(mirror: str) -> str:
    # $arch and $repo are expanded by pacman, not by us.
    return f"Server = {mirror}/$arch/$repo"


def pacman_key_init(target_root: str, *, dry_run: bool = False) -> None:
    chroot_run(target_root, "pacman-key --init", dry_run=dry_run)


def pacman_key_populate(target_root: str, keyring: str, *, dry_run: bool = False) -> None:
    chroot_run(target_root, f"pacman-key --populate {shlex.quote(keyring)}", dry_run=dry_run)


def disable_check_space(target_root: str, *, dry_run: bool = False) -> None:
    """Comment out CheckSpace in pacman.conf.

    The self bind mount confuses pacman's free space check.
    """

    chroot_run(target_root, "sed -i 's/CheckSpace/#CheckSpace/' /etc/pacman.conf", dry_run=dry_run)


def pacman_install(target_root: str, packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    chroot_run(
        target_root,
        "pacman -Syu --noconfirm --needed " + " ".join(shlex.quote(p) for p in packages),
        dry_run=dry_run,
    )
