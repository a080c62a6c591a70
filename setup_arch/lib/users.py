from __future__ import annotations

import logging
import pwd
import shlex

from .chroot import chroot_run

logger = logging.getLogger(__name__)


def lookup_uid(username: str) -> int:
    """Numeric uid of a host account."""
    try:
        return pwd.getpwnam(username).pw_uid
    except KeyError as e:
        raise RuntimeError(f"No such user on the host: {username}") from e


def create_user(
    target_root: str,
    username: str,
    uid: int,
    *,
    group: str = "wheel",
    shell: str = "/bin/bash",
    dry_run: bool = False,
) -> None:
    chroot_run(
        target_root,
        f"useradd -u {int(uid)} -G {shlex.quote(group)} -s {shlex.quote(shell)} {shlex.quote(username)}",
        dry_run=dry_run,
    )


def sudoers_rule(group: str) -> str:
    return f"%{group} ALL=(ALL) NOPASSWD: ALL"


def grant_passwordless_sudo(target_root: str, group: str = "wheel", *, dry_run: bool = False) -> None:
    chroot_run(target_root, f"echo {shlex.quote(sudoers_rule(group))} >> /etc/sudoers", dry_run=dry_run)
