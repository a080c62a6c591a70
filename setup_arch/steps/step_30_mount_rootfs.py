from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.fs import bind_mount

logger = logging.getLogger(__name__)


class MountRootfsStep:
    """Bind mount the rootfs onto itself.

    arch-chroot and pacman both expect the new root to be a mount point.
    """

    step_id = "30_mount_rootfs"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        rootfs = paths.get("rootfs")
        if not rootfs:
            raise RuntimeError("execution.paths.rootfs missing")

        bind_mount(rootfs, rootfs, dry_run=bool(cfg.get("dry_run", False)))
        state.setdefault("execution", {}).setdefault("mounts", []).append(rootfs)
        return state
