from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.chroot import chroot_helper
from ..lib.fs import install_file

logger = logging.getLogger(__name__)


class InstallHelpersStep:
    step_id = "40_install_helpers"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        rootfs = paths.get("rootfs")
        bounce = paths.get("bounce")
        if not rootfs or not bounce:
            raise RuntimeError("execution.paths.rootfs/bounce missing")

        dry_run = bool(cfg.get("dry_run", False))
        assets_dir = Path(cfg["assets_dir"])

        # Bounce script goes on the host PATH; arch-chroot is what chroot_run calls.
        install_file(str(assets_dir / "arch.sh"), str(Path(bounce) / "arch.sh"), dry_run=dry_run)
        install_file(str(assets_dir / "arch-chroot"), chroot_helper(rootfs), dry_run=dry_run)
        return state
