from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pacman import disable_check_space, pacman_install, pacman_key_init, pacman_key_populate

logger = logging.getLogger(__name__)


class BootstrapPacmanStep:
    step_id = "60_bootstrap_pacman"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        rootfs = paths.get("rootfs")
        if not rootfs:
            raise RuntimeError("execution.paths.rootfs missing")

        dry_run = bool(cfg.get("dry_run", False))

        pacman_key_init(rootfs, dry_run=dry_run)
        pacman_key_populate(rootfs, cfg.get("keyring", "archlinuxarm"), dry_run=dry_run)
        disable_check_space(rootfs, dry_run=dry_run)
        pacman_install(rootfs, cfg.get("base_packages") or ["base-devel"], dry_run=dry_run)
        return state
