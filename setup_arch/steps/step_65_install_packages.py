from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pacman import pacman_install

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "65_install_packages"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        rootfs = paths.get("rootfs")
        if not rootfs:
            raise RuntimeError("execution.paths.rootfs missing")

        packages = list(cfg.get("packages") or [])
        if not packages:
            logger.debug("No additional packages requested")
            return state

        pacman_install(rootfs, packages, dry_run=bool(cfg.get("dry_run", False)))
        state.setdefault("execution", {}).setdefault("decisions", {})["packages"] = packages
        return state
