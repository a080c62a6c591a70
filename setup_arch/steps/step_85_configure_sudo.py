from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.users import grant_passwordless_sudo

logger = logging.getLogger(__name__)


class ConfigureSudoStep:
    step_id = "85_configure_sudo"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        rootfs = paths.get("rootfs")
        if not rootfs:
            raise RuntimeError("execution.paths.rootfs missing")

        grant_passwordless_sudo(
            rootfs,
            cfg.get("sudo_group", "wheel"),
            dry_run=bool(cfg.get("dry_run", False)),
        )
        return state
