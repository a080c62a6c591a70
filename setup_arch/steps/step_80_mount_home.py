from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.fs import bind_mount

logger = logging.getLogger(__name__)


class MountHomeStep:
    step_id = "80_mount_home"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        home = paths.get("home")
        home_in_root = paths.get("home_in_root")
        if not home or not home_in_root:
            raise RuntimeError("execution.paths.home/home_in_root missing")

        bind_mount(home, home_in_root, dry_run=bool(cfg.get("dry_run", False)))
        state.setdefault("execution", {}).setdefault("mounts", []).append(home_in_root)
        return state
