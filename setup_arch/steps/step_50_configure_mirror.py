from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.fs import write
from ..lib.pacman import mirrorlist_line

logger = logging.getLogger(__name__)


class ConfigureMirrorStep:
    step_id = "50_configure_mirror"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        rootfs = paths.get("rootfs")
        if not rootfs:
            raise RuntimeError("execution.paths.rootfs missing")

        write(
            str(Path(rootfs) / "etc/pacman.d/mirrorlist"),
            mirrorlist_line(cfg["mirror"]),
            dry_run=bool(cfg.get("dry_run", False)),
        )
        return state
