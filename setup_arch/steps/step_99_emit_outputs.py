from __future__ import annotations

import logging
from typing import Any, Dict

from ..outputs import add_path, output

logger = logging.getLogger(__name__)


class EmitOutputsStep:
    step_id = "99_emit_outputs"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        rootfs = paths.get("rootfs")
        bounce = paths.get("bounce")
        if not rootfs or not bounce:
            raise RuntimeError("execution.paths.rootfs/bounce missing")

        if bool(cfg.get("dry_run", False)):
            logger.info("Would output root-path=%s and add %s to PATH", rootfs, bounce)
            return state

        output(cfg["github_output"], "root-path", rootfs)
        add_path(cfg["github_path"], bounce)
        logger.info("Arch Linux root ready at %s", rootfs)
        return state
