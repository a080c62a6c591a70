from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.fs import extract

logger = logging.getLogger(__name__)


class ExtractStep:
    step_id = "20_extract"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        tarball = paths.get("tarball")
        rootfs = paths.get("rootfs")
        if not tarball or not rootfs:
            raise RuntimeError("execution.paths.tarball/rootfs missing")

        extract(tarball, rootfs, dry_run=bool(cfg.get("dry_run", False)))
        logger.info("Rootfs extracted to %s", rootfs)
        return state
