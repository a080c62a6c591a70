from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.fs import remove_file

logger = logging.getLogger(__name__)


class CleanupStep:
    step_id = "90_cleanup"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        tarball = paths.get("tarball")
        if not tarball:
            raise RuntimeError("execution.paths.tarball missing")

        # Mounts stay: later workflow steps run inside them.
        remove_file(tarball, dry_run=bool(cfg.get("dry_run", False)))
        return state
