from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.fs import download

logger = logging.getLogger(__name__)


class DownloadStep:
    step_id = "10_download"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        tarball = paths.get("tarball")
        if not tarball:
            raise RuntimeError("execution.paths.tarball missing")

        download(cfg["tarball_url"], tarball, dry_run=bool(cfg.get("dry_run", False)))
        return state
