from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.users import create_user, lookup_uid

logger = logging.getLogger(__name__)


class CreateUserStep:
    step_id = "70_create_user"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        rootfs = paths.get("rootfs")
        if not rootfs:
            raise RuntimeError("execution.paths.rootfs missing")

        username = cfg["sudo_user"]
        dry_run = bool(cfg.get("dry_run", False))
        try:
            uid = lookup_uid(username)
        except RuntimeError:
            if not dry_run:
                raise
            logger.warning("Would create user %s, but it does not exist on this host", username)
            return state

        create_user(
            rootfs,
            username,
            uid,
            group=cfg.get("sudo_group", "wheel"),
            shell=cfg.get("shell", "/bin/bash"),
            dry_run=dry_run,
        )

        state.setdefault("execution", {}).setdefault("decisions", {})["uid"] = uid
        logger.info("Created user %s (uid=%d)", username, uid)
        return state
