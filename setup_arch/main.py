from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Mapping, Optional

from .config import load_config, load_config_file, resolve_paths
from .logging_utils import configure_logging, end_group
from .pipeline import run_pipeline
from .steps import (
    BootstrapPacmanStep,
    CleanupStep,
    ConfigureMirrorStep,
    ConfigureSudoStep,
    CreateUserStep,
    DownloadStep,
    EmitOutputsStep,
    ExtractStep,
    InstallHelpersStep,
    InstallPackagesStep,
    MountHomeStep,
    MountRootfsStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        DownloadStep(),
        ExtractStep(),
        MountRootfsStep(),
        InstallHelpersStep(),
        ConfigureMirrorStep(),
        BootstrapPacmanStep(),
        InstallPackagesStep(),
        CreateUserStep(),
        MountHomeStep(),
        ConfigureSudoStep(),
        CleanupStep(),
        EmitOutputsStep(),
    ]


def run(
    *,
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[str] = None,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """Set up the Arch Linux root and return the final state."""

    try:
        overrides: Dict[str, Any] = load_config_file(config_path) if config_path else {}
        if dry_run:
            overrides["dry_run"] = True
        cfg = load_config(environ, overrides)
        paths = resolve_paths(cfg)
    except Exception as e:
        logger.error("Invalid configuration: %s", e)
        raise

    state: Dict[str, Any] = {
        "config": cfg,
        "execution": {"paths": paths, "current_step": None},
    }

    try:
        result = run_pipeline(state=state, steps=build_steps())
    except Exception as e:
        end_group()
        logger.error("Step %s failed: %s", state["execution"].get("current_step"), e)
        raise

    result.state["execution"]["ran_steps"] = result.ran_steps
    return result.state


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="setup-arch",
        description="Set up an Arch Linux ARM chroot on a GitHub Actions runner (run as root via sudo).",
    )
    p.add_argument("--config", default=None, help="Optional YAML file overriding defaults")
    p.add_argument("--log", default=None, help="Also write a timestamped log to this file")
    p.add_argument("--dry-run", action="store_true", help="Log commands instead of running them")

    args = p.parse_args(argv)

    configure_logging(log_path=args.log)

    run(config_path=args.config, dry_run=bool(args.dry_run))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
