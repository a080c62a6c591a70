from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


DEFAULT_TARBALL_URL = "http://os.archlinuxarm.org/os/ArchLinuxARM-aarch64-latest.tar.gz"
DEFAULT_ROOTFS_NAME = "root.aarch64"

# key in state["config"] -> environment variable
ENV_INPUTS = {
    "mirror": "INPUT_ARCH_MIRROR",
    "packages": "INPUT_ARCH_PACKAGES",
    "sudo_user": "SUDO_USER",
    "github_output": "GITHUB_OUTPUT",
    "github_path": "GITHUB_PATH",
}

REQUIRED_INPUTS = ("mirror", "sudo_user")

# Only needed when outputs are actually written.
OUTPUT_INPUTS = ("github_output", "github_path")


class ConfigError(ValueError):
    """Missing or invalid action input."""


def default_assets_dir() -> str:
    return str(Path(__file__).resolve().parent / "assets")


def load_config_file(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("setup-arch config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the setup-arch config") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")
    return raw


def split_packages(value: Any) -> List[str]:
    """Normalize a package list given as a string or a sequence."""
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(p) for p in value if str(p).strip()]


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the action config from the environment and optional file values.

    Environment inputs take precedence over file values; a variable that is
    set but empty still clears the file value.
    """

    env = os.environ if environ is None else environ
    cfg: Dict[str, Any] = dict(overrides or {})

    for key, var in ENV_INPUTS.items():
        if var in env:
            cfg[key] = env[var]

    return ensure_defaults(cfg)


def ensure_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Validate inputs and fill derived values (without overriding user values)."""

    cfg.setdefault("dry_run", False)

    required = REQUIRED_INPUTS if cfg["dry_run"] else REQUIRED_INPUTS + OUTPUT_INPUTS
    missing = [ENV_INPUTS[k] for k in required if not cfg.get(k)]
    if missing:
        raise ConfigError("Missing required environment: " + ", ".join(missing))

    cfg["packages"] = split_packages(cfg.get("packages"))

    cfg.setdefault("tarball_url", DEFAULT_TARBALL_URL)
    cfg.setdefault("rootfs_name", DEFAULT_ROOTFS_NAME)
    cfg.setdefault("home_root", "/home")
    cfg.setdefault("work_dir", os.getcwd())
    cfg.setdefault("keyring", "archlinuxarm")
    cfg.setdefault("base_packages", ["base-devel"])
    cfg.setdefault("sudo_group", "wheel")
    cfg.setdefault("shell", "/bin/bash")
    cfg.setdefault("assets_dir", default_assets_dir())

    cfg["base_packages"] = split_packages(cfg["base_packages"])
    if not cfg["base_packages"]:
        raise ConfigError("base_packages must not be empty")

    return cfg


def resolve_paths(cfg: Mapping[str, Any]) -> Dict[str, str]:
    """Derive the filesystem paths every step works with."""

    home = str(Path(cfg["home_root"]) / cfg["sudo_user"])
    rootfs = str(Path(home) / cfg["rootfs_name"])
    tarball_name = str(cfg["tarball_url"]).rstrip("/").rsplit("/", 1)[-1]
    if not tarball_name:
        raise ConfigError(f"Cannot derive a file name from {cfg['tarball_url']}")

    return {
        "home": home,
        "rootfs": rootfs,
        "tarball": str(Path(cfg["work_dir"]) / tarball_name),
        "bounce": str(Path(rootfs) / "bounce"),
        # The home directory appears at the same path inside the chroot.
        "home_in_root": str(Path(rootfs) / home.lstrip("/")),
    }
