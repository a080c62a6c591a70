from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from setup_arch.lib import command


class CommandRecorder:
    """Stands in for subprocess.run and remembers every argv."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.failures: Dict[str, int] = {}
        self.hooks: List[Callable[[List[str]], None]] = []
        self.output = ""

    def fail_on(self, program: str, returncode: int = 1) -> None:
        self.failures[program] = returncode

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        for hook in self.hooks:
            hook(argv)
        rc = self.failures.get(Path(argv[0]).name, 0)
        return subprocess.CompletedProcess(argv, rc, stdout=self.output, stderr=None)

    def programs(self) -> List[str]:
        return [Path(c[0]).name for c in self.calls]

    def chroot_commands(self) -> List[str]:
        return [c[-1] for c in self.calls if Path(c[0]).name == "arch-chroot"]

    def find(self, program: str) -> Optional[List[str]]:
        for c in self.calls:
            if Path(c[0]).name == program:
                return c
        return None


@pytest.fixture
def recorder(monkeypatch):
    rec = CommandRecorder()
    monkeypatch.setattr(command.subprocess, "run", rec)
    return rec


@pytest.fixture
def action_env(tmp_path):
    gh = tmp_path / "gh"
    gh.mkdir()
    (gh / "output").touch()
    (gh / "path").touch()
    return {
        "INPUT_ARCH_MIRROR": "http://mirror.archlinuxarm.org",
        "INPUT_ARCH_PACKAGES": "",
        "SUDO_USER": "runner",
        "GITHUB_OUTPUT": str(gh / "output"),
        "GITHUB_PATH": str(gh / "path"),
    }


@pytest.fixture
def overrides(tmp_path):
    home_root = tmp_path / "home"
    (home_root / "runner").mkdir(parents=True)
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    return {"home_root": str(home_root), "work_dir": str(work_dir)}


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_setup_arch_configured", "_setup_arch_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
