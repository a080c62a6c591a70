from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    output: str


class CommandError(RuntimeError):
    """An external command exited non-zero."""

    def __init__(self, argv: Sequence[str], returncode: int, output: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.output = output
        super().__init__(f"Command failed ({returncode}): {fmt_argv(self.argv)}")


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - stderr is folded into stdout so tool output reads in order in the job log.
    - dry_run logs but does not execute.
    """

    argv_list = [str(a) for a in argv]
    logger.debug("CMD %s", fmt_argv(argv_list))

    if dry_run:
        logger.info("Would run %s", fmt_argv(argv_list))
        return CmdResult(argv=argv_list, returncode=0, output="")

    p = subprocess.run(
        argv_list,
        text=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        cwd=cwd,
        env=dict(os.environ, **(env or {})),
    )

    output = p.stdout or ""
    for line in output.splitlines():
        logger.info("%s", line)

    if check and p.returncode != 0:
        raise CommandError(argv_list, p.returncode, output)

    return CmdResult(argv=argv_list, returncode=p.returncode, output=output)
