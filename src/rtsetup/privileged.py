"""
Privileged command execution.
All system mutation in rtsetup goes through a PrivilegedRunner.
File: src/rtsetup/privileged.py
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from .schemas import CommandResult
from .utils import ui

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------
# Command builders
# --------------------------------------------------------------------------
def copy_command(src: Path, dest_dir: Path) -> List[str]:
    return ["cp", str(src), f"{dest_dir}/"]


def append_line_command(line: str, path: Path) -> List[str]:
    script = f"echo {shlex.quote(line)} >> {shlex.quote(str(path))}"
    return ["/bin/bash", "-c", script]


def groupadd_command(group: str) -> List[str]:
    # --force: exit successfully if the group already exists
    return ["groupadd", "--force", group]


# --------------------------------------------------------------------------
# Runners
# --------------------------------------------------------------------------
class PrivilegedRunner:
    """
    Interface: run a command with admin rights, return exit status + diagnostics.
    """

    def run_privileged(self, argv: Sequence[str]) -> CommandResult:
        raise NotImplementedError


@dataclass
class SudoRunner(PrivilegedRunner):
    """
    Runs commands through sudo (or another helper given as `helper`).

    sudo reads the password from the controlling terminal, so stdout/stderr
    can be captured without hiding the password prompt.
    """
    helper: str = "sudo"

    def run_privileged(self, argv: Sequence[str]) -> CommandResult:
        full = [*shlex.split(self.helper), *argv]
        logger.debug("running privileged: %s", shlex.join(full))
        try:
            proc = subprocess.run(full, capture_output=True, text=True, check=False)
        except OSError as e:
            logger.debug("privileged helper failed to start: %s", e)
            return CommandResult(argv=list(argv), exit_status=127, diagnostic=str(e))

        diagnostic = (proc.stderr or "").strip() or (proc.stdout or "").strip()
        logger.debug("exit status %d", proc.returncode)
        return CommandResult(argv=list(argv), exit_status=proc.returncode, diagnostic=diagnostic)


@dataclass
class DryRunRunner(PrivilegedRunner):
    """
    Prints and records commands instead of running them. Always succeeds.
    """
    helper: str = "sudo"
    issued: List[List[str]] = field(default_factory=list)

    def run_privileged(self, argv: Sequence[str]) -> CommandResult:
        self.issued.append(list(argv))
        ui.note(f"[dry-run] would run: {self.helper} {shlex.join(argv)}")
        return CommandResult(argv=list(argv), exit_status=0)
