"""
Shared fixtures: a scratch system tree plus scripted stand-ins for sudo and the operator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

from rtsetup.config import SetupConfig
from rtsetup.logger import EventLogger
from rtsetup.privileged import PrivilegedRunner
from rtsetup.prompts import Prompter, is_consent
from rtsetup.schemas import CommandResult


class FakeRunner(PrivilegedRunner):
    """Records commands; exit statuses are served from a queue (default 0).

    `cp` sources only live while the stage runs, so their text is kept in `copied`.
    """

    def __init__(self, statuses: Optional[List[int]] = None, diagnostic: str = "permission denied"):
        self.statuses = list(statuses or [])
        self.diagnostic = diagnostic
        self.calls: List[List[str]] = []
        self.copied: Dict[str, str] = {}

    def run_privileged(self, argv: Sequence[str]) -> CommandResult:
        self.calls.append(list(argv))
        if argv and argv[0] == "cp":
            src = Path(argv[1])
            self.copied[src.name] = src.read_text(encoding="utf-8")
        status = self.statuses.pop(0) if self.statuses else 0
        return CommandResult(
            argv=list(argv),
            exit_status=status,
            diagnostic="" if status == 0 else self.diagnostic,
        )

    def calls_to(self, program: str) -> List[List[str]]:
        return [c for c in self.calls if c and c[0] == program]


class ScriptedPrompter(Prompter):
    """Answers questions from a fixed list of raw operator replies."""

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.questions: List[str] = []

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        answer = self.answers.pop(0) if self.answers else "n"
        return is_consent(answer)


@pytest.fixture(autouse=True)
def _fixed_username(monkeypatch):
    monkeypatch.setattr("rtsetup.stages.group_provisioner.current_username", lambda: "tester")


@pytest.fixture
def system_root(tmp_path: Path) -> Path:
    root = tmp_path / "system"
    (root / "etc" / "udev" / "rules.d").mkdir(parents=True)
    (root / "etc" / "security").mkdir(parents=True)
    (root / "etc" / "security" / "limits.conf").write_text("# /etc/security/limits.conf\n", encoding="utf-8")
    return root


@pytest.fixture
def toolkit_root(tmp_path: Path) -> Path:
    root = tmp_path / "toolkit"
    root.mkdir()
    (root / "psychtoolbox.rules").write_text('SUBSYSTEM=="usb", GROUP="@GROUP@"\n', encoding="utf-8")
    (root / "99-psychtoolboxlimits.conf").write_text(
        "@@GROUP@     -     memlock     @MEMLOCK@\n@@GROUP@     -     rtprio      @RTPRIO@\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def cfg(tmp_path: Path, system_root: Path, toolkit_root: Path) -> SetupConfig:
    return SetupConfig(
        runs_dir=str(tmp_path / "runs"),
        toolkit_root=toolkit_root,
        rules_dir=system_root / "etc" / "udev" / "rules.d",
        limits_conf=system_root / "etc" / "security" / "limits.conf",
        limits_dir=system_root / "etc" / "security" / "limits.d",
        group="psychtoolbox",
        pause_at_end=False,
    )


@pytest.fixture
def event_logger(tmp_path: Path) -> EventLogger:
    return EventLogger(log_path=tmp_path / "logs.jsonl")

