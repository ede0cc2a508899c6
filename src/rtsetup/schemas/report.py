from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .core import CommandResult, LimitsScan, RulesState, StageOutcome


class SetupReport(BaseModel):
    """
    Final summary of a setup run (report.json / report.md).
    """
    run_id: str
    group: str
    rules: StageOutcome
    limits: StageOutcome
    group_stage: StageOutcome

    @property
    def commands(self) -> List[CommandResult]:
        return self.rules.commands + self.limits.commands + self.group_stage.commands


class SystemReport(BaseModel):
    """
    Read-only snapshot of the host, produced by `rtsetup check`.
    """
    is_linux: bool
    rules_state: Optional[RulesState] = None
    uses_dropin: bool = False
    dropin_installed: bool = False
    dropin_scan: Optional[LimitsScan] = None
    limits_scan: Optional[LimitsScan] = None
    limits_readable: bool = True
    group_exists: bool = False
    warnings: List[str] = Field(default_factory=list)

    @property
    def limits_configured(self) -> bool:
        if self.uses_dropin:
            return self.dropin_installed and self.dropin_scan is not None and self.dropin_scan.configured
        return self.limits_scan is not None and self.limits_scan.configured

    @property
    def configured(self) -> bool:
        return (
            self.is_linux
            and self.rules_state == "current"
            and self.limits_configured
            and self.group_exists
        )
