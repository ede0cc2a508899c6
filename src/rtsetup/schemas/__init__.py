from __future__ import annotations

from .core import (
    CommandResult,
    LimitsScan,
    OutcomeState,
    RulesState,
    StageOutcome,
)
from .run_status import RunStatus, StageState, StageStatus
from .report import SetupReport, SystemReport


__all__ = [
    "CommandResult",
    "LimitsScan",
    "OutcomeState",
    "RulesState",
    "StageOutcome",
    "RunStatus",
    "StageState",
    "StageStatus",
    "SetupReport",
    "SystemReport",
]
