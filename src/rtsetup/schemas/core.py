from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


RulesState = Literal["missing", "outdated", "current"]
OutcomeState = Literal["ok", "skip", "fail"]


# ---------- Privileged command ----------
class CommandResult(BaseModel):
    argv: List[str] = Field(default_factory=list)
    exit_status: int
    diagnostic: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


# ---------- Limits scan ----------
class LimitsScan(BaseModel):
    memlock_ok: bool = False
    rtprio_ok: bool = False

    @property
    def configured(self) -> bool:
        return self.memlock_ok and self.rtprio_ok


# ---------- Stage outcome ----------
class StageOutcome(BaseModel):
    """
    Result of one stage.

    needs_group is the accumulator carried from the limits stage into the
    group stage; only a successful limits write sets it.
    """
    state: OutcomeState
    needs_group: bool = False
    detail: str = ""
    commands: List[CommandResult] = Field(default_factory=list)
