from __future__ import annotations

from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field


StageState = Literal["pending", "ok", "skip", "fail"]


class StageStatus(BaseModel):
    rules: StageState = "pending"
    limits: StageState = "pending"
    group: StageState = "pending"


class RunStatus(BaseModel):
    run_id: str
    stages: StageStatus = Field(default_factory=StageStatus)
    error: Optional[Dict[str, str]] = None
