from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class EventLogger:
    """
    Structured event logger (JSON Lines), one file per setup run.

    - fixed fields (ts, run_id, stage, event)
    - meta dict for command exit statuses, paths and decisions
    - append-only, one event per line; password prompts never pass through here
    """
    log_path: Path
    run_id: str = ""

    def log(self, stage: str, event: str, meta: Optional[Dict[str, Any]] = None) -> None:
        record = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime()),
            "run_id": self.run_id or self.log_path.parent.name,
            "stage": stage,
            "event": event,
            "meta": meta or {},
        }
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with self.log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")

    def events(self, stage: Optional[str] = None) -> List[Dict[str, Any]]:
        if not self.log_path.exists():
            return []
        with self.log_path.open("r", encoding="utf-8") as f:
            records = [json.loads(line) for line in f if line.strip()]
        if stage is not None:
            records = [r for r in records if r["stage"] == stage]
        return records
