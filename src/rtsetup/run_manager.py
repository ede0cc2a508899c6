from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

from .config import SetupConfig
from .errors import RunDirUnavailable
from .schemas import RunStatus, SetupReport, StageStatus


def new_run_dir(cfg: SetupConfig, label: str = "setup") -> Path:
    """
    Create a new run directory with a stable naming convention.

    Convention:
    YYYY-MM-DD_HHMMSS_<label>
    """
    ts = time.strftime("%Y-%m-%d_%H%M%S", time.localtime())
    run_dir = Path(cfg.runs_dir) / f"{ts}_{label}"
    suffix = 1
    while run_dir.exists():
        suffix += 1
        run_dir = Path(cfg.runs_dir) / f"{ts}_{label}-{suffix}"
    try:
        run_dir.mkdir(parents=True)
    except OSError as e:
        raise RunDirUnavailable(run_dir, str(e)) from e
    return run_dir


def write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2, default=str)


def init_status(run_dir: Path) -> RunStatus:
    status = RunStatus(run_id=run_dir.name, stages=StageStatus())
    write_json(run_dir / "status.json", status.model_dump())
    return status


def update_status(run_dir: Path, status: RunStatus) -> None:
    write_json(run_dir / "status.json", status.model_dump())


def write_report(run_dir: Path, report: SetupReport) -> None:
    write_json(run_dir / "report.json", report.model_dump())
    (run_dir / "report.md").write_text(render_report_md(report), encoding="utf-8")


def render_report_md(report: SetupReport) -> str:
    lines = []
    lines.append("# Setup Report\n")
    lines.append(f"**Run**: {report.run_id}")
    lines.append(f"**Group**: {report.group}\n")

    lines.append("## Stages\n")
    for name, outcome in (
        ("udev rules", report.rules),
        ("resource limits", report.limits),
        ("user group", report.group_stage),
    ):
        detail = f" ({outcome.detail})" if outcome.detail else ""
        lines.append(f"- {name}: **{outcome.state}**{detail}")

    lines.append("\n## Privileged Commands\n")
    if not report.commands:
        lines.append("- none")
    for cmd in report.commands:
        mark = "ok" if cmd.ok else f"exit {cmd.exit_status}"
        lines.append(f"- `{' '.join(cmd.argv)}`: {mark}")

    lines.append("")
    return "\n".join(lines)
