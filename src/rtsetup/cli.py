from __future__ import annotations

# ---- Environment bootstrap (MUST be first) ----
from dotenv import load_dotenv

# Load .env once at process start
load_dotenv()

# ---- CLI / Pipeline imports ----
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.logging import RichHandler

from .config import DEFAULT_CONFIG, SetupConfig
from .detect import inspect_system
from .errors import SetupError
from .pipeline import run_setup
from .privileged import DryRunRunner, PrivilegedRunner, SudoRunner
from .prompts import AssumeYesPrompter, ConsolePrompter, Prompter
from .schemas import LimitsScan
from .utils import ui


app = typer.Typer(add_completion=False, help="Linux setup for realtime and hardware access (rtsetup)")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=ui.console, show_path=False)],
        force=True,
    )


def _build_config(toolkit_root: Optional[Path], group: Optional[str], no_pause: bool) -> SetupConfig:
    update: Dict[str, Any] = {}
    if toolkit_root is not None:
        update["toolkit_root"] = toolkit_root
    if group:
        update["group"] = group
    if no_pause:
        update["pause_at_end"] = False
    return DEFAULT_CONFIG.model_copy(update=update)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="Print privileged commands instead of running them"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to every question"),
    no_pause: bool = typer.Option(False, "--no-pause", help="Don't wait for a keypress at the end"),
    toolkit_root: Optional[Path] = typer.Option(None, help="Directory holding the bundled template files"),
    group: Optional[str] = typer.Option(None, help="Unix group that receives the realtime limits"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Set up this Linux host so the toolkit can run without root.
    """
    _configure_logging(verbose)
    cfg = _build_config(toolkit_root, group, no_pause)
    ctx.obj = cfg

    if ctx.invoked_subcommand is not None:
        return

    runner: PrivilegedRunner = (
        DryRunRunner(helper=cfg.privilege_helper) if dry_run else SudoRunner(helper=cfg.privilege_helper)
    )
    prompter: Prompter = AssumeYesPrompter() if yes else ConsolePrompter()

    try:
        report = run_setup(cfg, runner, prompter)
    except SetupError as e:
        ui.badge_err(str(e))
        raise typer.Exit(code=1)

    if report is not None:
        ui.note(f"run_id={report.run_id}")
        ui.note(f"outputs at: {Path(cfg.runs_dir) / report.run_id}")


def _print_scan(cfg: SetupConfig, scan: LimitsScan) -> None:
    mark = ui.badge_ok if scan.memlock_ok else ui.badge_warn
    mark(f"memlock {cfg.memlock} for {cfg.group_marker}: {'yes' if scan.memlock_ok else 'no'}")
    mark = ui.badge_ok if scan.rtprio_ok else ui.badge_warn
    mark(f"rtprio {cfg.rtprio} for {cfg.group_marker}: {'yes' if scan.rtprio_ok else 'no'}")


@app.command()
def check(ctx: typer.Context):
    """
    Report the current setup state without changing anything.
    """
    cfg: SetupConfig = ctx.obj
    report = inspect_system(cfg)

    if not report.is_linux:
        ui.badge_warn("Not a Linux host, nothing to check.")
        raise typer.Exit(code=1)

    if report.rules_state == "current":
        ui.badge_ok(f"udev rules installed and current: {cfg.rules_dest}")
    elif report.rules_state == "outdated":
        ui.badge_warn(f"udev rules outdated: {cfg.rules_dest}")
    else:
        ui.badge_warn(f"udev rules missing: {cfg.rules_dest}")

    if report.uses_dropin:
        if report.dropin_installed:
            ui.badge_ok(f"limits drop-in installed: {cfg.dropin_dest}")
            if report.dropin_scan is not None:
                _print_scan(cfg, report.dropin_scan)
        else:
            ui.badge_warn(f"limits drop-in missing: {cfg.dropin_dest}")
    elif not report.limits_readable:
        ui.badge_err(f"limits file unreadable: {cfg.limits_conf}")
    elif report.limits_scan is not None:
        _print_scan(cfg, report.limits_scan)

    if report.group_exists:
        ui.badge_ok(f"group {cfg.group} exists")
    else:
        ui.badge_warn(f"group {cfg.group} does not exist")

    for w in report.warnings:
        ui.badge_err(w)

    if not report.configured:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
