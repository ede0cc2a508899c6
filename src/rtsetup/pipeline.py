from __future__ import annotations

from typing import Optional

from .config import SetupConfig
from .detect import is_linux
from .errors import SetupError
from .logger import EventLogger
from .privileged import PrivilegedRunner
from .prompts import Prompter, pause
from .run_manager import init_status, new_run_dir, update_status, write_json, write_report
from .schemas import SetupReport
from .stages.group_provisioner import provision_group
from .stages.limits_installer import install_limits
from .stages.rules_installer import install_rules
from .utils import ui


def run_setup(
    cfg: SetupConfig,
    runner: PrivilegedRunner,
    prompter: Prompter,
    platform: Optional[str] = None,
) -> Optional[SetupReport]:
    """
    Execute the host setup with run artifacts persisted.

    Stages:
      1) udev rules file
      2) realtime / memlock limits (drop-in or limits.conf)
      3) toolkit user group

    Returns None without touching anything on non-Linux hosts.
    Raises RunDirUnavailable before any stage when runs_dir is not writable.
    Raises LimitsFileUnreadable when limits.conf can't be read (run aborted).
    """
    if not is_linux(platform):
        return None

    ui.print_header("Linux system setup", "Running the toolkit as a non-root user")
    ui.paragraph([
        "You need to be a user with administrative rights for this function to succeed.",
        "If you don't have administrator rights, or if you don't trust this script to",
        'tinker around with system settings, simply answer all questions with "n" for "No"',
        "and then call a system administrator for help.",
    ])

    run_dir = new_run_dir(cfg)
    logger = EventLogger(log_path=run_dir / "logs.jsonl", run_id=run_dir.name)
    status = init_status(run_dir)
    write_json(run_dir / "config.json", cfg.model_dump())

    # ---- Stage 1 ----
    logger.log("rules", "start", {"dest": str(cfg.rules_dest)})
    rules = install_rules(cfg, runner, prompter, logger)
    status.stages.rules = rules.state
    logger.log("rules", "done", {"state": rules.state})
    update_status(run_dir, status)

    # ---- Stage 2 ----
    try:
        logger.log("limits", "start", {"dropin_dir": str(cfg.limits_dir)})
        limits = install_limits(cfg, runner, prompter, logger)
        status.stages.limits = limits.state
        logger.log("limits", "done", {"state": limits.state, "needs_group": limits.needs_group})
    except SetupError as e:
        status.stages.limits = "fail"
        status.error = {"stage": "limits", "message": str(e)}
        logger.log("limits", "fail", {"error": str(e)})
        update_status(run_dir, status)
        raise

    update_status(run_dir, status)

    # ---- Stage 3 ----
    logger.log("group", "start", {"needs_group": limits.needs_group})
    group = provision_group(cfg, runner, limits.needs_group, logger)
    status.stages.group = group.state
    logger.log("group", "done", {"state": group.state})
    update_status(run_dir, status)

    # ---- Final packaging ----
    report = SetupReport(
        run_id=run_dir.name,
        group=cfg.group,
        rules=rules,
        limits=limits,
        group_stage=group,
    )
    write_report(run_dir, report)
    logger.log("pipeline", "done", {"run_id": run_dir.name, "commands": len(report.commands)})

    ui.paragraph([
        "",
        "Finished. Your system should now be ready for use with the toolkit.",
        "If you encounter problems, try rebooting the machine. Some of the settings only",
        "become effective after a reboot.",
    ])
    if cfg.pause_at_end:
        pause()

    return report
