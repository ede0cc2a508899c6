from __future__ import annotations

from typing import List

from ..config import SetupConfig
from ..detect import read_limits_lines
from ..errors import TemplateMissing
from ..logger import EventLogger
from ..privileged import PrivilegedRunner, append_line_command, copy_command
from ..prompts import Prompter
from ..schemas import CommandResult, StageOutcome
from ..templates import staged_copy
from ..utils import ui
from ..validators.limits_validator import scan_limits

STAGE = "limits"


def limits_lines(cfg: SetupConfig) -> List[str]:
    """The two grant lines appended to the shared limits file."""
    return [
        f"{cfg.group_marker}     -     memlock     {cfg.memlock}",
        f"{cfg.group_marker}     -     rtprio      {cfg.rtprio}",
    ]


def install_limits(
    cfg: SetupConfig,
    runner: PrivilegedRunner,
    prompter: Prompter,
    logger: EventLogger,
) -> StageOutcome:
    """
    Stage 2: grant realtime priority and memory locking to the toolkit group.

    The drop-in directory decides the policy; the two paths never mix.
    """
    if cfg.limits_dir.is_dir():
        logger.log(STAGE, "policy", {"mode": "dropin", "dir": str(cfg.limits_dir)})
        return _install_dropin(cfg, runner, prompter, logger)

    logger.log(STAGE, "policy", {"mode": "legacy", "file": str(cfg.limits_conf)})
    return _install_legacy(cfg, runner, prompter, logger)


def _install_legacy(
    cfg: SetupConfig,
    runner: PrivilegedRunner,
    prompter: Prompter,
    logger: EventLogger,
) -> StageOutcome:
    # Raises LimitsFileUnreadable: fatal for the whole run.
    lines = read_limits_lines(cfg.limits_conf)

    ui.paragraph([
        "",
        f"Checking if {cfg.limits_conf} has entries which allow everyone to",
        "make use of realtime scheduling and memory locking -- Needed for good timing.",
    ])

    scan = scan_limits(lines, cfg.group_marker, cfg.memlock, str(cfg.rtprio))
    logger.log(STAGE, "scanned", scan.model_dump())

    if scan.configured:
        ui.badge_ok("Your system is already setup for use of realtime priority.")
        return StageOutcome(state="skip", detail="configured")

    ui.say("The file seems to be missing some suitable setup lines.")
    if not prompter.confirm("Should i add them for you?"):
        logger.log(STAGE, "declined", {})
        return StageOutcome(state="skip", detail="declined")

    ui.say(
        "I will try to add config lines to your system. Please enter",
        "now your system administrator password. You will not see any feedback.",
    )

    results: List[CommandResult] = []
    for line in limits_lines(cfg):
        result = runner.run_privileged(append_line_command(line, cfg.limits_conf))
        logger.log(STAGE, "append", {"line": line, "exit_status": result.exit_status})
        if not result.ok:
            ui.badge_err(f"Failed! The error message was: {result.diagnostic}")
        results.append(result)

    written = any(r.ok for r in results)
    if all(r.ok for r in results):
        ui.badge_ok("Success!")
        return StageOutcome(state="ok", needs_group=True, detail="appended", commands=results)

    ui.badge_err("Failed! Maybe ask a system administrator for help?")
    diagnostics = "; ".join(r.diagnostic for r in results if not r.ok)
    return StageOutcome(state="fail", needs_group=written, detail=diagnostics, commands=results)


def _install_dropin(
    cfg: SetupConfig,
    runner: PrivilegedRunner,
    prompter: Prompter,
    logger: EventLogger,
) -> StageOutcome:
    dest = cfg.dropin_dest
    if dest.exists():
        logger.log(STAGE, "dropin_present", {"path": str(dest)})
        ui.badge_ok(f"The file {dest} is already installed.")
        return StageOutcome(state="skip", detail="installed")

    template = cfg.dropin_template
    if not template.exists():
        err = TemplateMissing(template)
        ui.badge_err(str(err))
        logger.log(STAGE, "template_missing", {"path": str(template)})
        return StageOutcome(state="fail", detail=str(err))

    ui.say(
        "",
        f"The file {dest} is",
        "not yet installed on your system. It allows painless realtime operation.",
    )
    if not prompter.confirm("Should i install the file for you?"):
        logger.log(STAGE, "declined", {})
        return StageOutcome(state="skip", detail="declined")

    ui.say(
        "I will try to install it now to your system. Please enter",
        "now your system administrator password. You will not see any feedback.",
    )
    with staged_copy(template, cfg, cfg.dropin_filename) as staged:
        result = runner.run_privileged(copy_command(staged, cfg.limits_dir))
    logger.log(STAGE, "copy", {"exit_status": result.exit_status, "diagnostic": result.diagnostic})

    if not result.ok:
        ui.badge_err(f"Failed! The error message was: {result.diagnostic}")
        return StageOutcome(state="fail", detail=result.diagnostic, commands=[result])

    ui.badge_ok("Success!")
    return StageOutcome(state="ok", needs_group=True, detail="installed", commands=[result])
