from __future__ import annotations

from ..config import SetupConfig
from ..detect import current_username
from ..logger import EventLogger
from ..privileged import PrivilegedRunner, groupadd_command
from ..schemas import StageOutcome
from ..utils import ui

STAGE = "group"


def provision_group(
    cfg: SetupConfig,
    runner: PrivilegedRunner,
    needs_group: bool,
    logger: EventLogger,
) -> StageOutcome:
    """
    Stage 3: create the toolkit group when the limits stage asked for it,
    then tell the operator how to add users. Users are never added here.
    """
    if needs_group:
        result = runner.run_privileged(groupadd_command(cfg.group))
        logger.log(STAGE, "groupadd", {"exit_status": result.exit_status, "diagnostic": result.diagnostic})
        if result.ok:
            ui.badge_ok(f'I have created a new Unix user group called "{cfg.group}" on your system.')
            outcome = StageOutcome(state="ok", detail="created", commands=[result])
        else:
            ui.badge_err(f"Failed to create group {cfg.group}! The error message was: {result.diagnostic}")
            outcome = StageOutcome(state="fail", detail=result.diagnostic, commands=[result])
    else:
        logger.log(STAGE, "assumed_present", {"group": cfg.group})
        ui.say("", f'Your system has a Unix user group called "{cfg.group}".')
        outcome = StageOutcome(state="skip", detail="assumed_present")

    ui.paragraph([
        "All members of that group can use realtime priority and memory locking now",
        "without the need to run the toolkit as sudo root user.",
        "",
        "You need to add each user of the toolkit to that group. You could do this",
        "with the user management tools of your system. Or you can open a terminal window",
        "and type the following command (here as an example to add yourself to that group):",
        "",
        f"sudo usermod -a -G {cfg.group} {current_username()}",
        "",
        "After that, the new group member must log out and then login again for the",
        "settings to take effect.",
    ])
    return outcome
