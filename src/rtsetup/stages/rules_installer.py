from __future__ import annotations

from ..config import SetupConfig
from ..detect import rules_state
from ..errors import TemplateMissing
from ..logger import EventLogger
from ..privileged import PrivilegedRunner, copy_command
from ..prompts import Prompter
from ..schemas import StageOutcome
from ..templates import staged_copy
from ..utils import ui

STAGE = "rules"


def install_rules(
    cfg: SetupConfig,
    runner: PrivilegedRunner,
    prompter: Prompter,
    logger: EventLogger,
) -> StageOutcome:
    """
    Stage 1: install or refresh the udev rules file for research hardware.

    Engineering notes:
    - staleness is mtime based: bundled newer than installed -> outdated
    - exactly one privileged copy on consent, nothing on decline
    - never flags group creation
    """
    ui.paragraph([
        "Checking if the udev rules file is installed and up to date.",
        "This file will allow the toolkit to access special research hardware equipment,",
        "e.g., display controllers, response button boxes, and some special features of",
        "your graphics card, e.g., high precision timestamping. You will be able to access",
        "this hardware without running the toolkit as sudo root user.",
    ])

    template = cfg.rules_template
    if not template.exists():
        err = TemplateMissing(template)
        ui.badge_err(str(err))
        logger.log(STAGE, "template_missing", {"path": str(template)})
        return StageOutcome(state="fail", detail=str(err))

    state = rules_state(cfg.rules_dest, template)
    logger.log(STAGE, "detected", {"state": state, "dest": str(cfg.rules_dest)})

    if state == "missing":
        ui.say("The udev rules file is not installed on your system.")
        question = "Should i install it?"
    elif state == "outdated":
        ui.say(
            "The udev rules file is already installed on your system.",
            "However, it seems to be outdated. I have a more recent version with me.",
        )
        question = "Should i update it?"
    else:
        ui.say("The udev rules file is already installed on your system and up to date.")
        return StageOutcome(state="skip", detail="current")

    if not prompter.confirm(question):
        logger.log(STAGE, "declined", {"state": state})
        return StageOutcome(state="skip", detail="declined")

    ui.say(
        "I will copy my most recent rules file to your system. Please enter",
        "now your system administrator password. You will not see any feedback.",
    )
    with staged_copy(template, cfg, cfg.rules_filename) as staged:
        result = runner.run_privileged(copy_command(staged, cfg.rules_dir))
    logger.log(STAGE, "copy", {"exit_status": result.exit_status, "diagnostic": result.diagnostic})

    if result.ok:
        ui.badge_ok("Success! You may need to reboot your machine for some changes to take effect.")
        return StageOutcome(state="ok", detail=state, commands=[result])

    ui.badge_err(f"Failed! The error message was: {result.diagnostic}")
    return StageOutcome(state="fail", detail=result.diagnostic, commands=[result])
