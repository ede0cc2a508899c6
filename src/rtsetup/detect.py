from __future__ import annotations

import getpass
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import SetupConfig
from .errors import LimitsFileUnreadable
from .schemas import RulesState, SystemReport
from .validators.limits_validator import scan_limits

logger = logging.getLogger(__name__)


def is_linux(platform: Optional[str] = None) -> bool:
    return (platform if platform is not None else sys.platform).startswith("linux")


def rules_state(installed: Path, bundled: Path) -> RulesState:
    """
    missing  -> nothing at the destination
    outdated -> bundled copy has a strictly newer mtime
    current  -> otherwise
    """
    if not installed.exists():
        return "missing"
    if bundled.stat().st_mtime > installed.stat().st_mtime:
        return "outdated"
    return "current"


def read_limits_lines(path: Path) -> List[str]:
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            return f.read().splitlines()
    except OSError as e:
        raise LimitsFileUnreadable(path, str(e)) from e


def group_exists(name: str) -> bool:
    import grp

    try:
        grp.getgrnam(name)
    except KeyError:
        return False
    return True


def current_username() -> str:
    return getpass.getuser()


def inspect_system(cfg: SetupConfig, platform: Optional[str] = None) -> SystemReport:
    """
    Read-only view of everything the setup stages would look at.
    """
    if not is_linux(platform):
        return SystemReport(is_linux=False)

    report = SystemReport(is_linux=True)

    if cfg.rules_template.exists():
        report.rules_state = rules_state(cfg.rules_dest, cfg.rules_template)
    else:
        report.warnings.append(f"Bundled rules file not found: {cfg.rules_template}")
        report.rules_state = "current" if cfg.rules_dest.exists() else "missing"

    report.uses_dropin = cfg.limits_dir.is_dir()
    if report.uses_dropin:
        report.dropin_installed = cfg.dropin_dest.exists()
        if report.dropin_installed:
            try:
                dropin_lines = read_limits_lines(cfg.dropin_dest)
            except LimitsFileUnreadable as e:
                report.warnings.append(str(e))
            else:
                report.dropin_scan = scan_limits(dropin_lines, cfg.group_marker, cfg.memlock, str(cfg.rtprio))
    else:
        try:
            lines = read_limits_lines(cfg.limits_conf)
        except LimitsFileUnreadable as e:
            logger.debug("limits file unreadable: %s", e.reason)
            report.limits_readable = False
        else:
            report.limits_scan = scan_limits(lines, cfg.group_marker, cfg.memlock, str(cfg.rtprio))

    report.group_exists = group_exists(cfg.group)
    logger.debug("inspected system: %s", report.model_dump())
    return report
