from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field


BUNDLED_DATA_DIR = Path(__file__).resolve().parent / "data"


class SetupConfig(BaseModel):
    """
    Global configuration for a setup run.

    Notes:
    - System paths are fields so tests can point them at a scratch tree.
    - Keep config serializable (JSON); a copy lands in every run directory.
    """
    runs_dir: str = Field(
        default_factory=lambda: os.getenv("RTSETUP_RUNS_DIR", os.path.expanduser("~/.rtsetup/runs"))
    )

    # bundled templates
    toolkit_root: Path = Field(
        default_factory=lambda: Path(os.getenv("RTSETUP_TOOLKIT_ROOT", str(BUNDLED_DATA_DIR)))
    )
    rules_filename: str = "psychtoolbox.rules"
    dropin_filename: str = "99-psychtoolboxlimits.conf"

    # system locations
    rules_dir: Path = Field(default_factory=lambda: Path(os.getenv("RTSETUP_RULES_DIR", "/etc/udev/rules.d")))
    limits_conf: Path = Field(
        default_factory=lambda: Path(os.getenv("RTSETUP_LIMITS_CONF", "/etc/security/limits.conf"))
    )
    limits_dir: Path = Field(default_factory=lambda: Path(os.getenv("RTSETUP_LIMITS_DIR", "/etc/security/limits.d")))

    # privileges
    group: str = Field(default_factory=lambda: os.getenv("RTSETUP_GROUP", "psychtoolbox"))
    privilege_helper: str = Field(default_factory=lambda: os.getenv("RTSETUP_PRIVILEGE_HELPER", "sudo"))
    rtprio: int = 50
    memlock: str = "unlimited"

    pause_at_end: bool = True

    @property
    def group_marker(self) -> str:
        return f"@{self.group}"

    @property
    def rules_template(self) -> Path:
        return self.toolkit_root / self.rules_filename

    @property
    def dropin_template(self) -> Path:
        return self.toolkit_root / self.dropin_filename

    @property
    def rules_dest(self) -> Path:
        return self.rules_dir / self.rules_filename

    @property
    def dropin_dest(self) -> Path:
        return self.limits_dir / self.dropin_filename


DEFAULT_CONFIG = SetupConfig()
