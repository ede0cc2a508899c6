from __future__ import annotations

from pathlib import Path


class SetupError(Exception):
    """Base class for errors that stop or fail part of a setup run."""


class LimitsFileUnreadable(SetupError):
    """The shared limits file could not be opened; the whole run aborts."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not open {path} for reading. Can not set it up, sorry!")


class TemplateMissing(SetupError):
    """A bundled template file is not where the toolkit root says it is."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Bundled template not found: {path}")


class RunDirUnavailable(SetupError):
    """The run artifact directory could not be created; nothing has been changed yet."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not create run directory {path}: {reason}")
