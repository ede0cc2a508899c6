"""
Bundled template rendering.
Templates carry @GROUP@ / @MEMLOCK@ / @RTPRIO@ placeholders that are filled
from the SetupConfig before anything is copied into /etc.
File: src/rtsetup/templates.py
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator

from .config import SetupConfig


def placeholders(cfg: SetupConfig) -> Dict[str, str]:
    return {
        "@GROUP@": cfg.group,
        "@MEMLOCK@": cfg.memlock,
        "@RTPRIO@": str(cfg.rtprio),
    }


def render_template(path: Path, cfg: SetupConfig) -> str:
    text = path.read_text(encoding="utf-8")
    for key, value in placeholders(cfg).items():
        text = text.replace(key, value)
    return text


@contextmanager
def staged_copy(template: Path, cfg: SetupConfig, filename: str) -> Generator[Path, None, None]:
    """
    Render `template` into a private temp dir as `filename` and yield its path.

    The privileged `cp` reads from there; the temp dir is removed afterwards.

    Usage:
        with staged_copy(cfg.rules_template, cfg, cfg.rules_filename) as src:
            runner.run_privileged(copy_command(src, cfg.rules_dir))
    """
    with tempfile.TemporaryDirectory(prefix="rtsetup-") as tmp:
        os.chmod(tmp, 0o755)
        staged = Path(tmp) / filename
        staged.write_text(render_template(template, cfg), encoding="utf-8")
        os.chmod(staged, 0o644)
        yield staged
