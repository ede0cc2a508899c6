"""
User Interface Utilities.
Console output for the setup dialog: headers, paragraphs and status badges.
File: src/rtsetup/utils/ui.py
"""

from typing import Iterable

from rich.console import Console
from rich.text import Text

# Initialize a global console instance
console = Console(highlight=False, soft_wrap=True)


def print_header(title: str, subtitle: str = ""):
    """Prints a styled header."""
    console.rule(Text(title, style="bold blue"))
    if subtitle:
        console.print(Text(subtitle, style="dim"), justify="center")
    console.print()


def say(*lines: str) -> None:
    """Plain text, one call per paragraph. No markup interpretation."""
    for line in lines:
        console.print(line, markup=False)


def paragraph(lines: Iterable[str]) -> None:
    say(*lines)
    console.print()


def note(msg: str) -> None:
    console.print(Text(msg, style="dim"))


def badge_ok(msg: str) -> None:
    console.print(Text.assemble(("[OK] ", "bold green"), msg))


def badge_warn(msg: str) -> None:
    console.print(Text.assemble(("[WARN] ", "bold yellow"), msg))


def badge_err(msg: str) -> None:
    console.print(Text.assemble(("[ERR] ", "bold red"), msg))
