from __future__ import annotations

import logging

import typer

logger = logging.getLogger(__name__)


class Prompter:
    """Asks the operator a yes/no question."""

    def confirm(self, question: str) -> bool:
        raise NotImplementedError


def is_consent(answer: str) -> bool:
    # Only a literal "y" counts. Everything else, empty included, declines.
    return answer.strip() == "y"


class ConsolePrompter(Prompter):
    def confirm(self, question: str) -> bool:
        try:
            answer = typer.prompt(f"{question} [y/n]", default="", show_default=False)
        except (EOFError, KeyboardInterrupt, typer.Abort):
            typer.echo()
            logger.debug("prompt interrupted, treating as decline")
            return False
        return is_consent(answer)


class AssumeYesPrompter(Prompter):
    def confirm(self, question: str) -> bool:
        typer.echo(f"{question} [y/n] : y")
        return True


def pause(message: str = "Press any key to continue.") -> None:
    typer.pause(message)
