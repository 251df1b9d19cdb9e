"""
Terminal host — the interactive primitives, backed by click prompts.
"""

from __future__ import annotations

import click

from gomodctl.core.services.mod_host import Host


class ClickHost(Host):
    """Prompts on the terminal.

    Args:
        assume_yes: Answer every confirmation with yes (``--yes``).
    """

    def __init__(self, assume_yes: bool = False):
        self.assume_yes = assume_yes

    def select_one(self, title: str, options: list[str]) -> str | None:
        if not options:
            return None

        click.secho(f"{title}:", fg="cyan", bold=True)
        for i, option in enumerate(options, start=1):
            click.echo(f"  {i:>3}) {option}")

        while True:
            answer = click.prompt(
                f"Select {title.lower()} (number or name, empty to cancel)",
                default="",
                show_default=False,
            ).strip()
            if not answer:
                return None
            if answer in options:
                return answer
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1]
            click.secho(f"   Not an option: {answer}", fg="yellow")

    def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        return click.confirm(message, default=False)

    def read_text(self, prompt: str, default: str | None = None) -> str:
        return click.prompt(prompt, default=default or "", show_default=bool(default))

    def display(self, message: str) -> None:
        click.echo(message)
