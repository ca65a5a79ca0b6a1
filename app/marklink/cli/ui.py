"""Terminal implementation of the flow UI.

Renders pick lists as numbered Rich tables and reads the choice with
typer.prompt. An empty answer cancels the pick.
"""

import re
from collections.abc import Sequence
from typing import TypeVar

import typer
from rich.markup import escape

from marklink.core.flows import PickOptions, SelectionItem
from marklink.utils.formatting import (
    console,
    create_table,
    print_error,
    print_info,
    print_warning,
)

T = TypeVar("T")

_SEPARATORS = re.compile(r"[\s,]+")


class TerminalUi:
    """Interactive picker and notifier for the terminal.

    Args:
        quiet: If True, info notifications are suppressed.
    """

    def __init__(self, *, quiet: bool = False) -> None:
        self._quiet = quiet

    def pick_one(self, items: Sequence[SelectionItem[T]], options: PickOptions) -> T | None:
        """Ask for a single item by number."""
        self._render(items, options)
        while True:
            answer = self._ask("Select one (empty to cancel)")
            if not answer:
                return None
            indexes = self._parse(answer, len(items))
            if indexes is not None and len(indexes) == 1:
                return items[indexes[0]].data
            print_warning(f"Enter a single number between 1 and {len(items)}.")

    def pick_many(
        self, items: Sequence[SelectionItem[T]], options: PickOptions
    ) -> list[T] | None:
        """Ask for one or more items as comma or space separated numbers."""
        self._render(items, options)
        while True:
            answer = self._ask("Select one or more, e.g. 1,3 (empty to cancel)")
            if not answer:
                return None
            indexes = self._parse(answer, len(items))
            if indexes is not None:
                return [items[i].data for i in indexes]
            print_warning(f"Enter numbers between 1 and {len(items)}.")

    def info(self, message: str) -> None:
        if not self._quiet:
            print_info(message)

    def warn(self, message: str) -> None:
        print_warning(message)

    def error(self, message: str) -> None:
        print_error(message)

    @staticmethod
    def _render(items: Sequence[SelectionItem[T]], options: PickOptions) -> None:
        table = create_table(escape(options.title))
        table.caption = escape(options.placeholder) if options.placeholder else None
        table.add_column("#", justify="right", width=4)
        table.add_column("Name", style="link", no_wrap=True)
        table.add_column("Description", style="text")
        table.add_column("Detail", style="muted", overflow="fold")

        for number, item in enumerate(items, start=1):
            table.add_row(
                str(number),
                escape(item.label),
                escape(item.description or ""),
                escape(item.detail or ""),
            )

        console.print(table)

    @staticmethod
    def _ask(prompt: str) -> str:
        answer: str = typer.prompt(prompt, default="", show_default=False)
        return answer.strip()

    @staticmethod
    def _parse(answer: str, count: int) -> list[int] | None:
        """Turn "1, 3" into zero-based indexes; None if anything is invalid."""
        indexes: list[int] = []
        for token in _SEPARATORS.split(answer):
            if not token:
                continue
            if not token.isdigit():
                return None
            number = int(token)
            if not 1 <= number <= count:
                return None
            if number - 1 not in indexes:
                indexes.append(number - 1)
        return indexes or None
