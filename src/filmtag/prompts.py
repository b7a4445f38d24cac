"""
Interactive terminal prompts.
"""

import math
from typing import Callable, List, Optional


class Prompter:
    """
    Numbered menus and simple questions on the terminal.

    Input and output functions are injectable so that the prompts can be
    driven from tests.
    """

    def __init__(self, input_func: Optional[Callable[[str], str]] = None,
                 output: Optional[Callable[[str], None]] = None):
        self._input = input_func or input
        self._output = output or print

    def _ask(self, message: str) -> str:
        return self._input(message).strip()

    @staticmethod
    def filter_labels(labels: List[str], query: str) -> List[int]:
        """Indices of labels containing every word of the query (case-insensitive)."""
        words = query.lower().split()
        return [
            i for i, label in enumerate(labels)
            if all(word in label.lower() for word in words)
        ]

    def choose(self, title: str, labels: List[str]) -> int:
        """
        Show a numbered menu and return the index of the chosen label.

        The user can type a number, or some text to narrow the list down.
        A search that matches exactly one entry selects it.
        """
        if not labels:
            raise ValueError("nothing to choose from")

        visible = list(range(len(labels)))
        while True:
            self._output(f"\n{title}")
            for n, index in enumerate(visible, 1):
                self._output(f"  {n:2d}) {labels[index]}")

            response = self._ask("Enter a number, or text to search: ")
            if not response:
                visible = list(range(len(labels)))
                continue

            if response.isdecimal():
                choice = parse_choice(response, len(visible))
                if choice is not None:
                    return visible[choice]
                self._output(f"Invalid choice: {response}. Enter 1-{len(visible)}.")
                continue

            matches = self.filter_labels(labels, response)
            if len(matches) == 1:
                return matches[0]
            if not matches:
                self._output(f"No match for '{response}'.")
                visible = list(range(len(labels)))
            else:
                visible = matches

    def ask_text(self, message: str) -> str:
        """Ask for a non-empty string."""
        while True:
            response = self._ask(message)
            if response:
                return response
            self._output("A value is required.")

    def ask_int(self, message: str) -> int:
        """Ask for a positive whole number."""
        while True:
            response = self._ask(message)
            try:
                value = int(response)
            except ValueError:
                self._output(f"Invalid number: {response}")
                continue
            if value > 0:
                return value
            self._output(f"Invalid number: {response} (must be greater than 0)")

    def ask_float(self, message: str) -> float:
        """Ask for a positive decimal number."""
        while True:
            response = self._ask(message)
            try:
                value = float(response)
            except ValueError:
                self._output(f"Invalid number: {response}")
                continue
            if value > 0 and math.isfinite(value):
                return value
            self._output(f"Invalid number: {response} (must be greater than 0)")

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question."""
        hint = "[Y/n]" if default else "[y/N]"
        while True:
            response = self._ask(f"{message} {hint} ").lower()
            if not response:
                return default
            if response in ('y', 'yes'):
                return True
            if response in ('n', 'no'):
                return False
            self._output("Please answer 'y' or 'n'.")


def parse_choice(response: str, count: int) -> Optional[int]:
    """Zero-based index for a 1-based menu answer, or None if invalid."""
    if response.strip().isdecimal():
        n = int(response.strip())
        if 1 <= n <= count:
            return n - 1
    return None
