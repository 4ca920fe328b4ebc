"""
Utilities module for the combat core.

Provides console printing with rich formatting, the singleton metaclass, the
random-source protocol, and table-driven roll helpers.
"""

from __future__ import annotations

from typing import Any, Generic, Protocol, Sequence

from rich.console import Console
from rich.rule import Rule
from typing_extensions import TypeVar

# Initialize the rich console.
_console = Console(markup=True, width=120, force_terminal=True, force_jupyter=False)


def cprint(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output.

    Args:
        *args: Arguments to pass to the console print function.
        **kwargs: Keyword arguments to pass to the console print function.

    """
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output with a rule.

    Args:
        *args: Arguments to pass to the Rule constructor.
        **kwargs: Keyword arguments to pass to the Rule constructor.

    """
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Captures console output as a string.

    Args:
        content (Any): The content to capture.

    Returns:
        str: The captured output as a string.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


# ---- Singleton Metaclass ----


_T = TypeVar("_T")


class Singleton(type, Generic[_T]):
    """Metaclass that returns the same instance every time."""

    _instances: dict[Singleton[_T], _T] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> _T:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]

    def reset(cls) -> None:
        """Drops the cached instance so the next call builds a fresh one."""
        cls._instances.pop(cls, None)


# ---- Random source ----


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1), e.g. random.Random."""

    def random(self) -> float: ...


_V = TypeVar("_V")


def roll_on_table(draw: float, table: Sequence[tuple[float, _V]]) -> _V:
    """
    Picks the first entry whose cumulative threshold is above the draw.

    Args:
        draw (float): A uniform draw in [0, 1).
        table (Sequence[tuple[float, V]]): Cumulative thresholds and values.

    Returns:
        V: The selected value; the last entry catches anything left over.

    """
    for threshold, value in table:
        if draw < threshold:
            return value
    return table[-1][1]


def make_bar(current: int, maximum: int, length: int = 10, color: str = "white") -> str:
    """
    Creates a visual progress bar representation.

    Args:
        current (int): The current value.
        maximum (int): The maximum value.
        length (int): The length of the bar in characters. Defaults to 10.
        color (str): The color for the filled portion. Defaults to "white".

    Returns:
        str: A formatted progress bar string.

    """
    filled = int((current / maximum) * length) if maximum > 0 else 0
    filled = max(0, min(length, filled))
    empty = length - filled
    bar = f"[{color}]" + "▮" * filled
    if empty > 0:
        bar += "[dim white]" + "▯" * empty + "[/]"
    bar += "[/]"
    return bar
