"""Per-request status logging.

Each handled request is reported as ``(status, path)``. The console
implementation colors the status by class, the null implementation drops
everything.
"""

from typing import Protocol

import click

_STATUS_COLORS = {
    1: "blue",
    2: "green",
    3: "yellow",
    4: "red",
    5: "magenta",
}


class RequestLog(Protocol):
    """Receives one record per handled request."""

    def record(self, status: int, path: str) -> None: ...


class ConsoleRequestLog:
    """Prints "[status] path" lines with the status colored by class."""

    def __init__(self, *, err: bool = False) -> None:
        self._err = err

    def record(self, status: int, path: str) -> None:
        click.echo(f"[{format_status(status)}] {path}", err=self._err)


class NullRequestLog:
    """Discards request records."""

    def record(self, status: int, path: str) -> None:
        pass


def format_status(status: int) -> str:
    """Style a status code for terminal output.

    Args:
        status: HTTP status code

    Returns:
        Bold status, colored by status class when the class is known
    """
    color = _STATUS_COLORS.get(status // 100)
    return click.style(str(status), fg=color, bold=True)
