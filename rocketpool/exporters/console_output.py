from typing import List

import click


class ConsoleOutput(object):
    """Writes human-readable progress and result lines to stdout."""

    def write_line(self, line: str) -> None:
        click.echo(line)


class BufferOutput(object):
    """Collects output lines in memory instead of printing them."""

    def __init__(self):
        self.lines: List[str] = []

    def write_line(self, line: str) -> None:
        self.lines.append(line)

    def get_lines(self) -> List[str]:
        return list(self.lines)
