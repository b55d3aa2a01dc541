"""Console output for the ``endpointkit`` command line.

Response payloads and endpoint listings go to stdout so they can be piped.
Status lines, errors and debug messages go to stderr.

Three renderings exist for stdout:

* ``json`` -- indented JSON.
* ``plain`` -- one compact JSON document per payload, tab-separated rows
  for listings; no colour, no markup.
* ``rich`` -- highlighted JSON and a table, chosen automatically on an
  interactive terminal unless colour is disabled (``--no-color``,
  ``NO_COLOR`` or ``TERM=dumb``).

The CLI installs one :class:`OutputManager` per process with
:func:`set_output`; commands reach it through :func:`get_output` or the
:func:`info`, :func:`error` and :func:`debug` shortcuts.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from rich import box
from rich.console import Console
from rich.json import JSON
from rich.table import Table

from endpointkit.validation import to_wire

if TYPE_CHECKING:
    from endpointkit.client.response import ApiResponse


class OutputFormat(str, Enum):
    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Writes payloads to stdout and diagnostics to stderr.

    Args:
        format: Requested rendering; ``AUTO`` picks ``RICH`` on a colour
            terminal and ``PLAIN`` everywhere else.
        no_color: Disable colour regardless of the environment.
        quiet: Drop status lines (errors are still written).
        verbose: Write debug lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or color_disabled_by_env()
        self._quiet = quiet
        self._verbose = verbose
        self._format = _resolve_format(format, self._no_color)
        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=self._format is OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # stdout

    def show_response(self, response: ApiResponse) -> None:
        """Report the status of *response* on stderr and its data on stdout.

        The status line (``HTTP 201 Created``) counts as a status message and
        is dropped by ``quiet``. A response without data writes nothing to
        stdout.
        """
        reason = response.response.reason_phrase
        self.info(f"HTTP {response.status_code} {reason}".rstrip())

        data = to_wire(response.data)
        if data is None:
            return
        if self._format is OutputFormat.RICH:
            if isinstance(data, (dict, list)):
                self._stdout.print(JSON.from_data(data, ensure_ascii=False))
            else:
                self._stdout.print(str(data), markup=False, highlight=False)
        elif self._format is OutputFormat.JSON:
            self._write(_to_json(data, indent=2))
        elif isinstance(data, (dict, list)):
            self._write(_to_json(data))
        else:
            self._write(str(data))

    def show_rows(self, rows: Sequence[Mapping[str, str]], title: Optional[str] = None) -> None:
        """Write a listing whose columns are the keys of the first row.

        JSON output is the list of rows itself. Plain output is a header
        line followed by one tab-separated line per row. The title is only
        shown in rich output.
        """
        if self._format is OutputFormat.JSON:
            self._write(_to_json([dict(row) for row in rows], indent=2))
            return

        columns = list(rows[0]) if rows else []
        if self._format is OutputFormat.PLAIN:
            for line in [columns, *([row[c] for c in columns] for row in rows)]:
                if line:
                    self._write("\t".join(line))
            return

        table = Table(*columns, title=title, box=box.SIMPLE_HEAD, header_style="bold")
        for row in rows:
            table.add_row(*(row[c] for c in columns))
        self._stdout.print(table)

    # stderr

    def info(self, message: str) -> None:
        if not self._quiet:
            self._note("", message)

    def error(self, message: str) -> None:
        self._note("Error: ", message, style="bold red")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._note("debug: ", message, style="dim")

    def _note(self, label: str, message: str, style: Optional[str] = None) -> None:
        if self._no_color or style is None:
            print(f"{label}{message}", file=sys.stderr, flush=True)
            return
        self._stderr.print(f"{label}{message}", style=style, markup=False, highlight=False)

    def _write(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)


def _resolve_format(requested: OutputFormat, no_color: bool) -> OutputFormat:
    if requested is not OutputFormat.AUTO:
        return requested
    if _stdout_is_terminal() and not no_color:
        return OutputFormat.RICH
    return OutputFormat.PLAIN


def _stdout_is_terminal() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _to_json(data: Any, indent: Optional[int] = None) -> str:
    separators = None if indent else (",", ":")
    return json.dumps(data, indent=indent, separators=separators, ensure_ascii=False, default=str)


def color_disabled_by_env() -> bool:
    """``NO_COLOR`` set to anything, or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; the next :func:`get_output` builds a default one."""
    global _output
    _output = None


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
