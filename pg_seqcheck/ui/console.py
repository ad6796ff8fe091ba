"""
ConsoleUI - Rich-based console interface.

Status, banners and errors go to stderr through rich. The report itself
is written verbatim to stdout (tabs and all), so it can be piped.
"""

import sys
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, MofNCompleteColumn

from .. import __version__


class ConsoleUI:
    """
    Console interface for pg_seqcheck.
    """

    def __init__(
        self,
        quiet: bool = False,
        console: Optional[Console] = None,
        report_stream: Optional[TextIO] = None,
    ):
        self.quiet = quiet
        self.console = console or Console(stderr=True)
        self.report_stream = report_stream or sys.stdout

    def print(self, *args, **kwargs):
        """Print a status message."""
        if self.quiet:
            return
        self.console.print(*args, **kwargs)

    def print_banner(self):
        """Print application banner."""
        if self.quiet:
            return

        banner = f"""
[bold cyan]PostgreSQL Sequence Check[/] [dim]v{__version__}[/]
[dim]Finds sequences shared between columns[/]
        """
        self.console.print(Panel(banner.strip(), border_style="cyan"))

    def print_config(self, summary: str):
        """Print the effective configuration."""
        if self.quiet:
            return
        self.console.print(f"[dim]{escape(summary)}[/]", highlight=False)

    def print_success(self, message: str):
        self.print(f"[green]{message}[/]")

    def print_error(self, message: str):
        """Print an error. Never suppressed by quiet."""
        self.console.print(f"[bold red]Error:[/] {escape(message)}", highlight=False)

    def print_report(self, text: str, leading_blank: bool = True):
        """Write report text to the report stream."""
        if leading_blank:
            print(file=self.report_stream)
        print(text, file=self.report_stream)
        self.report_stream.flush()

    def scan_progress(self) -> Progress:
        """Progress bar for the per-column probes."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=self.console,
            transient=True,
            disable=self.quiet,
        )
