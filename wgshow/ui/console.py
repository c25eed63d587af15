"""Console UI for wgshow."""
import sys

from rich.console import Console
from rich.markup import escape


class ConsoleUI:
    """UI class for console output.

    The report already carries its own ANSI sequences, so it is written to
    stdout untouched; rich is only used for diagnostics on stderr.
    """
    def __init__(self, stdout=None, stderr=None):
        self.stdout = stdout
        self.console = Console(file=stderr, stderr=stderr is None, highlight=False)

    def print_report(self, text):
        """Write the rendered report followed by a single newline."""
        if not text:
            return
        out = self.stdout or sys.stdout
        out.write(text + '\n')
        out.flush()

    def print_error(self, error, show_traceback=False):
        """Print error message."""
        self.console.print(f"[red]Error:[/red] {escape(str(error))}", soft_wrap=True)
        if show_traceback:
            self.console.print_exception()
