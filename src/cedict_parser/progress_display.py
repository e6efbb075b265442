"""
Rich-based live progress panel for scanning dictionary files.

The full CC-CEDICT release is well over 100k lines, so the CLI shows how far
a scan has got without scrolling the terminal. The panel renders on stderr so
it never mixes with entries written to stdout.
"""

import time
from typing import Dict, Optional

from rich import box
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ScanProgress:
    """
    Context manager showing live counters for a CedictReader scan.

    Usage:
        reader = CedictReader(f)
        with ScanProgress("Checking cedict_ts.u8") as progress:
            for result in reader:
                progress.update(reader.stats())
    """

    def __init__(
        self,
        title: str = "Scanning",
        enabled: bool = True,
        update_interval: int = 1000,
        refresh_per_second: int = 10,
    ):
        """
        Args:
            title: Title for the progress panel
            enabled: When False the context manager does nothing
            update_interval: Redraw every N updates (to reduce overhead)
            refresh_per_second: Upper bound on redraws per second
        """
        self.title = title
        self.enabled = enabled
        self.update_interval = update_interval
        self.refresh_per_second = refresh_per_second

        self.counters: Dict[str, int] = {}
        self.live: Optional[Live] = None
        self.start_time: float = 0.0
        self.update_count = 0

    def __enter__(self):
        self.start_time = time.time()
        if self.enabled:
            self.live = Live(
                self._make_panel(),
                console=Console(stderr=True),
                refresh_per_second=self.refresh_per_second,
                transient=True,
            )
            self.live.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.live:
            self.live.update(self._make_panel())
            self.live.__exit__(exc_type, exc_val, exc_tb)
        return False

    def update(self, counters: Dict[str, int]) -> None:
        self.update_count += 1
        self.counters = dict(counters)
        if self.live and self.update_count % self.update_interval == 0:
            self.live.update(self._make_panel())

    @property
    def elapsed(self) -> float:
        return time.time() - self.start_time

    def _make_panel(self) -> Panel:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="left", no_wrap=True)
        grid.add_column(justify="right", no_wrap=True)

        for key, value in self.counters.items():
            grid.add_row(
                Text(f"{key.capitalize()}:", style="bold grey50"),
                Text(f"{value:,}", style="bright_cyan"),
            )

        elapsed = self.elapsed
        grid.add_row(Text("Elapsed:", style="bold grey50"),
                     Text(format_elapsed(elapsed), style="bright_cyan"))
        lines = self.counters.get("lines", 0)
        if elapsed > 0 and lines:
            grid.add_row(Text("Rate:", style="bold grey50"),
                         Text(f"{lines / elapsed:,.1f} lines/s", style="bright_cyan"))

        return Panel(grid, title=self.title, box=box.SIMPLE, border_style="bright_black")


def format_elapsed(seconds: float) -> str:
    """Format seconds as HH:MM:SS, or MM:SS under an hour."""
    if seconds >= 3600:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours:02d}:{minutes:02d}:{int(seconds % 60):02d}"
    minutes = int(seconds // 60)
    return f"{minutes:02d}:{int(seconds % 60):02d}"


def stats_table(title: str, stats: Dict[str, int]) -> Table:
    """Build the end-of-run summary table."""
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Lines", justify="left")
    table.add_column("Count", justify="right")
    for key, value in stats.items():
        table.add_row(key, f"{value:,}")
    return table
