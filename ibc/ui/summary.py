from typing import Optional
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from ibc.ui.state import RunState
from ibc.domain.models import BatchPhase

def format_size(size: float) -> str:
    """Format size in bytes to human readable; negative sizes keep their sign."""
    sign = "-" if size < 0 else ""
    size = abs(size)
    if size == 0:
        return "0B"
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size < 1024.0:
            return f"{sign}{size:.1f}{unit}"
        size /= 1024.0
    return f"{sign}{size:.1f}TB"

class Summary:
    """Renders the end-of-run table."""

    def __init__(self, state: RunState, console: Optional[Console] = None):
        self.state = state
        self.console = console or Console()

    def build(self) -> Panel:
        state = self.state
        with state._lock:
            table = Table(show_header=False, box=None, padding=(0, 2))
            table.add_column(style="bold")
            table.add_column(justify="right")
            table.add_row("Files found", str(state.files_found))
            table.add_row("Submitted", str(state.submitted_count))
            table.add_row("Optimized", f"[green]{state.completed_count}[/]")
            table.add_row("Failed", f"[red]{state.failed_count}[/]" if state.failed_count else "0")
            table.add_row("Saved", f"{format_size(state.saved_bytes)} ({state.saved_percent:.2f}%)")
            table.add_row("Time budget", f"{state.budget_seconds}s")
            if state.active_tasks:
                table.add_row("Still running", f"[yellow]{len(state.active_tasks)}[/]")

            failed = list(state.failed_tasks)
            running = list(state.active_tasks)
            phase = state.phase

        if failed or running:
            table.add_row("", "")
            for task in failed:
                table.add_row(f"[red]{task.image.path.name}[/]", task.outcome.value)
            for task in running:
                table.add_row(f"[yellow]{task.image.path.name}[/]", "RUNNING")

        style = "green" if phase == BatchPhase.COMPLETED else "red"
        return Panel(table, title=f"IBC {phase.value}", border_style=style, expand=False)

    def print(self):
        self.console.print(self.build())
