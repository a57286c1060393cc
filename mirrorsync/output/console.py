# mirrorsync Console Output
# Rich-based console output for job listings and run results

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mirrorsync.provider.base import MirrorProvider


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for sync jobs.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(force_terminal=colored, no_color=not colored)

    @property
    def rich(self) -> RichConsole:
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{message}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{message}[/blue]")

    def print_jobs(self, providers: list[MirrorProvider]) -> None:
        """
        Print a table of configured jobs.

        Args:
            providers: Jobs to list.
        """
        if not providers:
            self._console.print("[dim]No mirrors configured[/dim]")
            return

        table = Table(title="Mirrors", show_header=True, header_style="bold")
        table.add_column("Name", style="cyan")
        table.add_column("Provider", style="magenta")
        table.add_column("Upstream")
        table.add_column("Interval", justify="right")
        table.add_column("Retry", justify="right")

        for provider in providers:
            table.add_row(
                provider.name,
                provider.type.value,
                provider.upstream,
                f"{provider.interval}m",
                str(provider.retry),
            )

        self._console.print(table)

    def print_job_detail(self, provider: MirrorProvider, command: list[str]) -> None:
        """Print the command and paths of one job."""
        lines = [
            f"[bold]Provider:[/bold]    {provider.type.value}",
            f"[bold]Upstream:[/bold]    {provider.upstream}",
            f"[bold]Working dir:[/bold] {provider.working_dir}",
            f"[bold]Log file:[/bold]    {provider.log_file}",
            f"[bold]Command:[/bold]     {escape(' '.join(command))}",
        ]
        self._console.print(Panel("\n".join(lines), title=provider.name, border_style="cyan"))

    def print_run_result(self, provider: MirrorProvider, error: Exception | None = None) -> None:
        """
        Print the outcome of one run.

        Args:
            provider: Job that ran.
            error: Failure raised by the run, if any.
        """
        if error is None:
            size = provider.data_size or "unknown"
            self._console.print(f"[green]✓[/green] [cyan]{provider.name}[/cyan] synced [dim](size: {size})[/dim]")
        else:
            self._console.print(f"[red]✗[/red] [cyan]{provider.name}[/cyan] failed: {escape(str(error))}")

    def print_summary(self, succeeded: int, failed: int) -> None:
        """Print final run summary."""
        total = succeeded + failed
        if failed == 0:
            status = "[green]✓ All jobs completed successfully[/green]"
        else:
            status = "[red]✗ Some jobs failed[/red]"

        summary_text = f"""{status}

[bold]Summary:[/bold]
  • Jobs run: [cyan]{total}[/cyan]
  • Succeeded: [green]{succeeded}[/green]
  • Failed: [red]{failed}[/red]"""

        panel = Panel(summary_text, title="Sync Result", border_style="green" if failed == 0 else "red")
        self._console.print(panel)
