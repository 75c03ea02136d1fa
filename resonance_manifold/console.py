"""Console interface for resonance-manifold runs.

Usage:
    from resonance_manifold.console import console

    with console.spinner("Fusing spectra..."):
        do_work()

    console.success("Done", detail="fused 4 bases")
    console.warn("Coherence pulse triggered", detail="entropy 0.93")
    console.error("Step failed", detail=str(err))
    console.step(record)
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Optional

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.text import Text

if TYPE_CHECKING:  # pragma: no cover
    from .core.diagnostics import StepRecord


class Console:
    """Minimal logging interface with rich output."""

    __slots__ = ("_console", "quiet")

    def __init__(self) -> None:
        self._console = RichConsole()
        self.quiet = False

    @contextmanager
    def spinner(self, message: str):
        """Show a spinner while work is in progress."""
        if self.quiet:
            yield
            return
        with self._console.status(f"[bold cyan]{message}", spinner="dots"):
            yield

    def success(self, message: str, *, detail: Optional[str] = None, title: Optional[str] = None) -> None:
        """Green success message."""
        if self.quiet:
            return
        if title:
            text = Text(message, style="bold green")
            if detail:
                text.append(f"\n{detail}", style="dim")
            self._console.print(Panel(text, title=f"[cyan]{title}[/cyan]", border_style="green"))
            return
        self._console.print(f"[bold green]✓[/bold green] {message}" + (f" [dim]{detail}[/dim]" if detail else ""))

    def warn(self, message: str, *, detail: Optional[str] = None) -> None:
        """Yellow warning message."""
        if self.quiet:
            return
        self._console.print(f"[yellow]⚠[/yellow] {message}" + (f" [dim]{detail}[/dim]" if detail else ""))

    def error(self, message: str, *, detail: Optional[str] = None) -> None:
        """Red error message. Always shown, even when quiet."""
        self._console.print(f"[bold red]✗[/bold red] {message}" + (f" [dim]{detail}[/dim]" if detail else ""))

    def info(self, message: str, *, detail: Optional[str] = None) -> None:
        """Blue info message."""
        if self.quiet:
            return
        self._console.print(f"[blue]•[/blue] {message}" + (f" [dim]{detail}[/dim]" if detail else ""))

    def header(self, title: str, **fields: str) -> None:
        """Show a panel with key-value fields."""
        if self.quiet:
            return
        lines = [f"[bold]{k}:[/bold] {v}" for k, v in fields.items()]
        self._console.print(Panel("\n".join(lines), title=f"[cyan]{title}[/cyan]", border_style="blue"))

    def step(self, record: "StepRecord") -> None:
        """One line per completed engine step."""
        if self.quiet:
            return
        self._console.print(
            f"[dim]Step[/dim] {record.step:>3}: "
            f"pos ([cyan]{record.x:.2f}[/cyan], [cyan]{record.y:.2f}[/cyan])  "
            f"fused mean [magenta]{record.fused_mean:.2f}[/magenta]  "
            f"amp {record.amplitude:.2f}  freq {record.frequency:.2f}"
        )


console = Console()
