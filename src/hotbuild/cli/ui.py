"""Centralized CLI output with Rich."""

from __future__ import annotations

from rich.console import Console

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


# ── Status messages ──────────────────────────────────────────────────────────

def success(msg: str) -> None:
    console.print(f"  [green]✓[/green] {msg}")


def error(msg: str) -> None:
    err_console.print(f"  [red]✗[/red] {msg}")


def warning(msg: str) -> None:
    console.print(f"  [yellow]⚠[/yellow] {msg}")


def info(msg: str) -> None:
    console.print(f"  [dim]ℹ {msg}[/dim]")


# ── Structure ────────────────────────────────────────────────────────────────

def header(msg: str) -> None:
    console.print()
    console.print(f"  [bold]{msg}[/bold]")


def kv(key: str, value: str, indent: int = 2) -> None:
    pad = " " * indent
    console.print(f"{pad}[bold]{key + ':':<12}[/bold] {value}")


def dim(msg: str) -> None:
    console.print(f"  [dim]{msg}[/dim]")


def plain(msg: str = "") -> None:
    console.print(msg, markup=False)
