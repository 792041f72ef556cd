"""hotbuild init — write a default config file."""

from __future__ import annotations

import typer

from hotbuild.cli import ui


def init(
    project_dir: str = typer.Argument(".", help="Project directory"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Create hotbuild.config.yaml with the default settings."""
    from hotbuild.core.config import CONFIG_FILE, ProjectConfig
    from hotbuild.core.paths import resolve_project

    root = resolve_project(project_dir)
    if not root.is_dir():
        ui.error(f"{root} is not a directory.")
        raise typer.Exit(1)

    target = root / CONFIG_FILE
    if target.exists() and not force:
        ui.error(f"{target} already exists (use --force to overwrite).")
        raise typer.Exit(1)

    path = ProjectConfig().save(root)
    ui.success(f"Wrote {path}")
