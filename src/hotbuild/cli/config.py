"""hotbuild config — show the resolved configuration."""

from __future__ import annotations

import typer
import yaml

from hotbuild.cli import ui


def config(
    project_dir: str = typer.Argument(".", help="Project directory"),
) -> None:
    """Print the configuration hotbuild would use for a project."""
    from hotbuild.core.config import CONFIG_FILE, ProjectConfig
    from hotbuild.core.errors import ConfigError
    from hotbuild.core.paths import binary_path, resolve_project

    root = resolve_project(project_dir)
    try:
        cfg = ProjectConfig.load(root)
    except ConfigError as exc:
        ui.error(str(exc))
        raise typer.Exit(1)

    source = root / CONFIG_FILE
    ui.kv("Config", str(source) if source.exists() else "(defaults)")
    ui.kv("Binary", str(binary_path(root, cfg.run.binary)))
    ui.plain()
    ui.plain(yaml.dump(cfg.model_dump(), default_flow_style=False, sort_keys=False).rstrip())
