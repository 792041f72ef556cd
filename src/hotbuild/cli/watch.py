"""hotbuild watch — supervise a project in the foreground."""

from __future__ import annotations

import typer

from hotbuild.cli import ui


def watch(
    project_dir: str = typer.Argument(".", help="Project directory to watch"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every file event"),
) -> None:
    """Build and run the project, then rebuild and restart it on every change."""
    from hotbuild.core.config import ProjectConfig
    from hotbuild.core.errors import ConfigError, WatchSetupError
    from hotbuild.core.paths import binary_path, resolve_project
    from hotbuild.core.reentry import is_supervised_child
    from hotbuild.core.supervisor import run
    from hotbuild.logging_config import configure_logging

    if is_supervised_child():
        ui.info("Already running under hotbuild, not starting another supervisor.")
        return

    root = resolve_project(project_dir)
    try:
        cfg = ProjectConfig.load(root)
    except ConfigError as exc:
        ui.error(str(exc))
        raise typer.Exit(1)

    configure_logging(verbose)

    ui.header("hotbuild")
    ui.kv("Project", str(root))
    ui.kv("Watching", f"*{cfg.watch.suffix}")
    ui.kv("Binary", str(binary_path(root, cfg.run.binary)))
    if cfg.env_file and not (root / cfg.env_file).exists():
        ui.warning(f"{cfg.env_file} not found")
    ui.dim("Stop with Ctrl+C")
    ui.plain()

    try:
        run(root, cfg)
    except WatchSetupError as exc:
        ui.error(str(exc))
        raise typer.Exit(1)
