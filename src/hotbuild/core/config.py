"""Project configuration parsed from hotbuild.config.yaml."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from hotbuild.core.errors import ConfigError

CONFIG_FILE = "hotbuild.config.yaml"


class WatchConfig(BaseModel):
    suffix: str = ".go"
    # Emacs lock files look like ".#main.go"
    ignore_markers: list[str] = [".#"]
    skip_dirs: list[str] = [".git"]
    recursive: bool = False
    debounce_ms: int = 50


class BuildConfig(BaseModel):
    steps: list[list[str]] = [["go", "install"], ["go", "build"]]
    env: dict[str, str] = {"GOGC": "off"}


class RunConfig(BaseModel):
    binary: str = ""
    args: list[str] = []


class ProjectConfig(BaseModel):
    watch: WatchConfig = WatchConfig()
    build: BuildConfig = BuildConfig()
    run: RunConfig = RunConfig()
    env_file: str = ".env"

    @classmethod
    def load(cls, project_dir: str | Path) -> ProjectConfig:
        config_path = Path(project_dir) / CONFIG_FILE
        if not config_path.exists():
            return cls()
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            return cls.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as exc:
            raise ConfigError(f"Invalid config {config_path}: {exc}") from exc

    def save(self, project_dir: str | Path) -> Path:
        """Write the current config to hotbuild.config.yaml and return its path."""
        config_path = Path(project_dir) / CONFIG_FILE
        data = self.model_dump()
        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        return config_path
