"""hotbuild — rebuild and relaunch a program whenever its sources change."""

from hotbuild.core.config import ProjectConfig
from hotbuild.core.errors import ConfigError, HotbuildError, WatchSetupError
from hotbuild.core.reentry import is_supervised_child
from hotbuild.core.supervisor import Supervisor, run

__all__ = [
    "run",
    "Supervisor",
    "ProjectConfig",
    "is_supervised_child",
    "HotbuildError",
    "ConfigError",
    "WatchSetupError",
]
