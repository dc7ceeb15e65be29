# PathResolver.py
"""
Path resolution for different distribution environments.

Encapsulates the logic for detecting whether the tool runs from source or
from a portable build, and for resolving its config and log directories.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

DistributionMode = Literal["portable", "development"]

CONFIG_FILE_NAME = "packager_config.json"


@dataclass(frozen=True)
class ResolvedPaths:
    """Immutable container for all resolved application paths."""
    app_dir: Path
    root_dir: Path
    config_dir: Path
    logs_dir: Path
    environment: DistributionMode


class PathResolver:
    """
    Resolves application paths for different distribution environments.

    Environments:
    - portable: frozen executable; logs go to the per-user LOCALAPPDATA
    - development: running from source (including a copied source tree)
    """

    def __init__(self, script_path: Path, is_frozen: bool = False):
        self._script_path = script_path.resolve()
        self._is_frozen = is_frozen
        self._mode = self._detect_distribution_mode()
        self._paths = self._resolve_paths()

    @property
    def paths(self) -> ResolvedPaths:
        """Returns resolved paths for current environment."""
        return self._paths

    @property
    def mode(self) -> DistributionMode:
        """Returns current distribution mode."""
        return self._mode

    def _detect_distribution_mode(self) -> DistributionMode:
        return "portable" if self._is_frozen else "development"

    def _resolve_paths(self) -> ResolvedPaths:
        """Resolves all paths based on distribution mode."""
        if self._mode == "portable":
            app_dir = root_dir = self._script_path.parent
            config_dir = app_dir / "config"
            logs_dir = self._user_logs_dir() or root_dir / "logs"
        else:  # development
            app_dir = root_dir = self._script_path.parent
            config_dir = root_dir / "config"
            logs_dir = root_dir / "logs"

        return ResolvedPaths(
            app_dir=app_dir,
            root_dir=root_dir,
            config_dir=config_dir,
            logs_dir=logs_dir,
            environment=self._mode,
        )

    @staticmethod
    def _user_logs_dir() -> Optional[Path]:
        """Writable per-user log location for portable builds, if LOCALAPPDATA is set."""
        local_app_data = os.environ.get('LOCALAPPDATA')
        if not local_app_data:
            return None
        return Path(local_app_data) / "AppxSigner" / "logs"

    def get_config_path(self, config_name: str = CONFIG_FILE_NAME) -> Path:
        return self._paths.config_dir / config_name

    def ensure_local_dir_structure(self) -> None:
        """Ensures the logs directory exists."""
        self._paths.logs_dir.mkdir(parents=True, exist_ok=True)
