"""
PackagerConfig - settings for toolchain discovery and artifact naming.

Loaded from config/packager_config.json when present. Command-line flags
override individual values via with_overrides().
"""
import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from appx_signer.errors import ConfigError, SDK_DOWNLOAD_URL


def default_kits_root() -> Path:
    """Returns %ProgramFiles(x86)%\\Windows Kits\\10\\bin."""
    program_files = os.environ.get('ProgramFiles(x86)', r"C:\Program Files (x86)")
    return Path(program_files) / "Windows Kits" / "10" / "bin"


@dataclass(frozen=True)
class PackagerConfig:
    kits_root: Path
    architecture: str = "x64"
    package_extension: str = "appx"
    sdk_url: str = SDK_DOWNLOAD_URL
    cert_start_date: str = "01/01/2000"

    @classmethod
    def defaults(cls) -> 'PackagerConfig':
        return cls(kits_root=default_kits_root())

    @classmethod
    def load(cls, config_path: Optional[Path]) -> 'PackagerConfig':
        """Load configuration from JSON file.

        Args:
            config_path: Path to packager_config.json; missing file means defaults

        Returns:
            PackagerConfig with file values applied over defaults

        Raises:
            ConfigError: If the file exists but is not a JSON object
        """
        config = cls.defaults()
        if config_path is None or not config_path.exists():
            logging.debug(f"No config file at {config_path}, using defaults")
            return config

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config file {config_path}: expected a JSON object")

        logging.info(f"Loaded config from {config_path}")
        return config.with_overrides(**data)

    def with_overrides(self, **values: Any) -> 'PackagerConfig':
        """Returns a copy with the given non-None values applied.

        Unknown keys are logged and ignored.
        """
        known = {f.name for f in fields(self)}
        updates: Dict[str, Any] = {}
        for key, value in values.items():
            if key not in known:
                logging.warning(f"Ignoring unknown config key: {key}")
                continue
            if value is None:
                continue
            updates[key] = Path(value) if key == 'kits_root' else value
        return replace(self, **updates)
