"""Exceptions raised by the packaging pipeline."""
from pathlib import Path

SDK_DOWNLOAD_URL = "https://developer.microsoft.com/windows/downloads/windows-10-sdk/"


class PackagerError(Exception):
    """Base class for errors that abort the current packaging attempt."""


class InputValidationError(PackagerError):
    """Operator supplied a source or output path that cannot be used."""


class ManifestError(PackagerError):
    """AppxManifest.xml is unreadable or has no publisher identity."""


class ConfigError(PackagerError):
    """Configuration file exists but cannot be parsed."""


class ToolchainNotFoundError(PackagerError):
    """No versioned Windows Kits directory was found."""

    def __init__(self, kits_root: Path, sdk_url: str = SDK_DOWNLOAD_URL):
        self.kits_root = kits_root
        super().__init__(
            f"Windows Kits 10 not found under '{kits_root}'. "
            f"Install the Windows SDK from {sdk_url}"
        )


class ToolMissingError(PackagerError):
    """A required SDK executable is absent from the tool directory."""

    def __init__(self, tool_name: str, path: Path, sdk_url: str = SDK_DOWNLOAD_URL):
        self.tool_name = tool_name
        self.path = path
        super().__init__(f"{tool_name} missing. Install the Windows SDK from {sdk_url}")
