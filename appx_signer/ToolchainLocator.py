"""
ToolchainLocator - finds the newest installed Windows Kits bin directory.

Windows Kits 10 installs one bin subdirectory per SDK version:

    Windows Kits/10/bin/
    ├── 10.0.19041.0/x64/MakeAppx.exe
    ├── 10.0.22621.0/x64/MakeAppx.exe
    └── x64/                # legacy, not a version, ignored

The numerically greatest version wins. Individual tools are checked later,
right before the stage that needs them.
"""
import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

from appx_signer.errors import SDK_DOWNLOAD_URL, ToolMissingError, ToolchainNotFoundError
from appx_signer.types import KitVersion, ToolchainInfo

MAKEAPPX_EXE = "MakeAppx.exe"
MAKECERT_EXE = "MakeCert.exe"
PVK2PFX_EXE = "Pvk2Pfx.exe"
SIGNTOOL_EXE = "SignTool.exe"

REQUIRED_TOOLS = (MAKEAPPX_EXE, MAKECERT_EXE, PVK2PFX_EXE, SIGNTOOL_EXE)


def select_latest_version(names: Iterable[str]) -> Optional[Tuple[str, KitVersion]]:
    """
    Picks the name that parses to the greatest KitVersion.

    Names that do not parse are skipped. Returns None if none parse.
    """
    best: Optional[Tuple[str, KitVersion]] = None
    for name in names:
        version = KitVersion.parse(name)
        if version is None:
            continue
        if best is None or version > best[1]:
            best = (name, version)
    return best


class ToolchainLocator:
    """
    Resolves the Windows Kits tool directory and the executables in it.

    Args:
        kits_root: Windows Kits 10 bin directory
        architecture: Tool subdirectory under the version directory (x64, x86, arm64)
        sdk_url: Download link shown in not-found errors
    """

    def __init__(self, kits_root: Path, architecture: str = "x64", sdk_url: str = SDK_DOWNLOAD_URL):
        self.kits_root = kits_root
        self.architecture = architecture
        self.sdk_url = sdk_url

    def locate(self) -> ToolchainInfo:
        """
        Returns the highest-versioned kit and its architecture tool directory.

        Raises:
            ToolchainNotFoundError: If the root is missing or holds no version directory
        """
        if not self.kits_root.is_dir():
            raise ToolchainNotFoundError(self.kits_root, self.sdk_url)

        subdirs = {p.name: p for p in self.kits_root.iterdir() if p.is_dir()}
        latest = select_latest_version(subdirs)
        if latest is None:
            raise ToolchainNotFoundError(self.kits_root, self.sdk_url)

        name, version = latest
        tool_dir = subdirs[name] / self.architecture
        logging.info(f"Using Windows Kits {version}: {tool_dir}")
        return ToolchainInfo(root_dir=self.kits_root, version=version, tool_dir=tool_dir)

    def require_tool(self, toolchain: ToolchainInfo, tool_name: str) -> Path:
        """
        Returns the path of tool_name inside the tool directory.

        Raises:
            ToolMissingError: If the executable does not exist
        """
        path = toolchain.tool_dir / tool_name
        if not path.is_file():
            raise ToolMissingError(tool_name, path, self.sdk_url)
        return path
