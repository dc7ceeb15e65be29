# appx_signer/__init__.py
from .Application import PackagerApp
from .Config import PackagerConfig
from .Console import Console
from .ManifestReader import read_publisher
from .ProcessInvoker import ProcessInvoker
from .StageRunner import StageRunner
from .ToolchainLocator import ToolchainLocator

__all__ = [
    'PackagerApp',
    'PackagerConfig',
    'Console',
    'read_publisher',
    'ProcessInvoker',
    'StageRunner',
    'ToolchainLocator',
]
