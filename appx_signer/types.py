"""Type definitions for the packaging pipeline."""

from dataclasses import dataclass, field
from enum import Enum, auto
from functools import total_ordering
from pathlib import Path
from typing import List, Optional, Tuple


@total_ordering
@dataclass(frozen=True)
class KitVersion:
    """Windows Kits directory version: major.minor[.build[.revision]].

    Components are compared numerically from left to right. A version with
    fewer components sorts below one that has them (10.0 < 10.0.0).
    """
    components: Tuple[int, ...]

    @classmethod
    def parse(cls, text: str) -> Optional['KitVersion']:
        """Parses a directory name into a version, or None if it is not one.

        Accepts 2 to 4 dot-separated non-negative integers.
        """
        parts = text.strip().split('.')
        if not 2 <= len(parts) <= 4:
            return None
        if not all(part.isdigit() and part.isascii() for part in parts):
            return None
        return cls(tuple(int(part) for part in parts))

    def __lt__(self, other: 'KitVersion') -> bool:
        if not isinstance(other, KitVersion):
            return NotImplemented
        # Missing components count as -1 so they sort below an explicit 0
        width = 4
        mine = self.components + (-1,) * (width - len(self.components))
        theirs = other.components + (-1,) * (width - len(other.components))
        return mine < theirs

    def __str__(self) -> str:
        return '.'.join(str(c) for c in self.components)


@dataclass(frozen=True)
class ToolchainInfo:
    """Resolved Windows Kits installation."""
    root_dir: Path
    version: KitVersion
    tool_dir: Path


@dataclass
class StageResult:
    """Outcome of one external tool invocation."""
    exit_code: int
    stdout_lines: List[str] = field(default_factory=list)
    stderr_lines: List[str] = field(default_factory=list)


@dataclass
class Session:
    """State of a single packaging attempt.

    Filled in stage by stage and discarded on failure or success.
    """
    source_path: Path
    output_path: Path
    package_extension: str = "appx"
    publisher: str = ""

    @property
    def package_name(self) -> str:
        return self.source_path.name

    @property
    def package_file(self) -> Path:
        return self.output_path / f"{self.package_name}.{self.package_extension}"

    @property
    def private_key_file(self) -> Path:
        return self.output_path / f"{self.package_name}.pvk"

    @property
    def certificate_file(self) -> Path:
        return self.output_path / f"{self.package_name}.cer"

    @property
    def pfx_file(self) -> Path:
        return self.output_path / f"{self.package_name}.pfx"


class PipelineState(Enum):
    """State machine states for the packaging pipeline.

    State Transitions:
    PACK → SIGN_CERT_CREATE → CERT_CONVERT → SIGN → SUCCESS
    any non-terminal state → ABORTED (non-zero exit code or missing tool)
    """
    PACK = auto()
    SIGN_CERT_CREATE = auto()
    CERT_CONVERT = auto()
    SIGN = auto()
    SUCCESS = auto()
    ABORTED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineState.SUCCESS, PipelineState.ABORTED)


@dataclass
class PipelineOutcome:
    """Result handed back to the retry loop after one attempt."""
    state: PipelineState
    failed_stage: Optional[PipelineState] = None
    message: str = ""
    results: List[StageResult] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.SUCCESS
