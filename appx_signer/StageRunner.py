"""
StageRunner - drives the four SDK tools in dependency order.

State Machine:
- PACK -> SIGN_CERT_CREATE -> CERT_CONVERT -> SIGN -> SUCCESS
- any stage -> ABORTED on non-zero exit code or missing tool

Artifacts from completed stages stay on disk when a later stage aborts.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from appx_signer.Console import Console
from appx_signer.errors import ManifestError, ToolMissingError
from appx_signer.ToolchainLocator import (
    MAKEAPPX_EXE,
    MAKECERT_EXE,
    PVK2PFX_EXE,
    SIGNTOOL_EXE,
    ToolchainLocator,
)
from appx_signer.types import PipelineOutcome, PipelineState, Session, StageResult, ToolchainInfo

CODE_SIGNING_EKU = "1.3.6.1.5.5.7.3.3"


class Invoker(Protocol):
    """Anything that can run an executable and report its exit code."""

    def run(self, executable: Path, args: Sequence[str], working_dir: Path) -> StageResult:
        ...


@dataclass(frozen=True)
class Stage:
    state: PipelineState
    tool_name: str
    build_args: Callable[[Session], List[str]]
    stale_files: Callable[[Session], List[Path]]
    next_state: PipelineState


def pack_args(session: Session) -> List[str]:
    return ["pack", "-d", str(session.source_path), "-p", str(session.package_file), "-l", "-o"]


def make_cert_args(session: Session, start_date: str = "01/01/2000") -> List[str]:
    return [
        "-n", session.publisher,
        "-r",
        "-a", "sha256",
        "-len", "2048",
        "-cy", "end",
        "-h", "0",
        "-eku", CODE_SIGNING_EKU,
        "-b", start_date,
        "-sv", str(session.private_key_file),
        str(session.certificate_file),
    ]


def pvk2pfx_args(session: Session) -> List[str]:
    return [
        "-pvk", str(session.private_key_file),
        "-spc", str(session.certificate_file),
        "-pfx", str(session.pfx_file),
    ]


def sign_args(session: Session) -> List[str]:
    return ["sign", "-fd", "SHA256", "-a", "-f", str(session.pfx_file), str(session.package_file)]


def remove_stale(paths: Sequence[Path]) -> None:
    """Deletes artifacts a stage is about to regenerate."""
    for path in paths:
        if path.exists():
            logging.info(f"Removing existing {path}")
            path.unlink()


class StageRunner:
    """
    Runs Pack, Sign-Cert-Create, Cert-Convert and Sign for one session.

    Args:
        locator: Resolves each tool right before its stage
        toolchain: Selected Windows Kits installation
        invoker: Runs the external tools (ProcessInvoker in production)
        console: Operator status output
        cert_start_date: MakeCert validity start (-b)
    """

    def __init__(self, locator: ToolchainLocator, toolchain: ToolchainInfo,
                 invoker: Invoker, console: Console,
                 cert_start_date: str = "01/01/2000"):
        self._locator = locator
        self._toolchain = toolchain
        self._invoker = invoker
        self._console = console
        self._stages: Dict[PipelineState, Stage] = {
            stage.state: stage for stage in (
                Stage(PipelineState.PACK, MAKEAPPX_EXE,
                      pack_args,
                      lambda s: [],
                      PipelineState.SIGN_CERT_CREATE),
                Stage(PipelineState.SIGN_CERT_CREATE, MAKECERT_EXE,
                      lambda s: make_cert_args(s, cert_start_date),
                      lambda s: [s.private_key_file, s.certificate_file],
                      PipelineState.CERT_CONVERT),
                Stage(PipelineState.CERT_CONVERT, PVK2PFX_EXE,
                      pvk2pfx_args,
                      lambda s: [s.pfx_file],
                      PipelineState.SIGN),
                Stage(PipelineState.SIGN, SIGNTOOL_EXE,
                      sign_args,
                      lambda s: [],
                      PipelineState.SUCCESS),
            )
        }

    def run(self, session: Session) -> PipelineOutcome:
        """
        Runs all stages until SUCCESS or ABORTED.

        Raises:
            ManifestError: If the session has no publisher identity
        """
        if not session.publisher:
            raise ManifestError("Publisher identity is required before signing stages")

        results: List[StageResult] = []
        state = PipelineState.PACK

        while not state.is_terminal:
            stage = self._stages[state]
            outcome = self._run_stage(stage, session, results)
            if outcome is not None:
                return outcome
            self._report_success(stage, session)
            state = stage.next_state

        return PipelineOutcome(state=state, results=results)

    def _run_stage(self, stage: Stage, session: Session,
                   results: List[StageResult]) -> Optional[PipelineOutcome]:
        """Runs one stage; returns an ABORTED outcome on failure, None on success."""
        try:
            tool = self._locator.require_tool(self._toolchain, stage.tool_name)
        except ToolMissingError as e:
            logging.error(str(e))
            return self._abort(stage, str(e), results)

        logging.info(f"Stage {stage.state.name}: {stage.tool_name}")
        try:
            remove_stale(stage.stale_files(session))
        except OSError as e:
            logging.error(f"Cannot remove existing output for {stage.tool_name}: {e}")
            return self._abort(stage, f"Cannot remove existing output file: {e}", results)

        try:
            result = self._invoker.run(tool, stage.build_args(session), self._toolchain.tool_dir)
        except OSError as e:
            logging.error(f"Failed to start {stage.tool_name}: {e}")
            return self._abort(stage, f"{stage.tool_name} could not be started: {e}", results)

        results.append(result)
        if result.exit_code != 0:
            logging.error(f"{stage.tool_name} failed with exit code {result.exit_code}")
            return self._abort(stage, f"{stage.tool_name} failed.", results)
        return None

    def _abort(self, stage: Stage, message: str,
               results: List[StageResult]) -> PipelineOutcome:
        self._console.error(f"\n{message}")
        return PipelineOutcome(
            state=PipelineState.ABORTED,
            failed_stage=stage.state,
            message=message,
            results=results,
        )

    def _report_success(self, stage: Stage, session: Session) -> None:
        if stage.state is PipelineState.PACK:
            self._console.info(f"\nPackage '{session.package_file.name}' created successfully.")
        elif stage.state is PipelineState.SIGN:
            self._console.info("\nPackage signing succeeded!")
