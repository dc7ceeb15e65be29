"""
PackagerApp - operator retry loop around the packaging pipeline.

Each attempt starts from a fresh Session:
InputResolver -> ManifestReader -> ToolchainLocator -> StageRunner.
The loop ends when an attempt succeeds, the operator interrupts, input
runs out, or the optional attempt limit is reached.
"""
import logging
from typing import Optional

from appx_signer.Config import PackagerConfig
from appx_signer.Console import Console
from appx_signer.errors import InputValidationError, PackagerError
from appx_signer.InputResolver import MANIFEST_FILE_NAME, InputResolver
from appx_signer.ManifestReader import read_publisher
from appx_signer.ProcessInvoker import ProcessInvoker
from appx_signer.StageRunner import Invoker, StageRunner
from appx_signer.ToolchainLocator import ToolchainLocator
from appx_signer.types import PipelineOutcome, PipelineState, Session


class PackagerApp:
    """
    Runs packaging attempts until one succeeds.

    Args:
        config: Toolchain and naming settings
        console: Operator I/O
        invoker: Runs SDK tools (defaults to ProcessInvoker)
        preset_source: Source path from the command line, tried before prompting
        preset_output: Output path from the command line, tried before prompting
        max_attempts: Stop after this many failed attempts (None = unlimited)
    """

    def __init__(self, config: PackagerConfig, console: Console,
                 invoker: Optional[Invoker] = None,
                 preset_source: Optional[str] = None,
                 preset_output: Optional[str] = None,
                 max_attempts: Optional[int] = None):
        self.config = config
        self.console = console
        self.invoker = invoker if invoker is not None else ProcessInvoker()
        self.locator = ToolchainLocator(config.kits_root, config.architecture, config.sdk_url)
        self.input_resolver = InputResolver(console, preset_source, preset_output)
        self.max_attempts = max_attempts

    def run(self) -> int:
        """
        Loops until an attempt succeeds.

        Returns:
            0 on success, 1 if input ended or the attempt limit was reached
        """
        attempts = 0
        try:
            while True:
                attempts += 1
                outcome = self.run_attempt()

                if outcome.succeeded:
                    try:
                        self.console.pause("exit")
                    except EOFError:
                        pass  # no interactive console; nothing to wait for
                    return 0

                logging.info(f"Attempt {attempts} aborted: {outcome.message}")
                if self.max_attempts is not None and attempts >= self.max_attempts:
                    self.console.error(f"\nGiving up after {attempts} attempt(s).")
                    return 1
                self.console.pause("retry")
        except EOFError:
            logging.info("Input closed; exiting.")
            return 1

    def run_attempt(self) -> PipelineOutcome:
        """Runs one full attempt with a new session."""
        self.console.banner()
        try:
            session = self._prepare_session()
            toolchain = self.locator.locate()
            runner = StageRunner(self.locator, toolchain, self.invoker, self.console,
                                 self.config.cert_start_date)
            return runner.run(session)
        except InputValidationError as e:
            logging.info(f"Rejected input: {e}")
            self.console.error(f"\n{e}")
            return PipelineOutcome(state=PipelineState.ABORTED, message=str(e))
        except PackagerError as e:
            logging.error(f"{type(e).__name__}: {e}")
            self.console.error(f"\n{e}")
            return PipelineOutcome(state=PipelineState.ABORTED, message=str(e))

    def _prepare_session(self) -> Session:
        source, output = self.input_resolver.resolve()
        session = Session(
            source_path=source,
            output_path=output,
            package_extension=self.config.package_extension,
        )
        session.publisher = read_publisher(source / MANIFEST_FILE_NAME)
        return session
