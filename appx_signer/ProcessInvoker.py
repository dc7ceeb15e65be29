"""
ProcessInvoker - runs one SDK executable and streams its output.

stdout and stderr are drained by two daemon threads so the child never
blocks on a full pipe while we wait for it. Each line is forwarded to the
matching sink as soon as it is read. There is no timeout: a hung tool hangs
the pipeline.
"""
import logging
import subprocess
import sys
import threading
from pathlib import Path
from typing import IO, List, Optional, Sequence, TextIO

from appx_signer.types import StageResult


class ProcessInvoker:
    """
    Launches child processes without a shell.

    Args:
        stdout: Sink for child stdout lines (defaults to sys.stdout at call time)
        stderr: Sink for child stderr lines (defaults to sys.stderr at call time)
    """

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self._stdout = stdout
        self._stderr = stderr

    def run(self, executable: Path, args: Sequence[str], working_dir: Path) -> StageResult:
        """
        Runs executable with args in working_dir and waits for it to exit.

        Args:
            executable: Path to the program
            args: Arguments, passed without shell interpretation
            working_dir: Child working directory

        Returns:
            StageResult with exit code and captured lines
        """
        cmd = [str(executable), *args]
        logging.debug(f"Running: {subprocess.list2cmdline(cmd)} (cwd={working_dir})")

        creationflags = subprocess.CREATE_NO_WINDOW if sys.platform == "win32" else 0

        result = StageResult(exit_code=-1)
        with subprocess.Popen(
            cmd,
            cwd=str(working_dir),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding='utf-8',
            errors='replace',
            bufsize=1,
            shell=False,
            creationflags=creationflags,
        ) as proc:
            readers = [
                threading.Thread(
                    target=self._drain,
                    args=(proc.stdout, self._stdout or sys.stdout, result.stdout_lines),
                    daemon=True,
                    name="ProcessInvoker-stdout",
                ),
                threading.Thread(
                    target=self._drain,
                    args=(proc.stderr, self._stderr or sys.stderr, result.stderr_lines),
                    daemon=True,
                    name="ProcessInvoker-stderr",
                ),
            ]
            for reader in readers:
                reader.start()

            result.exit_code = proc.wait()

            for reader in readers:
                reader.join()

        logging.info(f"{executable.name} exited with code {result.exit_code}")
        return result

    @staticmethod
    def _drain(stream: IO[str], sink: TextIO, lines: List[str]) -> None:
        for line in iter(stream.readline, ''):
            line = line.rstrip('\r\n')
            lines.append(line)
            print(line, file=sink, flush=True)
