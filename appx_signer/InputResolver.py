"""
InputResolver - reads and validates the app source and output directories.
"""
import logging
from pathlib import Path
from typing import Optional, Tuple

from appx_signer.Console import Console
from appx_signer.errors import InputValidationError

MANIFEST_FILE_NAME = "AppxManifest.xml"


def clean_path_input(raw: str) -> str:
    """Strips whitespace and the quotes added by drag-and-drop into a console."""
    return raw.strip().strip('"').strip()


def validate_source_dir(raw: str) -> Path:
    """
    Returns the source directory if it directly contains AppxManifest.xml.

    Raises:
        InputValidationError: If the manifest is not found
    """
    cleaned = clean_path_input(raw)
    if not cleaned or not (Path(cleaned) / MANIFEST_FILE_NAME).is_file():
        raise InputValidationError(f"Invalid App Path; '{MANIFEST_FILE_NAME}' not found!")
    # the package is named after the directory, so "." must become a real name
    return Path(cleaned).resolve()


def validate_output_dir(raw: str) -> Path:
    """
    Returns the output directory if it exists.

    Raises:
        InputValidationError: If the directory does not exist
    """
    cleaned = clean_path_input(raw)
    if not cleaned or not Path(cleaned).is_dir():
        raise InputValidationError("Invalid Output Path; directory not found!")
    return Path(cleaned).resolve()


class InputResolver:
    """
    Obtains a validated (source, output) pair from the operator.

    Paths given on the command line are tried first; once a preset path is
    rejected, the resolver falls back to prompting for it.
    """

    def __init__(self, console: Console,
                 preset_source: Optional[str] = None,
                 preset_output: Optional[str] = None):
        self._console = console
        self._preset_source = preset_source
        self._preset_output = preset_output

    def resolve(self) -> Tuple[Path, Path]:
        """
        Validates the source path before asking for the output path.

        Raises:
            InputValidationError: On the first invalid path
        """
        source = validate_source_dir(self._take_source())
        output = validate_output_dir(self._take_output())
        logging.info(f"Resolved source={source} output={output}")
        return source, output

    def _take_source(self) -> str:
        if self._preset_source is not None:
            raw, self._preset_source = self._preset_source, None
            return raw
        return self._console.prompt("Enter the App path: ")

    def _take_output(self) -> str:
        if self._preset_output is not None:
            raw, self._preset_output = self._preset_output, None
            return raw
        return self._console.prompt("\nEnter the Output path: ")
