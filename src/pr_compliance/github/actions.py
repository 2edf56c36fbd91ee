"""
GitHub Actions Host Adapter

Workflow commands for annotations and failure reporting, and step
outputs written to the GITHUB_OUTPUT file.
"""

import sys
import logging
from typing import Dict, Optional, TextIO


logger = logging.getLogger(__name__)


def escape_data(value: str) -> str:
    return value.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


def format_output_value(value) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class ActionsReporter:
    """
    Reports to the Actions runner.

    Annotations go to stdout as workflow commands and are mirrored to
    the logger. Outputs are appended to the GITHUB_OUTPUT file; without
    one (local runs) they are only logged.
    """

    def __init__(self, output_path: Optional[str] = None, stream: Optional[TextIO] = None):
        self.output_path = output_path
        self.stream = stream or sys.stdout
        self.failed = False

    def _command(self, command: str, message: str) -> None:
        self.stream.write(f"::{command}::{escape_data(message)}\n")
        self.stream.flush()

    def warning(self, message: str) -> None:
        logger.warning(message)
        self._command('warning', message)

    def error(self, message: str) -> None:
        logger.error(message)
        self._command('error', message)

    def set_failed(self, message: str) -> None:
        """Report the run as failed; the caller exits non-zero."""
        self.failed = True
        self.error(message)

    def set_output(self, name: str, value) -> None:
        rendered = format_output_value(value)
        if not self.output_path:
            logger.info(f"Output {name}={rendered} (GITHUB_OUTPUT not set)")
            return

        logger.debug(f"Output {name}={rendered}")
        with open(self.output_path, 'a', encoding='utf-8') as f:
            f.write(f"{name}={rendered}\n")

    def set_outputs(self, outputs: Dict[str, object]) -> None:
        for name, value in outputs.items():
            self.set_output(name, value)
