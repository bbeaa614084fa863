# render_deploy/reporter.py
"""Pipeline log lines and the failure signal.

A failure is recorded rather than raised: ``set_failed`` logs the message,
emits a GitHub Actions error annotation when running there, and flips the
exit code the process will end with.
"""
from __future__ import annotations

import os
import sys
from typing import List, Optional, TextIO

from loguru import logger


def _escape_command_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class PipelineReporter:
    def __init__(self, annotate: Optional[bool] = None, stream: Optional[TextIO] = None):
        if annotate is None:
            annotate = os.getenv("GITHUB_ACTIONS") == "true"
        self.annotate = annotate
        self.stream = stream
        self.failures: List[str] = []

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    @property
    def exit_code(self) -> int:
        return 1 if self.failures else 0

    def info(self, message: str):
        logger.info(message)

    def success(self, message: str):
        logger.success(message)

    def set_failed(self, message: str):
        self.failures.append(message)
        logger.error(message)
        if self.annotate:
            stream = self.stream or sys.stdout
            stream.write(f"::error::{_escape_command_data(message)}\n")
            stream.flush()
