"""
Output sinks for probe results.
"""
from typing import TextIO, Optional
import logging
import sys
import threading

from .reporter import TABLE_HEADER, ResultReporter, format_line
from .schemas import ProbeResult

logger = logging.getLogger(__name__)


class TerminalDisplay:
    """Writes one line per recorded probe result to a text stream."""

    def __init__(self, reporter: ResultReporter, stream: Optional[TextIO] = None):
        self.reporter = reporter
        self.stream = stream or sys.stdout
        self._header_written = False
        self._lock = threading.Lock()
        reporter.add_listener(self.on_result)

    def on_result(self, result: ProbeResult) -> None:
        with self._lock:
            if not self._header_written:
                self.stream.write(TABLE_HEADER + "\n")
                self._header_written = True
            self.stream.write(format_line(result) + "\n")
            self.stream.flush()

    def flush_summary(self) -> None:
        with self._lock:
            self.stream.write("\n" + self.reporter.render() + "\n")
            self.stream.flush()


class LoggingSink:
    """Forwards probe results to the standard logger, warnings for non-success."""

    def __init__(self, reporter: ResultReporter, log: Optional[logging.Logger] = None):
        self.log = log or logger
        reporter.add_listener(self.on_result)

    def on_result(self, result: ProbeResult) -> None:
        level = logging.INFO if result.ok else logging.WARNING
        self.log.log(
            level,
            "PROBE target=%s outcome=%s reason=%s latency_ms=%.1f",
            result.target_operation.value, result.outcome.value, result.reason, result.latency_ms
        )
