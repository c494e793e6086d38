"""
Result reporter for probe results.

Keeps the most recent probe results in a bounded ring buffer and renders them
for operators. The reporter knows nothing about where output goes: sinks
(terminal, log, ...) subscribe with ``add_listener`` and receive each result
as it is recorded.
"""
from collections import deque
from typing import Callable, List, Optional
import logging
import threading

from .schemas import ProbeOutcome, ProbeResult, ReportSummary

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100

Listener = Callable[[ProbeResult], None]

TABLE_HEADER = f"{'TIMESTAMP':<29} {'TARGET':<8} {'OUTCOME':<8} {'LATENCY':>10}  REASON"


def format_line(result: ProbeResult) -> str:
    """One fixed-width line: timestamp, target, outcome, latency, reason."""
    reason = result.reason or ""
    if result.detail and not result.ok:
        reason = f"{reason} ({result.detail})" if reason else result.detail
    return (
        f"{result.timestamp.isoformat(timespec='milliseconds'):<29} "
        f"{result.target_operation.value:<8} "
        f"{result.outcome.value.upper():<8} "
        f"{result.latency_ms:>8.1f}ms  "
        f"{reason}"
    ).rstrip()


class ResultReporter:
    """
    Append-only store of the last ``capacity`` probe results.

    ``record`` may be called from the prober while another thread renders;
    a lock guards the buffer and readers always work on a snapshot.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._results = deque(maxlen=capacity)
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def add_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def record(self, result: ProbeResult) -> None:
        with self._lock:
            self._results.append(result)
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(result)
            except Exception:
                # A broken sink must not stop results from being recorded
                logger.exception("Result listener %r failed", listener)

    def results(self) -> List[ProbeResult]:
        """Snapshot of buffered results, oldest first."""
        with self._lock:
            return list(self._results)

    def latest(self) -> Optional[ProbeResult]:
        with self._lock:
            return self._results[-1] if self._results else None

    def clear(self) -> None:
        with self._lock:
            self._results.clear()

    def summary(self) -> ReportSummary:
        return summarize(self.results())

    def render(self) -> str:
        """Table of buffered results followed by a summary line."""
        results = self.results()
        summary = summarize(results)

        lines = [TABLE_HEADER]
        lines.extend(format_line(r) for r in results)
        if summary.total:
            lines.append(
                f"{summary.total} probe(s): {summary.successes} ok, {summary.failures} failed, "
                f"{summary.timeouts} timed out; success rate {summary.success_rate:.0%}, "
                f"mean latency {summary.mean_latency_ms:.1f}ms, max {summary.max_latency_ms:.1f}ms"
            )
        else:
            lines.append("no probes recorded")
        return "\n".join(lines)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)


def summarize(results: List[ProbeResult]) -> ReportSummary:
    if not results:
        return ReportSummary()

    successes = sum(1 for r in results if r.outcome == ProbeOutcome.SUCCESS)
    failures = sum(1 for r in results if r.outcome == ProbeOutcome.FAILURE)
    timeouts = sum(1 for r in results if r.outcome == ProbeOutcome.TIMEOUT)
    latencies = [r.latency_ms for r in results]

    return ReportSummary(
        total=len(results),
        successes=successes,
        failures=failures,
        timeouts=timeouts,
        success_rate=successes / len(results),
        mean_latency_ms=sum(latencies) / len(latencies),
        max_latency_ms=max(latencies),
    )
