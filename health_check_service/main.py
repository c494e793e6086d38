"""
Health Check Service - periodic liveness and latency probing of the Auth Service
"""
import asyncio
import logging
import signal
import sys
from typing import Optional

from .client import AuthClient
from .config import Settings, settings as default_settings
from .display import LoggingSink, TerminalDisplay
from .prober import HealthProber
from .reporter import ResultReporter

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    # Logs go to stderr so the probe table on stdout stays readable
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def install_signal_handlers(prober: HealthProber) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, prober.stop)
        except (NotImplementedError, RuntimeError):
            # Not available on every platform / outside the main thread
            logger.debug("Signal handler for %s not installed", sig)


async def run(settings: Optional[Settings] = None, max_cycles: Optional[int] = None) -> ResultReporter:
    """Probe the auth service until a termination signal, then print a summary."""
    settings = settings or default_settings

    reporter = ResultReporter(capacity=settings.REPORTER_CAPACITY)
    display = TerminalDisplay(reporter)
    LoggingSink(reporter)

    async with AuthClient(settings.AUTH_SERVICE_URL) as client:
        prober = HealthProber(
            client,
            reporter,
            interval=settings.PROBE_INTERVAL_SECONDS,
            timeout=settings.PROBE_TIMEOUT_SECONDS,
            mode=settings.PROBE_MODE,
            max_cycles=max_cycles,
        )
        install_signal_handlers(prober)
        await prober.run()

    display.flush_summary()
    return reporter


def main() -> None:
    configure_logging(default_settings.LOG_LEVEL)
    asyncio.run(run())


if __name__ == "__main__":
    main()
