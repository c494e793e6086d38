"""
Health prober for the authentication service.

Issues synthetic RPC calls on a fixed interval, measures round-trip latency,
and classifies every call as success, failure (with a reason) or timeout.
Each call gets its own timeout, distinct from the probing interval. No probe
error ever escapes the loop: a failed probe is data for the reporter.
"""
import asyncio
import logging
import time
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import httpx

from .client import AuthClient, AuthRPCError, MalformedResponse
from .reporter import ResultReporter
from .schemas import FailureReason, ProbeResult, ProbeTarget

logger = logging.getLogger(__name__)

PROBE_MODES = ("cycle", "liveness")


class HealthProber:
    """
    Periodic prober with a cancellable loop.

    Modes:
        cycle: sign up a fresh random account, sign in, sign out (one result per step)
        liveness: a single call to the Health RPC

    ``stop()`` ends the loop: no new probe is started, and an in-flight probe
    either completes or hits its timeout.
    """

    def __init__(
        self,
        client: AuthClient,
        reporter: ResultReporter,
        interval: float = 5.0,
        timeout: float = 2.0,
        mode: str = "cycle",
        max_cycles: Optional[int] = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        if mode not in PROBE_MODES:
            raise ValueError(f"mode must be one of: {', '.join(PROBE_MODES)}")

        self.client = client
        self.reporter = reporter
        self.interval = interval
        self.timeout = timeout
        self.mode = mode
        self.max_cycles = max_cycles
        self.cycles = 0
        self._stop_event = asyncio.Event()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        if not self._stop_event.is_set():
            logger.info("Health prober stopping after %d cycle(s)", self.cycles)
        self._stop_event.set()

    async def probe_once(self) -> ProbeResult:
        """Call the liveness RPC once and record the result."""
        result, _ = await self._probe(ProbeTarget.HEALTH, self.client.health)
        self.reporter.record(result)
        return result

    async def run_cycle(self) -> List[ProbeResult]:
        """
        Run the synthetic account flow: SignUp -> SignIn -> SignOut.

        A fresh identity and credential are used on every cycle. The cycle
        stops at the first step that does not succeed; later steps depend on
        the earlier ones and are not attempted. After ``stop()`` no sign-in is
        started; a session already issued is still signed out.
        """
        identity = "User-" + str(uuid.uuid4())
        credential = str(uuid.uuid4())
        results = []

        result, _ = await self._probe(ProbeTarget.SIGN_UP, self.client.sign_up, identity, credential)
        self.reporter.record(result)
        results.append(result)
        if not result.ok or self.stopped:
            return results

        result, body = await self._probe(ProbeTarget.SIGN_IN, self.client.sign_in, identity, credential)
        token = body.get("token") if body else None
        if result.ok and not token:
            result = ProbeResult.failure(
                ProbeTarget.SIGN_IN,
                FailureReason.TRANSPORT_ERROR,
                result.latency_ms,
                "sign-in response carried no token",
            )
        self.reporter.record(result)
        results.append(result)
        if not result.ok:
            return results

        result, _ = await self._probe(ProbeTarget.SIGN_OUT, self.client.sign_out, token)
        self.reporter.record(result)
        results.append(result)
        return results

    async def tick(self) -> List[ProbeResult]:
        if self.mode == "liveness":
            return [await self.probe_once()]
        return await self.run_cycle()

    async def run(self) -> None:
        """
        Probe until ``stop()`` is called or ``max_cycles`` is reached.

        The interval is measured from the start of each cycle, so a slow probe
        shortens the following wait instead of delaying the schedule.

        On stop in cycle mode, no new step is issued except the sign-out that
        ends a session the cycle already obtained.
        """
        loop = asyncio.get_running_loop()
        logger.info(
            "Health prober started: mode=%s interval=%.2fs timeout=%.2fs target=%s",
            self.mode, self.interval, self.timeout, self.client.base_url
        )

        while not self._stop_event.is_set():
            started = loop.time()
            await self.tick()
            self.cycles += 1

            if self.max_cycles is not None and self.cycles >= self.max_cycles:
                break

            remaining = self.interval - (loop.time() - started)
            if remaining > 0:
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=remaining)
                except asyncio.TimeoutError:
                    pass

        logger.info("Health prober finished: cycles=%d", self.cycles)

    async def _probe(
        self,
        target: ProbeTarget,
        call: Callable[..., Awaitable[Dict[str, Any]]],
        *args: Any,
    ) -> Tuple[ProbeResult, Optional[Dict[str, Any]]]:
        started = time.perf_counter()

        def elapsed_ms() -> float:
            return (time.perf_counter() - started) * 1000.0

        try:
            body = await asyncio.wait_for(call(*args), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            result = ProbeResult.timeout(target, elapsed_ms(), f"no response within {self.timeout:.2f}s")
            logger.warning("Probe %s timed out: %s", target.value, type(exc).__name__)
            return result, None
        except httpx.ConnectError as exc:
            result = ProbeResult.failure(target, FailureReason.UNREACHABLE, elapsed_ms(), str(exc) or type(exc).__name__)
            logger.warning("Probe %s failed: auth service unreachable (%s)", target.value, exc)
            return result, None
        except AuthRPCError as exc:
            result = ProbeResult.failure(target, exc.code, elapsed_ms(), f"status={exc.status_code} {exc.detail}".strip())
            logger.warning("Probe %s rejected by auth service: %s", target.value, exc)
            return result, None
        except (MalformedResponse, httpx.HTTPError) as exc:
            result = ProbeResult.failure(
                target, FailureReason.TRANSPORT_ERROR, elapsed_ms(), f"{type(exc).__name__}: {exc}"
            )
            logger.warning("Probe %s transport error: %s", target.value, exc)
            return result, None
        except Exception as exc:
            result = ProbeResult.failure(
                target, FailureReason.PROBE_ERROR, elapsed_ms(), f"{type(exc).__name__}: {exc}"
            )
            logger.exception("Probe %s raised unexpectedly", target.value)
            return result, None

        result = ProbeResult.success(target, elapsed_ms())
        logger.debug("Probe %s succeeded in %.1fms", target.value, result.latency_ms)
        return result, body
