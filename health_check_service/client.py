"""
Async RPC client for the authentication service.
"""
from typing import Any, Dict, Optional
import logging

import httpx

logger = logging.getLogger(__name__)


class AuthRPCError(Exception):
    """The auth service answered, but rejected the call."""

    def __init__(self, code: str, status_code: int, detail: str = ""):
        super().__init__(f"{code} ({status_code}): {detail}")
        self.code = code
        self.status_code = status_code
        self.detail = detail


class MalformedResponse(Exception):
    """The auth service answered with a body that could not be decoded."""


class AuthClient:
    """
    Thin wrapper over ``httpx.AsyncClient`` exposing the auth RPC surface.

    Transport failures (``httpx.ConnectError``, ``httpx.TimeoutException``, ...)
    propagate unchanged so the caller can classify them.
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 5.0,
    ):
        self.base_url = base_url
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "AuthClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def health(self) -> Dict[str, Any]:
        return await self._call("GET", "/health")

    async def sign_up(self, identity: str, credential: str) -> Dict[str, Any]:
        return await self._call("POST", "/auth/sign-up", {"identity": identity, "credential": credential})

    async def sign_in(self, identity: str, credential: str) -> Dict[str, Any]:
        return await self._call("POST", "/auth/sign-in", {"identity": identity, "credential": credential})

    async def sign_out(self, token: str) -> Dict[str, Any]:
        return await self._call("POST", "/auth/sign-out", {"token": token})

    async def _call(self, method: str, path: str, payload: Optional[dict] = None) -> Dict[str, Any]:
        response = await self._client.request(method, path, json=payload)

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedResponse(
                f"{method} {path} returned undecodable body (status {response.status_code})"
            ) from exc

        if response.is_success:
            if not isinstance(body, dict):
                raise MalformedResponse(f"{method} {path} returned {type(body).__name__}, expected object")
            return body

        # FastAPI rejects undecodable or invalid requests with 422 before any handler runs
        code = "TransportError" if response.status_code == 422 else "HTTP%d" % response.status_code
        detail = ""
        if isinstance(body, dict):
            code = body.get("error") or code
            detail = body.get("detail")
            if not isinstance(detail, str):
                detail = str(detail)
        logger.debug("%s %s rejected: code=%s status=%s", method, path, code, response.status_code)
        raise AuthRPCError(code, response.status_code, detail)
