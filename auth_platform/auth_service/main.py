from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from .config import Settings, settings as default_settings
from .errors import AuthServiceError
from .schemas import (
    ErrorResponse,
    SignInRequest,
    SignInResponse,
    SignOutRequest,
    SignOutResponse,
    SignUpRequest,
    SignUpResponse,
)
from .service import AuthService
from .store import AccountStore, SessionRegistry
from .utils.event_logger import AuthEventLog
from .routes import dev_monitor, health

logger = logging.getLogger(__name__)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def auth_error_handler(_request: Request, exc: AuthServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(
    settings: Optional[Settings] = None,
    auth_service: Optional[AuthService] = None,
) -> FastAPI:
    """
    Build the authentication service application.

    A fresh account store, session registry and event log are created unless
    an ``AuthService`` is passed in, so each app instance owns its own state.
    """
    settings = settings or default_settings
    if auth_service is None:
        auth_service = AuthService(
            AccountStore(),
            SessionRegistry(),
            AuthEventLog(capacity=settings.EVENT_LOG_CAPACITY),
        )

    app = FastAPI(
        title="Auth Service",
        description="Account sign-up, sign-in and sign-out",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.auth_service = auth_service

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AuthServiceError, auth_error_handler)

    app.include_router(health.router)
    app.include_router(dev_monitor.router)

    @app.post(
        "/auth/sign-up",
        response_model=SignUpResponse,
        responses={409: {"model": ErrorResponse}},
    )
    def sign_up(payload: SignUpRequest, service: AuthService = Depends(get_auth_service)):
        account = service.sign_up(payload.identity, payload.credential)
        return SignUpResponse(account_id=account.account_id)

    @app.post(
        "/auth/sign-in",
        response_model=SignInResponse,
        responses={401: {"model": ErrorResponse}},
    )
    def sign_in(payload: SignInRequest, service: AuthService = Depends(get_auth_service)):
        session = service.sign_in(payload.identity, payload.credential)
        return SignInResponse(account_id=session.account_id, token=session.token)

    @app.post(
        "/auth/sign-out",
        response_model=SignOutResponse,
        responses={404: {"model": ErrorResponse}},
    )
    def sign_out(payload: SignOutRequest, service: AuthService = Depends(get_auth_service)):
        service.sign_out(payload.token)
        return SignOutResponse()

    return app


app = create_app()
