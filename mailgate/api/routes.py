"""
API routes - Registration and verification endpoints.

This module defines the HTTP endpoints:
- POST /api/register - Register an account and email a verification token
- POST /api/verify-token - Exchange a valid token for a session credential
- GET /api/get-public-key - Fetch the caller's public key (Bearer auth)
- GET /api/ping - Liveness check

Domain calls block on bcrypt, RSA key generation and the database, so
they are dispatched to the threadpool.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool

from mailgate.api.dependencies import get_current_email, get_registration_service
from mailgate.api.models import (
    ErrorResponse,
    PingResponse,
    PublicKeyResponse,
    RegisterRequest,
    RegisterResponse,
    VerifyTokenRequest,
    VerifyTokenResponse,
)
from mailgate.domain.exceptions import EmailAlreadyRegistered, InvalidRegistrationInput
from mailgate.domain.ports import VerifyResult
from mailgate.domain.registration import RegistrationService

router = APIRouter(tags=["accounts"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid registration input"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    },
    summary="Register a new user",
    description="Submit name, email and password to register. "
    "A 5-digit verification token is emailed after the response is sent.",
)
async def register(
    request_data: RegisterRequest,
    background_tasks: BackgroundTasks,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a new account and schedule delivery of its verification token.

    - **name**: Display name
    - **email**: Email address to register
    - **password** / **confirmPassword**: Must match
    """
    try:
        pending = await run_in_threadpool(
            service.register,
            request_data.name,
            request_data.email,
            request_data.password,
            request_data.confirm_password,
        )
    except InvalidRegistrationInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    except EmailAlreadyRegistered:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Registration failed",
        ) from None

    # Runs after the response is sent; failures are logged by the service
    background_tasks.add_task(service.deliver_verification_token, pending.email, pending.token)
    return RegisterResponse(message="Account registered")


@router.post(
    "/verify-token",
    response_model=VerifyTokenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields or invalid token"},
        404: {"model": ErrorResponse, "description": "Account not found"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    },
    summary="Verify email with token",
    description="Submit the 5-digit token received by email. On success the "
    "account is verified and a session credential is returned.",
)
async def verify_token(
    request_data: VerifyTokenRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> VerifyTokenResponse:
    """
    Verify an account and issue a session credential.

    Repeating a successful verification returns a fresh credential
    without re-applying the verified transition.
    """
    try:
        outcome = await run_in_threadpool(
            service.verify_token, request_data.email, request_data.token
        )
    except InvalidRegistrationInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None

    if outcome.succeeded:
        return VerifyTokenResponse(message="Token valid", token=outcome.session_token)
    if outcome.result == VerifyResult.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid token")


@router.get(
    "/get-public-key",
    response_model=PublicKeyResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Missing or invalid credential"},
        404: {"model": ErrorResponse, "description": "Account not found"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    },
    summary="Get public key",
    description="Return the RSA public key of the account identified by the "
    "Bearer session credential.",
)
async def get_public_key(
    email: str = Depends(get_current_email),
    service: RegistrationService = Depends(get_registration_service),
) -> PublicKeyResponse:
    """Return the PEM public key minted for the caller at registration."""
    public_key = await run_in_threadpool(service.get_public_key, email)
    if public_key is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    return PublicKeyResponse(public_key=public_key)


@router.get("/ping", response_model=PingResponse, summary="Liveness check")
async def ping() -> PingResponse:
    """Report that the process is up. Does not touch the database."""
    return PingResponse(message="pong")
