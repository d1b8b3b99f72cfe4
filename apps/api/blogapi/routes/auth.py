"""Account routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from blogapi.domain.context import RequestContext
from blogapi.errors import unwrap
from blogapi.routes.dependencies import get_auth_service, get_authenticated_context
from blogapi.schemas.auth import AuthResponse, LoginRequest, Principal, SignupRequest
from blogapi.schemas.error import ConflictError, ErrorResponse, UnauthorizedError
from blogapi.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ConflictError}},
)
async def signup(
    payload: SignupRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    return unwrap(await service.signup(name=payload.name, email=payload.email, password=payload.password))


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": UnauthorizedError}},
)
async def login(
    payload: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    return unwrap(await service.login(email=payload.email, password=payload.password))


@router.get(
    "/me",
    response_model=Principal,
    responses={401: {"model": UnauthorizedError}},
)
async def me(context: Annotated[RequestContext, Depends(get_authenticated_context)]) -> Principal:
    return unwrap(context.require_principal())
