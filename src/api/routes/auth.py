"""Authentication routes (register, login)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from api.dependencies import get_user_repo
from api.models import AuthenticatedUser, IdentityErrorResponse, LoginRequest, RegisterRequest, TokenResponse
from api.security import build_user_token, get_current_user_required
from domain.model.errors import (
    AccountLockedError,
    DomainError,
    InvalidCredentialsError,
    RegistrationError,
)
from port.user_repository import UserRepository
from services import auth_service


logger = logging.getLogger(__name__)

router = APIRouter(tags=["user"])


@router.post(
    "/register",
    response_model=TokenResponse,
    responses={400: {"model": IdentityErrorResponse}},
    name="UserRegister",
)
async def register(request: RegisterRequest, repo: UserRepository = Depends(get_user_repo)):
    """Register a new user and return a bearer token.

    Raises:
        HTTPException: 400 Bad Request if the email is taken, the password is weak
            or the user could not be created
    """
    try:
        user = auth_service.register(repo, email=request.email, password=request.password)
    except RegistrationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=IdentityErrorResponse(errors=e.errors).model_dump(),
        )
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return build_user_token(user)


@router.post("/login", response_model=TokenResponse, name="UserLogin")
async def login(request: LoginRequest, repo: UserRepository = Depends(get_user_repo)):
    """Login user and return a bearer token.

    Raises:
        HTTPException: 400 if the account is locked out or the credentials are invalid
    """
    try:
        user = auth_service.authenticate(repo, email=request.email, password=request.password)
    except (AccountLockedError, InvalidCredentialsError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return build_user_token(user, email=request.email)


@router.get("/me", response_model=AuthenticatedUser)
async def get_me(current_user: AuthenticatedUser = Depends(get_current_user_required)):
    """Identity carried by the caller's bearer token."""
    return current_user
