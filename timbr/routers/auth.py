"""
Authentication API endpoints for signup, login and the current user.
"""

from fastapi import APIRouter, Depends, status
from timbr.models.user import User
from timbr.services.auth import AuthService
from timbr.schemas.auth import SignupRequest, LoginRequest, AuthResponse
from timbr.schemas.user import AuthUser, CurrentUserResponse, UserPublic, PROFILE_RESPONSES
from timbr.schemas.error import get_error_responses, get_auth_error_responses
from timbr.utils.dependencies import get_auth_service, get_current_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Create an account",
    description="Create a user with the profile for its role and return a token",
    responses=get_error_responses(400)
)
async def signup(
    signup_data: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    """
    Register a buyer, seller or agent.

    Args:
        signup_data: Email, password, display name, role and optional phone
        auth_service: Authentication service

    Returns:
        Token and the created user

    Raises:
        DuplicateUserError: If the email is already registered
    """
    user, token = await auth_service.signup(signup_data)
    return AuthResponse(token=token, user=AuthUser.model_validate(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate user with email and password, returns a JWT token",
    responses=get_error_responses(400, 401)
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    """
    Authenticate user and return a JWT token.

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    user, token = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )
    return AuthResponse(token=token, user=AuthUser.model_validate(user))


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
    description="Get the authenticated user and the profile for its role",
    responses=get_auth_error_responses()
)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
) -> CurrentUserResponse:
    profile = current_user.profile
    return CurrentUserResponse(
        user=UserPublic.model_validate(current_user),
        profile=PROFILE_RESPONSES[current_user.role].model_validate(profile) if profile else None,
    )
