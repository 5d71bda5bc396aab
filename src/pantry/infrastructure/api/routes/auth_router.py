"""Authentication API routes.

A single operator account signs in with email and password. The issued
access token is set as an HTTP-only cookie and also returned in the body
for API clients that prefer a Bearer header.
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from pantry.core.config import get_settings
from pantry.core.logging import get_logger
from pantry.infrastructure.api.dependencies import AuthenticatedOperator
from pantry.infrastructure.api.schemas import LoginRequest, OperatorResponse, TokenResponse
from pantry.infrastructure.auth import DUMMY_PASSWORD_HASH, jwt_service, verify_password
from pantry.infrastructure.persistence.database import get_db_session
from pantry.infrastructure.persistence.repositories import OperatorRepository

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"description": "Invalid credentials"}},
)
async def login(
    request: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
) -> TokenResponse | JSONResponse:
    """Authenticate the operator and start a session.

    Security:
    - All authentication failures return the same generic 401 message
    - Password verification always runs, against a dummy hash for unknown emails
    """
    settings = get_settings()
    auth_error = JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "error": "Authentication failed",
            "message": "Invalid credentials",
        },
    )

    operator_repo = OperatorRepository(session)
    operator = await operator_repo.get_by_email(request.email)

    if operator is None:
        logger.info("Login failed: operator not found", email=request.email)
        verify_password(request.password, DUMMY_PASSWORD_HASH)
        return auth_error

    if not verify_password(request.password, operator.password_hash):
        logger.info("Login failed: invalid password", operator_id=operator.id)
        return auth_error

    await operator_repo.update_last_login(operator)
    await session.commit()

    access_token = jwt_service.create_access_token(operator_id=operator.id, email=operator.email)
    expires_in = settings.access_token_expire_minutes * 60

    response.set_cookie(
        key=settings.auth_cookie_name,
        value=access_token,
        max_age=expires_in,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
    )

    logger.info("Operator logged in", operator_id=operator.id)
    return TokenResponse(access_token=access_token, expires_in=expires_in)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout() -> Response:
    """End the session by clearing the cookie. Tokens are stateless."""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(get_settings().auth_cookie_name)
    return response


@router.get("/me", response_model=OperatorResponse)
async def me(current_operator: AuthenticatedOperator) -> OperatorResponse:
    return OperatorResponse(id=current_operator.operator_id, email=current_operator.email)
