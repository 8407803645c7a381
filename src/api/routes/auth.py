from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError, unauthorized
from src.api.utils.cookies import REFRESH_COOKIE_NAME, clear_refresh_cookie, set_refresh_cookie
from src.api.utils.jwt import AccessTokenSigner
from src.app.services.identity_verifier import IIdentityVerifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import ExchangeTokenUseCase, LogoutUseCase, RefreshTokenUseCase
from src.depends import (
    SessionSettings,
    get_access_token_signer,
    get_identity_verifier,
    get_session_settings,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class ExchangeRequest(BaseModel):
    """
    Exchange HTTP request payload

    Carries the identity provider's ID token.
    """

    id_token: str = Field(..., min_length=1, description="Identity provider ID token")


class AccessTokenResponse(BaseModel):
    """Access token returned in the body; the refresh token travels in a cookie"""

    access_token: str


@router.post("/exchange", status_code=status.HTTP_200_OK, response_model=AccessTokenResponse)
async def exchange(
    request: ExchangeRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_verifier: IIdentityVerifier = Depends(get_identity_verifier),
    signer: AccessTokenSigner = Depends(get_access_token_signer),
    settings: SessionSettings = Depends(get_session_settings),
):
    """
    Exchange an identity assertion for session credentials

    Verifies the ID token with the identity provider, creates a refresh
    token and returns an access token. The refresh token is set as an
    HttpOnly cookie.

    Raises:
        - 400 Bad Request: Missing or malformed body
        - 401 Unauthorized: Identity provider rejected the token
        - 500 Internal Server Error: Identity provider or store unavailable
    """
    use_case = ExchangeTokenUseCase(uow, identity_verifier, signer, settings.refresh_ttl)
    result = await use_case.execute(request.id_token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ASSERTION":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    set_refresh_cookie(response, result.value.refresh_token, settings)
    return AccessTokenResponse(access_token=result.value.access_token)


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=AccessTokenResponse)
async def refresh(
    response: Response,
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE_NAME),
    uow: UnitOfWork = Depends(get_unit_of_work),
    signer: AccessTokenSigner = Depends(get_access_token_signer),
    settings: SessionSettings = Depends(get_session_settings),
):
    """
    Rotate the refresh token

    Consumes the refresh token cookie and returns a new access token along
    with a new refresh token cookie. A refresh token works exactly once.

    Raises:
        - 401 Unauthorized: Missing, unknown, revoked or expired refresh token
        - 500 Internal Server Error: Store unavailable or rotation failed
    """
    if not refresh_token:
        raise unauthorized()

    use_case = RefreshTokenUseCase(uow, signer, settings.refresh_ttl)
    result = await use_case.execute(refresh_token)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise unauthorized()
        raise ServerError(error)

    set_refresh_cookie(response, result.value.refresh_token, settings)
    return AccessTokenResponse(access_token=result.value.access_token)


@router.post("/logout", status_code=status.HTTP_200_OK, response_class=PlainTextResponse)
async def logout(
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE_NAME),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: SessionSettings = Depends(get_session_settings),
):
    """
    Logout

    Revokes the refresh token on a best-effort basis and always clears the
    cookie, even when the store is unavailable.
    """
    if refresh_token:
        await LogoutUseCase(uow).execute(refresh_token)

    response = PlainTextResponse("Logged out successfully")
    clear_refresh_cookie(response, settings)
    return response
