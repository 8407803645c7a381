from fastapi import Response

from src.depends import SessionSettings

REFRESH_COOKIE_NAME = "refresh_token"


def set_refresh_cookie(response: Response, token: str, settings: SessionSettings) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=token,
        max_age=int(settings.refresh_ttl.total_seconds()),
        path="/",
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )


def clear_refresh_cookie(response: Response, settings: SessionSettings) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value="",
        max_age=-1,
        path="/",
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )
