"""JWT authentication that also accepts the access token from a cookie."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework_simplejwt.authentication import JWTAuthentication  # type: ignore
from rest_framework_simplejwt.exceptions import InvalidToken  # type: ignore


class CookieJWTAuthentication(JWTAuthentication):
    """Read the access token from the ``Authorization`` header or the auth cookie.

    The browser frontend relies on the httpOnly cookie set at OTP
    verification, API clients send a bearer token. A bad bearer token is
    rejected with 401; a stale cookie is treated as an anonymous request so
    public pages keep working after the session expires.
    """

    def authenticate(self, request):  # type: ignore
        header = self.get_header(request)
        if header is not None:
            raw_token = self.get_raw_token(header)
            if raw_token is None:
                return None
            validated_token = self.get_validated_token(raw_token)
            return self.get_user(validated_token), validated_token

        raw_token = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if not raw_token:
            return None
        try:
            validated_token = self.get_validated_token(raw_token.encode())
        except InvalidToken:
            return None
        return self.get_user(validated_token), validated_token


def set_auth_cookie(response, access_token: str) -> None:
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        access_token,
        max_age=settings.AUTH_COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )


def clear_auth_cookie(response) -> None:
    response.delete_cookie(settings.AUTH_COOKIE_NAME, samesite=settings.AUTH_COOKIE_SAMESITE)
