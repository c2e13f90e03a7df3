"""
Google OAuth 2.0 client - authorization-code flow over httpx.
Builds the consent redirect, exchanges the code for an access token and
reads the OpenID userinfo profile. Fails fast: explicit timeouts, no retries.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from todo_app.config import Settings, get_settings

logger = logging.getLogger(__name__)

GOOGLE_SCOPES = "openid email profile"


class OAuthError(Exception):
    """Provider exchange failed or returned an unusable profile."""


@dataclass(frozen=True)
class ProviderProfile:
    """What the app needs from the identity provider."""

    provider_id: str
    email: str
    name: str | None = None
    email_verified: bool = False


class GoogleOAuthClient:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.settings.google_client_id and self.settings.google_client_secret)

    def authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.settings.google_client_id,
            "redirect_uri": self.settings.google_redirect_uri,
            "response_type": "code",
            "scope": GOOGLE_SCOPES,
            "state": state,
            "access_type": "online",
            "prompt": "select_account",
        }
        return f"{self.settings.google_authorize_url}?{urlencode(params)}"

    async def fetch_profile(self, code: str) -> ProviderProfile:
        """Exchange the authorization code and load the user's profile."""
        async with httpx.AsyncClient(
            timeout=self.settings.oauth_timeout_seconds,
            transport=self._transport,
        ) as client:
            try:
                token_resp = await client.post(
                    self.settings.google_token_url,
                    data={
                        "code": code,
                        "client_id": self.settings.google_client_id,
                        "client_secret": self.settings.google_client_secret,
                        "redirect_uri": self.settings.google_redirect_uri,
                        "grant_type": "authorization_code",
                    },
                    headers={"Accept": "application/json"},
                )
                token_resp.raise_for_status()
                access_token = token_resp.json().get("access_token")
                if not access_token:
                    raise OAuthError("Token response had no access_token")

                info_resp = await client.get(
                    self.settings.google_userinfo_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                info_resp.raise_for_status()
                info = info_resp.json()
            except httpx.HTTPStatusError as e:
                raise OAuthError(
                    f"Google returned {e.response.status_code} for {e.request.url.path}"
                ) from e
            except httpx.RequestError as e:
                raise OAuthError(f"Error talking to Google: {e}") from e
            except ValueError as e:
                raise OAuthError("Google returned a non-JSON response") from e

        return self._profile_from_userinfo(info)

    @staticmethod
    def _profile_from_userinfo(info: dict) -> ProviderProfile:
        sub = info.get("sub")
        email = info.get("email")
        if not sub or not email:
            raise OAuthError("Userinfo is missing sub or email")
        return ProviderProfile(
            provider_id=str(sub),
            email=email,
            name=info.get("name") or email,
            email_verified=bool(info.get("email_verified", False)),
        )


def get_google_oauth_client() -> GoogleOAuthClient:
    """FastAPI dependency; overridden in tests with a mock transport."""
    return GoogleOAuthClient(get_settings())
