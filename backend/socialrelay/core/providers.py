"""
Provider configuration table.

Flow differences between providers are data here; the shared OAuth logic in
``socialrelay.core.oauth`` and ``socialrelay.core.callbacks`` reads them.
Adding a provider means adding an enum member and a row.
"""
import enum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from socialrelay.core.config import Settings, settings as default_settings


class Provider(str, enum.Enum):
    LINKEDIN = "linkedin"
    TWITTER = "twitter"


@dataclass(frozen=True)
class ProviderConfig:
    provider: Provider
    display_name: str
    authorization_endpoint: str
    token_endpoint: str
    scopes: Tuple[str, ...]
    uses_pkce: bool
    requires_client_secret: bool
    client_id: Optional[str]
    client_secret: Optional[str]
    redirect_uri: Optional[str]
    success_url: str
    profile_endpoint: Optional[str] = None
    token_in_redirect: bool = False  # Legacy: append the access token to the success redirect

    @property
    def scope(self) -> str:
        return " ".join(self.scopes)


def _linkedin(s: Settings) -> ProviderConfig:
    return ProviderConfig(
        provider=Provider.LINKEDIN,
        display_name="LinkedIn",
        authorization_endpoint="https://www.linkedin.com/oauth/v2/authorization",
        token_endpoint="https://www.linkedin.com/oauth/v2/accessToken",
        scopes=("r_liteprofile", "r_emailaddress", "w_member_social"),
        uses_pkce=False,
        requires_client_secret=True,
        client_id=s.LINKEDIN_CLIENT_ID,
        client_secret=s.LINKEDIN_CLIENT_SECRET,
        redirect_uri=s.LINKEDIN_REDIRECT_URI,
        success_url=s.LINKEDIN_SUCCESS_URL,
        profile_endpoint="https://api.linkedin.com/v2/me",
        token_in_redirect=s.EXPOSE_TOKEN_IN_REDIRECT,
    )


def _twitter(s: Settings) -> ProviderConfig:
    return ProviderConfig(
        provider=Provider.TWITTER,
        display_name="Twitter",
        authorization_endpoint="https://twitter.com/i/oauth2/authorize",
        token_endpoint="https://api.twitter.com/2/oauth2/token",
        scopes=("tweet.read", "tweet.write", "users.read", "offline.access"),
        uses_pkce=True,
        requires_client_secret=False,
        client_id=s.TWITTER_CLIENT_ID,
        client_secret=None,
        redirect_uri=s.TWITTER_REDIRECT_URI,
        success_url=s.FRONTEND_URL,
    )


_PROVIDER_TABLE = {
    Provider.LINKEDIN: _linkedin,
    Provider.TWITTER: _twitter,
}


def get_provider_config(provider: Provider, s: Optional[Settings] = None) -> ProviderConfig:
    """Build the configuration row for a provider from settings"""
    return _PROVIDER_TABLE[Provider(provider)](s or default_settings)


def all_provider_configs(s: Optional[Settings] = None) -> Dict[Provider, ProviderConfig]:
    return {provider: get_provider_config(provider, s) for provider in Provider}
