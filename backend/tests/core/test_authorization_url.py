from urllib.parse import parse_qs, urlparse

import pytest

from socialrelay.core.oauth import build_authorization_url
from socialrelay.core.providers import Provider, all_provider_configs, get_provider_config

from ..conftest import make_settings


def _query(url: str) -> dict:
    return {key: values[0] for key, values in parse_qs(urlparse(url).query).items()}


class TestBuildAuthorizationUrl:
    @pytest.mark.parametrize(
        "client_id,redirect_uri",
        [
            ("li-client", "http://localhost:3000/auth/linkedin/callback"),
            ("id with spaces&amp", "https://example.com/cb?next=/a b&x=1"),
        ],
    )
    def test_linkedin_parameters_round_trip(self, client_id, redirect_uri) -> None:
        # Arrange
        settings = make_settings(LINKEDIN_CLIENT_ID=client_id, LINKEDIN_REDIRECT_URI=redirect_uri)
        config = get_provider_config(Provider.LINKEDIN, settings)

        # Act
        url = build_authorization_url(config, state="state-1")

        # Assert
        assert url.startswith("https://www.linkedin.com/oauth/v2/authorization?")
        query = _query(url)
        assert query["client_id"] == client_id
        assert query["redirect_uri"] == redirect_uri
        assert query["scope"] == "r_liteprofile r_emailaddress w_member_social"
        assert query["response_type"] == "code"
        assert query["state"] == "state-1"
        assert "code_challenge" not in query
        assert "code_challenge_method" not in query

    def test_twitter_includes_pkce_challenge(self) -> None:
        # Arrange
        config = get_provider_config(Provider.TWITTER, make_settings())

        # Act
        url = build_authorization_url(config, state="s", code_challenge="challenge-xyz")

        # Assert
        assert url.startswith("https://twitter.com/i/oauth2/authorize?")
        query = _query(url)
        assert query["client_id"] == "tw-client"
        assert query["redirect_uri"] == "http://localhost:3000/auth/twitter/callback"
        assert query["scope"] == "tweet.read tweet.write users.read offline.access"
        assert query["response_type"] == "code"
        assert query["code_challenge"] == "challenge-xyz"
        assert query["code_challenge_method"] == "S256"

    def test_pkce_provider_without_challenge_is_rejected(self) -> None:
        config = get_provider_config(Provider.TWITTER, make_settings())

        with pytest.raises(ValueError):
            build_authorization_url(config, state="s")


class TestProviderTable:
    def test_every_provider_has_a_row(self) -> None:
        configs = all_provider_configs(make_settings())

        assert set(configs) == {Provider.LINKEDIN, Provider.TWITTER}
        assert configs[Provider.TWITTER].uses_pkce
        assert configs[Provider.LINKEDIN].requires_client_secret

    def test_token_in_redirect_is_linkedin_only(self) -> None:
        configs = all_provider_configs(make_settings(EXPOSE_TOKEN_IN_REDIRECT=True))

        assert configs[Provider.LINKEDIN].token_in_redirect is True
        assert configs[Provider.TWITTER].token_in_redirect is False
