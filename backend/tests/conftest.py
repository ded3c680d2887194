from typing import Callable, Dict, List, Optional
from unittest.mock import AsyncMock
from urllib.parse import parse_qs

import httpx
import pytest
from fastapi.testclient import TestClient

from socialrelay.core.config import Settings
from socialrelay.core.dependencies import get_caption_generator, get_http_client
from socialrelay.main import create_app
from socialrelay.services.captions import CaptionResult

TWITTER_TOKEN_URL = "https://api.twitter.com/2/oauth2/token"
LINKEDIN_TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
LINKEDIN_ME_URL = "https://api.linkedin.com/v2/me"
LINKEDIN_UGC_URL = "https://api.linkedin.com/v2/ugcPosts"


def make_settings(**overrides) -> Settings:
    values = dict(
        GITHUB_TOKEN="gh-test-token",
        LINKEDIN_CLIENT_ID="li-client",
        LINKEDIN_CLIENT_SECRET="li-secret",
        LINKEDIN_REDIRECT_URI="http://localhost:3000/auth/linkedin/callback",
        TWITTER_CLIENT_ID="tw-client",
        TWITTER_REDIRECT_URI="http://localhost:3000/auth/twitter/callback",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class StubUpstream:
    """Scripted provider endpoints behind an httpx.MockTransport."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[tuple, Callable[[httpx.Request], httpx.Response]] = {
            ("POST", TWITTER_TOKEN_URL): lambda r: httpx.Response(200, json={"access_token": "tok123"}),
            ("POST", LINKEDIN_TOKEN_URL): lambda r: httpx.Response(200, json={"access_token": "li-token"}),
            ("GET", LINKEDIN_ME_URL): lambda r: httpx.Response(200, json={"id": "member-1"}),
            ("POST", LINKEDIN_UGC_URL): lambda r: httpx.Response(201, json={"id": "urn:li:share:1"}),
        }
        self.client = httpx.AsyncClient(transport=httpx.MockTransport(self.handle))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url).split("?")[0]
        route = self.routes.get((request.method, url))
        if route is None:
            return httpx.Response(404, text=f"no stub for {request.method} {url}")
        return route(request)

    def requests_to(self, url: str) -> List[httpx.Request]:
        return [r for r in self.requests if str(r.url).split("?")[0] == url]

    @staticmethod
    def form(request: httpx.Request) -> Dict[str, str]:
        return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def upstream() -> StubUpstream:
    return StubUpstream()


@pytest.fixture
def caption_generator() -> AsyncMock:
    generator = AsyncMock()
    generator.generate.return_value = CaptionResult(captions=["a", "b", "c", "d", "e"])
    return generator


@pytest.fixture
def app(settings, upstream, caption_generator):
    app = create_app(settings)
    app.dependency_overrides[get_http_client] = lambda: upstream.client
    app.dependency_overrides[get_caption_generator] = lambda: caption_generator
    return app


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as client:
        yield client


def session_cookie(client: TestClient, settings: Settings) -> Optional[str]:
    return client.cookies.get(settings.SESSION_COOKIE_NAME)
