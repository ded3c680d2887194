import json

import httpx
import pytest

from socialrelay.core.errors import UpstreamAPIError
from socialrelay.core.providers import Provider, get_provider_config
from socialrelay.services.linkedin import create_text_post

from ..conftest import LINKEDIN_ME_URL, LINKEDIN_UGC_URL, StubUpstream, make_settings


class TestCreateTextPost:
    def setup_method(self):
        self.config = get_provider_config(Provider.LINKEDIN, make_settings())
        self.upstream = StubUpstream()

    async def test_publishes_as_member(self):
        # Act
        await create_text_post(self.config, "t", "hello world", client=self.upstream.client)

        # Assert
        ugc = self.upstream.requests_to(LINKEDIN_UGC_URL)[0]
        payload = json.loads(ugc.content)
        assert payload["author"] == "urn:li:person:member-1"
        assert payload["lifecycleState"] == "PUBLISHED"
        assert payload["visibility"] == {"com.linkedin.ugc.MemberNetworkVisibility": "PUBLIC"}

    async def test_profile_failure_skips_post(self):
        self.upstream.routes[("GET", LINKEDIN_ME_URL)] = lambda r: httpx.Response(401, text="expired token")

        with pytest.raises(UpstreamAPIError) as exc_info:
            await create_text_post(self.config, "t", "hello", client=self.upstream.client)

        assert exc_info.value.status_code == 401
        assert self.upstream.requests_to(LINKEDIN_UGC_URL) == []

    async def test_network_failure(self):
        def refuse(request):
            raise httpx.ConnectError("refused", request=request)

        self.upstream.routes[("POST", LINKEDIN_UGC_URL)] = refuse

        with pytest.raises(UpstreamAPIError):
            await create_text_post(self.config, "t", "hello", client=self.upstream.client)
