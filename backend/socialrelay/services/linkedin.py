"""
LinkedIn content posting
"""
import logging
import httpx
from socialrelay.core.errors import UpstreamAPIError
from socialrelay.core.oauth import fetch_provider_user_id
from socialrelay.core.providers import ProviderConfig

logger = logging.getLogger(__name__)

UGC_POSTS_URL = "https://api.linkedin.com/v2/ugcPosts"


def build_share_payload(author_urn: str, message: str) -> dict:
    return {
        "author": author_urn,
        "lifecycleState": "PUBLISHED",
        "specificContent": {
            "com.linkedin.ugc.ShareContent": {
                "shareCommentary": {"text": message},
                "shareMediaCategory": "NONE",
            },
        },
        "visibility": {
            "com.linkedin.ugc.MemberNetworkVisibility": "PUBLIC",
        },
    }


async def create_text_post(
    config: ProviderConfig,
    access_token: str,
    message: str,
    *,
    client: httpx.AsyncClient,
) -> None:
    """Publish a public text share as the token's member; raises UpstreamAPIError on failure"""
    member_id = await fetch_provider_user_id(config, access_token, client=client)
    author_urn = f"urn:li:person:{member_id}"

    headers = {
        "Authorization": f"Bearer {access_token}",
        "X-Restli-Protocol-Version": "2.0.0",
        "Content-Type": "application/json",
    }
    try:
        response = await client.post(
            UGC_POSTS_URL,
            json=build_share_payload(author_urn, message),
            headers=headers,
        )
    except httpx.HTTPError as e:
        raise UpstreamAPIError("LinkedIn post request failed", detail=str(e) or type(e).__name__) from e

    if not response.is_success:
        raise UpstreamAPIError(
            f"LinkedIn post failed: {response.status_code}",
            detail=response.text,
            status_code=response.status_code,
        )
    logger.info(f"Published LinkedIn post for {author_urn}")
