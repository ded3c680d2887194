"""
Caption generation through an OpenAI-compatible completion API.

The caller always gets five captions: when the API fails or its answer cannot
be parsed, templated captions fill in and a warning says so.
"""
from typing import List, Optional
from dataclasses import dataclass
import logging
import re
from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

CAPTION_COUNT = 5

SYSTEM_PROMPT = "You are a social media expert who creates engaging captions."

WARNING_API_ERROR = "Used fallback captions due to API error"
WARNING_PROCESSING_ERROR = "Used fallback captions due to processing error"
WARNING_PADDED = "Padded with fallback captions"

_NUMBERING = re.compile(r"^\d+[)\.]\s*")


@dataclass
class CaptionResult:
    captions: List[str]
    warning: Optional[str] = None


def fallback_captions(topic: str) -> List[str]:
    return [
        f"✨ Excited about {topic}! #trending",
        f"🌟 Check out this amazing {topic}! #social",
        f"💫 Can't get enough of {topic}! #viral",
        f"🔥 The best {topic} ever! #awesome",
        f"✌️ Loving this {topic}! #perfect",
    ]


def build_prompt(topic: str) -> str:
    return (
        f'Generate exactly {CAPTION_COUNT} creative and engaging social media captions about "{topic}" '
        "as per social media platforms like linkedin, twitter, facebook, instagram"
    )


def parse_captions(text: Optional[str]) -> List[str]:
    """Split completion text into at most five captions, dropping blank lines and list numbering"""
    if not text:
        return []
    captions = (_NUMBERING.sub("", line.strip()).strip() for line in text.split("\n"))
    return [caption for caption in captions if caption][:CAPTION_COUNT]


class CaptionGenerator:
    def __init__(self, client: AsyncOpenAI, model: str):
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings) -> "CaptionGenerator":
        client = AsyncOpenAI(
            base_url=settings.COMPLETION_BASE_URL,
            api_key=settings.GITHUB_TOKEN,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            max_retries=0,
        )
        return cls(client, settings.COMPLETION_MODEL)

    async def generate(self, topic: str) -> CaptionResult:
        defaults = fallback_captions(topic)
        try:
            response = await self.client.chat.completions.create(
                messages=[
                    {"role": "developer", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(topic)},
                ],
                model=self.model,
            )
            generated_text = response.choices[0].message.content
        except Exception as e:
            # Completion failures never reach the caller
            logger.error(f"Completion API error: {e}", exc_info=True)
            return CaptionResult(captions=defaults, warning=WARNING_API_ERROR)

        captions = parse_captions(generated_text)
        if not captions:
            logger.warning("Completion API returned no usable captions")
            return CaptionResult(captions=defaults, warning=WARNING_PROCESSING_ERROR)
        if len(captions) < CAPTION_COUNT:
            logger.info(f"Completion API returned {len(captions)} captions, padding with templates")
            captions = captions + defaults[len(captions):]
            return CaptionResult(captions=captions, warning=WARNING_PADDED)
        return CaptionResult(captions=captions)

    async def close(self) -> None:
        await self.client.close()
